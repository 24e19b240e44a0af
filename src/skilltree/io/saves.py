from __future__ import annotations

"""YAML-backed saved state: read saved per-tree state and persist it on change."""

import logging
import os
from pathlib import Path
from typing import Any, Dict

import yaml
from pydantic import ValidationError

from skilltree.core.file_spec import SavesFileSpec
from skilltree.core.models import SavedData
from skilltree.io.loaders.errors import LoaderError

logger = logging.getLogger(__name__)


def load_saves(path: str) -> Dict[str, SavedData]:
    """Return tree id -> saved data. A missing file means nothing was saved yet."""
    if not os.path.exists(path):
        return {}
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise LoaderError(path, "Invalid YAML", cause=exc) from exc
    try:
        spec = SavesFileSpec.model_validate(data)
    except ValidationError as exc:
        raise LoaderError(path, "Invalid saves file", cause=exc) from exc
    return spec.trees


class YamlSaveHandler:
    """``handle_save`` callback that writes every tree's state into one YAML file.

    The storage handle is recorded alongside the file name so trees saved to
    different storages do not share a file.
    """

    def __init__(self, path: str):
        self.path = path

    def path_for(self, storage: Any) -> str:
        kind = getattr(storage, "value", storage)
        if kind in (None, "local"):
            return self.path
        p = Path(self.path)
        return str(p.with_name(f"{p.stem}.{kind}{p.suffix}"))

    def __call__(self, storage: Any, tree_id: str, state: SavedData) -> None:
        target = self.path_for(storage)
        saves = load_saves(target)
        saves[tree_id] = state
        payload = {
            "trees": {
                tid: {skill_id: saved.model_dump() for skill_id, saved in skills.items()}
                for tid, skills in sorted(saves.items())
            }
        }
        Path(target).parent.mkdir(parents=True, exist_ok=True)
        with open(target, "w", encoding="utf-8") as f:
            yaml.safe_dump(payload, f, sort_keys=False)
        logger.info("Wrote saved state for tree %s to %s", tree_id, target)


__all__ = ["YamlSaveHandler", "load_saves"]
