from __future__ import annotations

import glob
import logging
import os
from typing import Any, Dict, List

import yaml
from pydantic import ValidationError

from skilltree.core.errors import StructuralError
from skilltree.core.file_spec import TreeFileSpec
from skilltree.core.models import SkillTree
from skilltree.core.registries import TreeRegistry
from skilltree.core.traversal import walk_skills
from skilltree.io.loaders.errors import LoaderError
from skilltree.utils.logging import log_calls

logger = logging.getLogger(__name__)


def _read_yaml(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise LoaderError(path, "Invalid YAML", cause=exc) from exc
    return data or {}


def _tree_files(path: str) -> List[str]:
    if os.path.isfile(path):
        return [path]
    files = glob.glob(os.path.join(path, "**", "*.yaml"), recursive=True)
    files += glob.glob(os.path.join(path, "**", "*.yml"), recursive=True)
    return sorted(files)


def load_tree_file(path: str) -> List[SkillTree]:
    """Parse one YAML file into skill trees, checking each forest's structure."""
    data = _read_yaml(path)
    try:
        spec = TreeFileSpec.model_validate(data)
    except (ValidationError, ValueError, TypeError) as exc:
        raise LoaderError(path, "Invalid skill tree definition", cause=exc) from exc
    trees = []
    for tree_spec in spec.trees:
        try:
            tree = tree_spec.build()
            for _ in walk_skills(tree.skills):
                pass
        except (ValidationError, StructuralError) as exc:
            raise LoaderError(path, f"Invalid skill tree '{tree_spec.id}'", cause=exc) from exc
        trees.append(tree)
    return trees


@log_calls()
def load_trees(path: str, registry: TreeRegistry) -> None:
    """Load every skill tree under ``path`` (a directory tree or a single file).

    Expected format:
    trees:
      - id: legs-push
        title: Legs (push)
        skills:
          - id: squat
            title: Squat
            children:
              - id: front-squat
                title: Front Squat
    """
    if not os.path.exists(path):
        return
    for fp in _tree_files(path):
        for tree in load_tree_file(fp):
            try:
                registry.add(tree)
            except ValueError as exc:
                raise LoaderError(fp, f"Failed to register skill tree '{tree.tree_id}'", cause=exc) from exc
            logger.info("Loaded tree %s from %s", tree.tree_id, fp)
