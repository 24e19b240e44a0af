from __future__ import annotations

"""Utilities for resolving default tree and saves paths."""

from pathlib import Path


def kb_trees_path(path: str | None) -> str:
    return path or str(Path.cwd() / "kb" / "trees")


def outputs_dir() -> Path:
    return Path.cwd() / "outputs"


def saves_path(path: str | None) -> str:
    """Saves file, ``outputs/saves.yaml`` unless overridden."""
    return path or str(outputs_dir() / "saves.yaml")


__all__ = ["kb_trees_path", "outputs_dir", "saves_path"]
