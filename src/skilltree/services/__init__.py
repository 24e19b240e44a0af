"""Service layer: presentation-side orchestration over the engine core."""

from __future__ import annotations

from .group import SkillTreeGroup
from .visibility import VisibilityController

__all__ = [
    "SkillTreeGroup",
    "VisibilityController",
]
