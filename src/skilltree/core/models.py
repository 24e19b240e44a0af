"""
Skill tree data models.

These models describe the shape the engine works on:
- Skill: one unlockable node, owning its children exclusively
- SkillTree: a forest of root skills plus per-tree saved state and save callback
- SavedSkillState: the opaque-to-storage state recorded for one skill

Tree Structure:
    legs-push (SkillTree)
    ├── squat               (root, unlocked by default)
    │   ├── front-squat     (needs 1 point in squat)
    │   └── split-squat
    └── lunge
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from skilltree.core.requirements import ParentPointsRequirement, Requirement

NodeState = Literal["locked", "unlocked", "selected"]


class StorageKind(str, Enum):
    """Storage handle passed through to save handlers untouched."""

    LOCAL = "local"
    SESSION = "session"


class SavedSkillState(BaseModel):
    points: int = Field(default=0, ge=0)
    node_state: NodeState = "locked"


SavedData = Dict[str, SavedSkillState]
SaveHandler = Callable[[Any, str, SavedData], None]


class Skill(BaseModel):
    """A node in a skill tree.

    ``title`` and ``tags`` are the searchable labels. A skill without a
    requirement gets ``ParentPointsRequirement`` (unlocked once its parent has a
    point spent; always satisfied for roots).
    """

    id: str
    title: Optional[str] = None
    description: str = ""
    tags: List[str] = Field(default_factory=list)
    max_points: int = Field(default=1, ge=1)
    requirement: Requirement = Field(default_factory=ParentPointsRequirement)
    children: List["Skill"] = Field(default_factory=list)

    @field_validator("id")
    @classmethod
    def _non_blank_id(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Skill id must not be blank")
        return value

    @property
    def searchable_labels(self) -> List[str]:
        labels = [self.title] if self.title else []
        labels.extend(self.tags)
        return labels

    def describe(self) -> str:
        return f"{self.id} ({self.title})" if self.title else self.id


Skill.model_rebuild()


class SkillTree(BaseModel):
    """A forest of root skills managed together under one ``tree_id``."""

    tree_id: str
    title: str = ""
    description: str = ""
    collapsible: bool = False
    skills: List[Skill] = Field(default_factory=list)
    saved_data: Optional[SavedData] = None
    handle_save: Optional[SaveHandler] = Field(default=None, exclude=True)

    model_config = {"arbitrary_types_allowed": True}


__all__ = [
    "NodeState",
    "SaveHandler",
    "SavedData",
    "SavedSkillState",
    "Skill",
    "SkillTree",
    "StorageKind",
]
