from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class RequirementContext(BaseModel):
    """What a requirement may look at: the node, its parent and points spent."""

    skill: Any
    parent: Optional[Any] = None
    points: Dict[str, int] = Field(default_factory=dict)

    model_config = {"arbitrary_types_allowed": True}

    @property
    def is_root(self) -> bool:
        return self.parent is None

    def points_for(self, skill_id: str) -> int:
        return self.points.get(skill_id, 0)

    def total_points(self) -> int:
        return sum(self.points.values())

    def points_elsewhere(self) -> int:
        """Points spent on every skill except the one being evaluated."""
        return self.total_points() - self.points_for(self.skill.id)


class Requirement(BaseModel, ABC):
    """Base class for node-local unlock requirements."""

    @abstractmethod
    def evaluate(self, context: RequirementContext) -> bool:
        raise NotImplementedError

    def describe(self) -> str:
        return self.__class__.__name__
