"""
Point-based requirements.

Every requirement only inspects the node-local view handed in through
``RequirementContext``; ancestor gating is done by the propagation rule,
never by a requirement.
"""

from __future__ import annotations

from pydantic import Field

from .base import Requirement, RequirementContext


class AlwaysRequirement(Requirement):
    """Trivially satisfied."""

    def evaluate(self, context: RequirementContext) -> bool:
        return True

    def describe(self) -> str:
        return "always"


class ParentPointsRequirement(Requirement):
    """Parent has at least ``min_points`` points spent.

    This is the default requirement of a skill. A root has no parent, so the
    requirement holds for it, which makes roots start out unlocked.
    """

    min_points: int = Field(default=1, ge=0)

    def evaluate(self, context: RequirementContext) -> bool:
        if context.is_root:
            return True
        return context.points_for(context.parent.id) >= self.min_points

    def describe(self) -> str:
        return f"parent points >= {self.min_points}"


class SkillPointsRequirement(Requirement):
    """A named skill of the same tree has at least ``min_points`` points."""

    skill_id: str
    min_points: int = Field(default=1, ge=0)

    def evaluate(self, context: RequirementContext) -> bool:
        return context.points_for(self.skill_id) >= self.min_points

    def describe(self) -> str:
        return f"{self.skill_id} points >= {self.min_points}"


class TotalPointsRequirement(Requirement):
    """At least ``min_points`` points spent on the other skills of the tree.

    The skill's own points are left out, so a skill can never keep itself
    unlocked once the points that opened it are refunded.
    """

    min_points: int = Field(ge=0)

    def evaluate(self, context: RequirementContext) -> bool:
        return context.points_elsewhere() >= self.min_points

    def describe(self) -> str:
        return f"points elsewhere in tree >= {self.min_points}"
