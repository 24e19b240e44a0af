"""
Logical requirements.

Compound AND/OR over nested requirements, e.g. a capstone skill that needs
two separate branches to be invested in.

Example YAML:
    requirement:
      type: and
      requirements:
        - type: skill_points
          skill_id: squat
        - type: total_points
          min_points: 4
"""

from __future__ import annotations

from typing import List

from .base import Requirement, RequirementContext


class AndRequirement(Requirement):
    """All nested requirements hold. An empty AND holds."""

    requirements: List[Requirement]

    def evaluate(self, context: RequirementContext) -> bool:
        return all(r.evaluate(context) for r in self.requirements)

    def describe(self) -> str:
        if not self.requirements:
            return "AND()"
        return "(" + " AND ".join(r.describe() for r in self.requirements) + ")"


class OrRequirement(Requirement):
    """At least one nested requirement holds. An empty OR does not hold."""

    requirements: List[Requirement]

    def evaluate(self, context: RequirementContext) -> bool:
        return any(r.evaluate(context) for r in self.requirements)

    def describe(self) -> str:
        if not self.requirements:
            return "OR()"
        return "(" + " OR ".join(r.describe() for r in self.requirements) + ")"
