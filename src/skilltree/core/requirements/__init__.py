from .base import Requirement, RequirementContext
from .logical import AndRequirement, OrRequirement
from .points_requirements import (
    AlwaysRequirement,
    ParentPointsRequirement,
    SkillPointsRequirement,
    TotalPointsRequirement,
)
from .registry import RequirementRegistry, get_requirement_registry, register_requirement

__all__ = [
    "AlwaysRequirement",
    "AndRequirement",
    "OrRequirement",
    "ParentPointsRequirement",
    "Requirement",
    "RequirementContext",
    "RequirementRegistry",
    "SkillPointsRequirement",
    "TotalPointsRequirement",
    "get_requirement_registry",
    "register_requirement",
]
