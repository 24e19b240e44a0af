from __future__ import annotations

"""Parsing helpers that turn raw YAML requirement mappings into runtime requirements.

Built-in types:

    always          trivially satisfied
    parent_points   parent has >= min_points (default for every skill)
    skill_points    skill_id has >= min_points
    total_points    whole tree has >= min_points
    and / or        nested ``requirements`` list
"""

from typing import Any, Dict, List, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .base import Requirement
from .logical import AndRequirement, OrRequirement
from .points_requirements import (
    AlwaysRequirement,
    ParentPointsRequirement,
    SkillPointsRequirement,
    TotalPointsRequirement,
)
from .registry import get_requirement_registry

# ---------------------------------------------------------------------------
# Pydantic specs
# ---------------------------------------------------------------------------


class RequirementSpec(BaseModel):
    model_config = ConfigDict(extra="forbid")

    type: str


class AlwaysRequirementSpec(RequirementSpec):
    type: Literal["always"]


class ParentPointsRequirementSpec(RequirementSpec):
    type: Literal["parent_points"]
    min_points: int = Field(default=1, ge=0)


class SkillPointsRequirementSpec(RequirementSpec):
    type: Literal["skill_points"]
    skill_id: str
    min_points: int = Field(default=1, ge=0)


class TotalPointsRequirementSpec(RequirementSpec):
    type: Literal["total_points"]
    min_points: int = Field(ge=0)


class _CompoundRequirementSpec(RequirementSpec):
    requirements: List[RequirementSpec] = Field(default_factory=list)

    @field_validator("requirements", mode="before")
    @classmethod
    def _parse_nested(cls, value: Any) -> List[RequirementSpec]:
        if value is None:
            return []
        if isinstance(value, (list, tuple)):
            return [parse_requirement_spec(item) for item in value]
        raise TypeError("Compound requirements take a list of requirements")


class AndRequirementSpec(_CompoundRequirementSpec):
    type: Literal["and"]


class OrRequirementSpec(_CompoundRequirementSpec):
    type: Literal["or"]


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------


def _build_and(spec: AndRequirementSpec) -> Requirement:
    return AndRequirement(requirements=[build_requirement(r) for r in spec.requirements])


def _build_or(spec: OrRequirementSpec) -> Requirement:
    return OrRequirement(requirements=[build_requirement(r) for r in spec.requirements])


def _register_builtin_types() -> None:
    registry = get_requirement_registry()
    registry.register("always", AlwaysRequirementSpec, lambda spec: AlwaysRequirement())
    registry.register(
        "parent_points",
        ParentPointsRequirementSpec,
        lambda spec: ParentPointsRequirement(min_points=spec.min_points),
    )
    registry.register(
        "skill_points",
        SkillPointsRequirementSpec,
        lambda spec: SkillPointsRequirement(skill_id=spec.skill_id, min_points=spec.min_points),
    )
    registry.register(
        "total_points",
        TotalPointsRequirementSpec,
        lambda spec: TotalPointsRequirement(min_points=spec.min_points),
    )
    registry.register("and", AndRequirementSpec, _build_and)
    registry.register("or", OrRequirementSpec, _build_or)


# ---------------------------------------------------------------------------
# Spec parsing
# ---------------------------------------------------------------------------


def parse_requirement_spec(data: Any) -> RequirementSpec:
    if isinstance(data, RequirementSpec):
        return data
    if isinstance(data, str):
        # shorthand: `requirement: always`
        data = {"type": data}
    if not isinstance(data, dict):
        raise TypeError(f"Expected mapping for requirement, got {type(data).__name__}")
    return get_requirement_registry().parse_spec(data)


def build_requirement(spec: RequirementSpec) -> Requirement:
    return get_requirement_registry().build_requirement(spec)


def build_requirement_from_raw(data: Any) -> Requirement:
    """Accept raw mappings, shorthand strings or pre-built requirements."""
    if isinstance(data, Requirement):
        return data
    if data is None:
        return ParentPointsRequirement()
    return build_requirement(parse_requirement_spec(data))


_register_builtin_types()


__all__ = [
    "AlwaysRequirementSpec",
    "AndRequirementSpec",
    "OrRequirementSpec",
    "ParentPointsRequirementSpec",
    "RequirementSpec",
    "SkillPointsRequirementSpec",
    "TotalPointsRequirementSpec",
    "build_requirement",
    "build_requirement_from_raw",
    "parse_requirement_spec",
]
