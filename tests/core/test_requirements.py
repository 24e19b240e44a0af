"""
Tests for requirement types and their YAML specs.
"""

import pytest
from pydantic import BaseModel

from skilltree.core.models import Skill
from skilltree.core.requirements import (
    AlwaysRequirement,
    AndRequirement,
    OrRequirement,
    ParentPointsRequirement,
    Requirement,
    RequirementContext,
    SkillPointsRequirement,
    TotalPointsRequirement,
    get_requirement_registry,
)
from skilltree.core.requirements.specs import (
    build_requirement_from_raw,
    parse_requirement_spec,
)


def _ctx(points=None, parent=None):
    return RequirementContext(skill=Skill(id="s"), parent=parent, points=points or {})


class TestRequirementTypes:
    def test_always(self):
        assert AlwaysRequirement().evaluate(_ctx()) is True

    def test_parent_points_for_root(self):
        assert ParentPointsRequirement(min_points=3).evaluate(_ctx()) is True

    def test_parent_points_for_child(self):
        parent = Skill(id="p")
        requirement = ParentPointsRequirement(min_points=2)

        assert requirement.evaluate(_ctx({"p": 1}, parent)) is False
        assert requirement.evaluate(_ctx({"p": 2}, parent)) is True

    def test_skill_points(self):
        requirement = SkillPointsRequirement(skill_id="other", min_points=1)

        assert requirement.evaluate(_ctx()) is False
        assert requirement.evaluate(_ctx({"other": 1})) is True

    def test_total_points(self):
        requirement = TotalPointsRequirement(min_points=3)

        assert requirement.evaluate(_ctx({"a": 1, "b": 1})) is False
        assert requirement.evaluate(_ctx({"a": 1, "b": 2})) is True

    def test_total_points_ignores_own_points(self):
        requirement = TotalPointsRequirement(min_points=2)

        assert requirement.evaluate(_ctx({"s": 5, "a": 1})) is False
        assert requirement.evaluate(_ctx({"s": 5, "a": 2})) is True

    def test_and_or(self):
        yes = AlwaysRequirement()
        no = SkillPointsRequirement(skill_id="missing")

        assert AndRequirement(requirements=[yes, yes]).evaluate(_ctx()) is True
        assert AndRequirement(requirements=[yes, no]).evaluate(_ctx()) is False
        assert OrRequirement(requirements=[no, yes]).evaluate(_ctx()) is True
        assert OrRequirement(requirements=[]).evaluate(_ctx()) is False

    def test_describe(self):
        requirement = AndRequirement(
            requirements=[ParentPointsRequirement(), SkillPointsRequirement(skill_id="squat", min_points=2)]
        )
        assert requirement.describe() == "(parent points >= 1 AND squat points >= 2)"


class TestRequirementSpecs:
    def test_missing_requirement_defaults_to_parent_points(self):
        requirement = build_requirement_from_raw(None)
        assert isinstance(requirement, ParentPointsRequirement)
        assert requirement.min_points == 1

    def test_shorthand_string(self):
        assert isinstance(build_requirement_from_raw("always"), AlwaysRequirement)

    def test_nested_compound(self):
        requirement = build_requirement_from_raw(
            {
                "type": "or",
                "requirements": [
                    {"type": "total_points", "min_points": 4},
                    {"type": "and", "requirements": [{"type": "skill_points", "skill_id": "squat"}]},
                ],
            }
        )

        assert isinstance(requirement, OrRequirement)
        assert isinstance(requirement.requirements[1], AndRequirement)
        assert requirement.evaluate(_ctx({"squat": 1})) is True

    def test_unknown_type(self):
        with pytest.raises(ValueError, match="Unknown requirement type"):
            parse_requirement_spec({"type": "level"})

    def test_missing_type(self):
        with pytest.raises(ValueError, match="must have a 'type'"):
            parse_requirement_spec({"min_points": 1})

    def test_extra_fields_rejected(self):
        with pytest.raises(ValueError):
            parse_requirement_spec({"type": "always", "min_points": 1})

    def test_prebuilt_requirement_passes_through(self):
        requirement = TotalPointsRequirement(min_points=1)
        assert build_requirement_from_raw(requirement) is requirement

    def test_builtin_types_registered(self):
        assert get_requirement_registry().list_registered_types() == [
            "always",
            "and",
            "or",
            "parent_points",
            "skill_points",
            "total_points",
        ]


def test_custom_requirement_type_can_be_registered():
    class EvenPointsRequirement(Requirement):
        def evaluate(self, context: RequirementContext) -> bool:
            return context.total_points() % 2 == 0

    class EvenPointsSpec(BaseModel):
        type: str

    registry = get_requirement_registry()
    registry.register("even_points", EvenPointsSpec, lambda spec: EvenPointsRequirement())
    try:
        requirement = build_requirement_from_raw({"type": "even_points"})
        assert requirement.evaluate(_ctx({"a": 2})) is True
    finally:
        registry._spec_map.pop("even_points")
        registry._builder_map.pop("EvenPointsSpec")
