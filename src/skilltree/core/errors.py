from __future__ import annotations

"""Engine error hierarchy."""


class SkillTreeError(RuntimeError):
    """Base class for all skill tree engine errors."""


class StructuralError(SkillTreeError):
    """A forest is not a strict tree: shared sub-tree, cycle, or duplicate id."""

    def __init__(self, skill_id: str, message: str):
        self.skill_id = skill_id
        self.message = message
        super().__init__(f"Malformed skill tree at '{skill_id}': {message}")


class UnknownSkillError(SkillTreeError, KeyError):
    def __init__(self, tree_id: str, skill_id: str):
        self.tree_id = tree_id
        self.skill_id = skill_id
        super().__init__(f"Unknown skill '{skill_id}' in tree '{tree_id}'")

    def __str__(self) -> str:
        return self.args[0]


class LockedSkillError(SkillTreeError):
    def __init__(self, skill_id: str):
        self.skill_id = skill_id
        super().__init__(f"Skill '{skill_id}' is locked")


class SkillMaxedError(SkillTreeError):
    def __init__(self, skill_id: str, max_points: int):
        self.skill_id = skill_id
        self.max_points = max_points
        super().__init__(f"Skill '{skill_id}' already has {max_points} point(s)")


__all__ = [
    "LockedSkillError",
    "SkillMaxedError",
    "SkillTreeError",
    "StructuralError",
    "UnknownSkillError",
]
