from __future__ import annotations

from typing import Iterable, List, Set

from skilltree.core.errors import StructuralError
from skilltree.core.models import SkillTree
from skilltree.core.requirements import AndRequirement, OrRequirement, Requirement, SkillPointsRequirement
from skilltree.core.traversal import walk_skills


def _referenced_skill_ids(requirement: Requirement) -> Iterable[str]:
    if isinstance(requirement, SkillPointsRequirement):
        yield requirement.skill_id
    elif isinstance(requirement, (AndRequirement, OrRequirement)):
        for nested in requirement.requirements:
            yield from _referenced_skill_ids(nested)


class RequirementReferenceValidator:
    def __init__(self, trees):
        self.trees = trees

    def validate_all(self) -> List[str]:
        errors: List[str] = []
        for tree in self.trees.all():
            errors.extend(self._validate_tree(tree))
        return errors

    def _validate_tree(self, tree: SkillTree) -> List[str]:
        try:
            pairs = list(walk_skills(tree.skills))
        except StructuralError:
            # reported by TreeRegistry.validate_structure
            return []
        known: Set[str] = {skill.id for skill, _parent in pairs}
        errors: List[str] = []
        for skill, _parent in pairs:
            for ref in _referenced_skill_ids(skill.requirement):
                if ref not in known:
                    errors.append(f"Tree {tree.tree_id}: skill {skill.id} requires unknown skill {ref}")
                elif ref == skill.id:
                    errors.append(f"Tree {tree.tree_id}: skill {skill.id} requires points in itself")
        return errors
