from __future__ import annotations

from typing import List

from skilltree.core.counting import count_nodes
from skilltree.core.errors import StructuralError
from skilltree.core.models import SkillTree
from skilltree.core.traversal import walk_skills

from .registry_base import NameRegistry


class TreeRegistry(NameRegistry[SkillTree]):
    """Loaded skill trees keyed by tree id."""

    model_config = {"arbitrary_types_allowed": True}

    def add(self, tree: SkillTree) -> None:
        self.register(tree.tree_id, tree)

    def total_nodes(self) -> int:
        return sum(count_nodes(tree.skills) for tree in self.all())

    def validate_structure(self) -> List[str]:
        """Return one message per tree whose skills do not form a strict forest."""
        errors: List[str] = []
        for tree in self.all():
            try:
                for _ in walk_skills(tree.skills):
                    pass
            except StructuralError as exc:
                errors.append(f"Tree {tree.tree_id}: {exc}")
        return errors

    def validate_references(self) -> List[str]:
        """Skill-points requirements must name a skill of the same tree."""
        from skilltree.core.registries.validators import RequirementReferenceValidator  # avoid cycles

        return RequirementReferenceValidator(self).validate_all()
