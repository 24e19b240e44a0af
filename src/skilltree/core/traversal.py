from __future__ import annotations

"""Structural traversal over skill forests.

Every walk keeps a visited set so a shared sub-tree, a cycle or a duplicate id
raises ``StructuralError`` instead of looping or double counting.
"""

from typing import Dict, Iterator, List, Optional, Sequence, Set, Tuple

from skilltree.core.errors import StructuralError
from skilltree.core.models import Skill

SkillWithParent = Tuple[Skill, Optional[Skill]]


def walk_skills(skills: Sequence[Skill]) -> Iterator[SkillWithParent]:
    """Yield ``(skill, parent)`` pairs in pre-order; roots have ``parent=None``.

    A parent is always yielded before any of its children.
    """
    seen_nodes: Set[int] = set()
    seen_ids: Set[str] = set()
    stack: List[SkillWithParent] = [(skill, None) for skill in reversed(skills)]
    while stack:
        skill, parent = stack.pop()
        if id(skill) in seen_nodes:
            raise StructuralError(skill.id, "node reached twice (shared sub-tree or cycle)")
        if skill.id in seen_ids:
            raise StructuralError(skill.id, "duplicate skill id")
        seen_nodes.add(id(skill))
        seen_ids.add(skill.id)
        yield skill, parent
        stack.extend((child, skill) for child in reversed(skill.children))


def index_skills(skills: Sequence[Skill]) -> Dict[str, SkillWithParent]:
    """Map skill id to ``(skill, parent)``, validating the whole forest first."""
    return {skill.id: (skill, parent) for skill, parent in walk_skills(skills)}


__all__ = ["SkillWithParent", "index_skills", "walk_skills"]
