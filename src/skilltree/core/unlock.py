"""
Unlock propagation.

A node is unlocked iff its parent is unlocked (roots are seeded as if their
parent were) AND its own requirement holds. Requirements below a locked node
are never evaluated.
"""

from __future__ import annotations

import logging
from typing import Dict, Mapping, Optional, Sequence

from skilltree.core.models import NodeState, Skill
from skilltree.core.requirements import RequirementContext
from skilltree.core.traversal import walk_skills

logger = logging.getLogger(__name__)

ROOT_PARENT_UNLOCKED = True


def is_unlocked(
    skill: Skill,
    parent_unlocked: bool,
    points: Optional[Mapping[str, int]] = None,
    parent: Optional[Skill] = None,
) -> bool:
    """Whether ``skill`` is unlocked given its parent's state and the points spent."""
    if not parent_unlocked:
        return False
    context = RequirementContext(skill=skill, parent=parent, points=dict(points or {}))
    return skill.requirement.evaluate(context)


def compute_unlocked(skills: Sequence[Skill], points: Optional[Mapping[str, int]] = None) -> Dict[str, bool]:
    """Unlocked flag for every node of the forest, keyed by skill id."""
    spent = dict(points or {})
    unlocked: Dict[str, bool] = {}
    for skill, parent in walk_skills(skills):
        parent_unlocked = ROOT_PARENT_UNLOCKED if parent is None else unlocked[parent.id]
        unlocked[skill.id] = is_unlocked(skill, parent_unlocked, spent, parent)
    return unlocked


def compute_node_states(
    skills: Sequence[Skill],
    points: Optional[Mapping[str, int]] = None,
) -> Dict[str, NodeState]:
    spent = dict(points or {})
    states: Dict[str, NodeState] = {}
    for skill_id, unlocked in compute_unlocked(skills, spent).items():
        if not unlocked:
            states[skill_id] = "locked"
        elif spent.get(skill_id, 0) > 0:
            states[skill_id] = "selected"
        else:
            states[skill_id] = "unlocked"
    return states


def prune_locked_points(skills: Sequence[Skill], points: Mapping[str, int]) -> Dict[str, int]:
    """Drop points held by locked or unknown skills until the state is consistent.

    Dropping points can lock further nodes, so this repeats until nothing changes.
    """
    spent = {skill_id: value for skill_id, value in points.items() if value > 0}
    while True:
        unlocked = compute_unlocked(skills, spent)
        stale = [skill_id for skill_id in spent if not unlocked.get(skill_id, False)]
        if not stale:
            return spent
        logger.debug("Clearing points on locked skills: %s", ", ".join(sorted(stale)))
        for skill_id in stale:
            del spent[skill_id]


__all__ = [
    "ROOT_PARENT_UNLOCKED",
    "compute_node_states",
    "compute_unlocked",
    "is_unlocked",
    "prune_locked_points",
]
