"""
Skill tree state engine.

Components:
- Skill / SkillTree: the forest data model
- compute_unlocked: unlock propagation from roots down
- count_nodes / NodeCountAggregator: structural node counting
- FilterIndex: token -> tree id search index
- TreeSession: per-tree state, save callback and mount lifecycle
"""

from skilltree.core.errors import (
    LockedSkillError,
    SkillMaxedError,
    SkillTreeError,
    StructuralError,
    UnknownSkillError,
)
from skilltree.core.models import NodeState, SavedSkillState, Skill, SkillTree, StorageKind
from skilltree.core.counting import NodeCountAggregator, count_nodes
from skilltree.core.filter_index import FilterIndex, get_filter_index
from skilltree.core.unlock import compute_node_states, compute_unlocked, is_unlocked
from skilltree.core.session import TreeSession

__all__ = [
    "FilterIndex",
    "LockedSkillError",
    "NodeCountAggregator",
    "NodeState",
    "SavedSkillState",
    "Skill",
    "SkillMaxedError",
    "SkillTree",
    "SkillTreeError",
    "StorageKind",
    "StructuralError",
    "TreeSession",
    "UnknownSkillError",
    "compute_node_states",
    "compute_unlocked",
    "count_nodes",
    "get_filter_index",
    "is_unlocked",
]
