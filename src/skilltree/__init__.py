"""Skill tree state engine: unlock propagation, node counting and cross-tree search."""

from skilltree.core import (
    FilterIndex,
    NodeCountAggregator,
    SavedSkillState,
    Skill,
    SkillTree,
    StorageKind,
    StructuralError,
    TreeSession,
    compute_unlocked,
    count_nodes,
    get_filter_index,
)

__all__ = [
    "FilterIndex",
    "NodeCountAggregator",
    "SavedSkillState",
    "Skill",
    "SkillTree",
    "StorageKind",
    "StructuralError",
    "TreeSession",
    "compute_unlocked",
    "count_nodes",
    "get_filter_index",
]
