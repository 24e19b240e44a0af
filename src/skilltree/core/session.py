"""
Tree session: the state holder for one mounted skill tree.

A session seeds its points from ``SkillTree.saved_data``, keeps the unlock
invariant after every change and hands the resulting state to the tree's
``handle_save`` callback. Mounting registers the tree with the filter index and
the node count aggregator; unmounting withdraws it from both.

Example:
    with TreeSession(tree, aggregator=aggregator) as session:
        session.spend_point("squat")
        session.node_state("front-squat")  # "unlocked"
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from skilltree.core.counting import NodeCountAggregator
from skilltree.core.errors import LockedSkillError, SkillMaxedError, UnknownSkillError
from skilltree.core.filter_index import FilterIndex, get_filter_index
from skilltree.core.models import NodeState, SavedData, SavedSkillState, Skill, SkillTree, StorageKind
from skilltree.core.traversal import SkillWithParent, index_skills
from skilltree.core.unlock import compute_node_states, prune_locked_points

logger = logging.getLogger(__name__)


class TreeSession:
    def __init__(
        self,
        tree: SkillTree,
        *,
        storage: Any = StorageKind.LOCAL,
        filter_index: Optional[FilterIndex] = None,
        aggregator: Optional[NodeCountAggregator] = None,
    ):
        """
        Create a session for ``tree``.

        Args:
            tree: The tree to manage
            storage: Opaque storage handle forwarded to ``handle_save``
            filter_index: Index to register with (defaults to the process-wide one)
            aggregator: Shared node count aggregator (defaults to a private one)

        Raises:
            StructuralError: If the tree is not a strict forest
        """
        self.tree = tree
        self.storage = storage
        self.filter_index = filter_index if filter_index is not None else get_filter_index()
        self.aggregator = aggregator if aggregator is not None else NodeCountAggregator()
        self._index: Dict[str, SkillWithParent] = index_skills(tree.skills)
        self._mounted = False
        self._points: Dict[str, int] = {}
        self._states: Dict[str, NodeState] = {}
        self._seed(tree.saved_data)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def tree_id(self) -> str:
        return self.tree.tree_id

    @property
    def mounted(self) -> bool:
        return self._mounted

    def mount(self) -> "TreeSession":
        """Register the tree for searching and counting. Call before first render."""
        self.filter_index.register(self.tree_id, self.tree.skills)
        self.aggregator.contribute(self.tree_id, self.tree.skills)
        self._mounted = True
        logger.info("Mounted tree %s (%d skill(s))", self.tree_id, self.node_count)
        return self

    def unmount(self) -> None:
        """Withdraw the tree from the index and the aggregate. Safe to call twice."""
        if not self._mounted:
            return
        self.filter_index.unregister(self.tree_id)
        self.aggregator.withdraw(self.tree_id)
        self._mounted = False
        logger.info("Unmounted tree %s", self.tree_id)

    def __enter__(self) -> "TreeSession":
        return self.mount()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.unmount()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def node_count(self) -> int:
        return len(self._index)

    @property
    def selected_count(self) -> int:
        return sum(1 for state in self._states.values() if state == "selected")

    @property
    def total_points(self) -> int:
        return sum(self._points.values())

    def skill(self, skill_id: str) -> Skill:
        if skill_id not in self._index:
            raise UnknownSkillError(self.tree_id, skill_id)
        return self._index[skill_id][0]

    def parent_of(self, skill_id: str) -> Optional[Skill]:
        self.skill(skill_id)
        return self._index[skill_id][1]

    def points(self, skill_id: str) -> int:
        self.skill(skill_id)
        return self._points.get(skill_id, 0)

    def node_state(self, skill_id: str) -> NodeState:
        self.skill(skill_id)
        return self._states[skill_id]

    def is_unlocked(self, skill_id: str) -> bool:
        return self.node_state(skill_id) != "locked"

    def node_states(self) -> Dict[str, NodeState]:
        return dict(self._states)

    def state(self) -> SavedData:
        """The per-skill state handed to ``handle_save``."""
        return {
            skill_id: SavedSkillState(points=self._points.get(skill_id, 0), node_state=node_state)
            for skill_id, node_state in self._states.items()
        }

    # ------------------------------------------------------------------
    # State changes
    # ------------------------------------------------------------------

    def spend_point(self, skill_id: str) -> int:
        """Spend one point on an unlocked skill; returns its new point total."""
        skill = self.skill(skill_id)
        if self._states[skill_id] == "locked":
            raise LockedSkillError(skill_id)
        current = self._points.get(skill_id, 0)
        if current >= skill.max_points:
            raise SkillMaxedError(skill_id, skill.max_points)
        self._points[skill_id] = current + 1
        self._commit()
        return self._points.get(skill_id, 0)

    def refund_point(self, skill_id: str) -> int:
        """Take one point back; dependants that relock lose their points too."""
        current = self.points(skill_id)
        if current == 0:
            return 0
        self._points[skill_id] = current - 1
        self._commit()
        return self._points.get(skill_id, 0)

    def toggle(self, skill_id: str) -> NodeState:
        """Select an unlocked skill, or clear every point on a selected one."""
        if self.points(skill_id) > 0:
            self._points[skill_id] = 0
            self._commit()
        else:
            self.spend_point(skill_id)
        return self._states[skill_id]

    def reset(self) -> None:
        if not self._points:
            return
        self._points = {}
        self._commit()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _seed(self, saved_data: Optional[SavedData]) -> None:
        saved_points: Dict[str, int] = {}
        for skill_id, saved in (saved_data or {}).items():
            if skill_id not in self._index:
                logger.warning("Ignoring saved state for unknown skill %s in tree %s", skill_id, self.tree_id)
                continue
            max_points = self._index[skill_id][0].max_points
            if saved.points > max_points:
                logger.warning(
                    "Saved points for skill %s in tree %s clamped from %d to %d",
                    skill_id,
                    self.tree_id,
                    saved.points,
                    max_points,
                )
            saved_points[skill_id] = min(saved.points, max_points)
        self._points = prune_locked_points(self.tree.skills, saved_points)
        dropped = sorted(k for k, v in saved_points.items() if v > 0 and k not in self._points)
        if dropped:
            logger.warning("Saved points on locked skills dropped in tree %s: %s", self.tree_id, ", ".join(dropped))
        self._states = compute_node_states(self.tree.skills, self._points)

    def _commit(self) -> None:
        self._points = prune_locked_points(self.tree.skills, self._points)
        self._states = compute_node_states(self.tree.skills, self._points)
        handler = self.tree.handle_save
        if handler is None:
            return
        logger.info("Saving tree %s (%d point(s) spent)", self.tree_id, self.total_points)
        handler(self.storage, self.tree_id, self.state())


__all__ = ["TreeSession"]
