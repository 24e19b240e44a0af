"""Skill tree group: several mounted trees sharing one aggregate and one index."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from skilltree.core.counting import NodeCountAggregator
from skilltree.core.filter_index import FilterIndex, get_filter_index
from skilltree.core.models import SkillTree, StorageKind
from skilltree.core.session import TreeSession
from skilltree.services.visibility import VisibilityController

logger = logging.getLogger(__name__)


class SkillTreeGroup:
    """Mounts trees side by side and exposes group-wide totals."""

    def __init__(
        self,
        filter_index: Optional[FilterIndex] = None,
        aggregator: Optional[NodeCountAggregator] = None,
        storage: Any = StorageKind.LOCAL,
    ):
        self.filter_index = filter_index if filter_index is not None else get_filter_index()
        self.aggregator = aggregator if aggregator is not None else NodeCountAggregator()
        self.storage = storage
        self.visibility = VisibilityController(self.filter_index)
        self._sessions: Dict[str, TreeSession] = {}

    def mount(self, tree: SkillTree) -> TreeSession:
        if tree.tree_id in self._sessions:
            raise ValueError(f"Tree already mounted: {tree.tree_id}")
        session = TreeSession(
            tree,
            storage=self.storage,
            filter_index=self.filter_index,
            aggregator=self.aggregator,
        ).mount()
        self._sessions[tree.tree_id] = session
        self.visibility.track(tree)
        return session

    def unmount(self, tree_id: str) -> None:
        session = self._sessions.pop(tree_id, None)
        if session is None:
            return
        self.visibility.untrack(tree_id)
        session.unmount()

    def unmount_all(self) -> None:
        for tree_id in list(self._sessions):
            self.unmount(tree_id)

    def session(self, tree_id: str) -> TreeSession:
        if tree_id not in self._sessions:
            available = ", ".join(sorted(self._sessions))
            raise KeyError(f"Unknown: {tree_id}. Available: {available}")
        return self._sessions[tree_id]

    def sessions(self) -> List[TreeSession]:
        return list(self._sessions.values())

    @property
    def total_count(self) -> int:
        return self.aggregator.total

    @property
    def selected_count(self) -> int:
        return sum(session.selected_count for session in self._sessions.values())

    def reset_all(self) -> None:
        for session in self._sessions.values():
            session.reset()
        logger.info("Reset %d tree(s)", len(self._sessions))


__all__ = ["SkillTreeGroup"]
