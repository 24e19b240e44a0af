"""
Visibility controller: decides which mounted trees are shown.

Sits outside the engine core. It reads the filter index synchronously and
notifies subscribers whenever a tree's visibility may have changed, the way a
presentation layer would re-render.

A tree is visible when it matches the current filter term and is not
collapsed. Changing the filter expands every tree it matches; collapsing only
applies to trees marked ``collapsible``.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional, Set

from skilltree.core.filter_index import FilterIndex, get_filter_index, normalize_term
from skilltree.core.models import SkillTree

logger = logging.getLogger(__name__)

VisibilityListener = Callable[[str, bool], None]


class VisibilityController:
    def __init__(self, filter_index: Optional[FilterIndex] = None):
        self.filter_index = filter_index if filter_index is not None else get_filter_index()
        self._term = ""
        self._collapsible: Dict[str, bool] = {}
        self._collapsed: Set[str] = set()
        self._listeners: List[VisibilityListener] = []

    @property
    def term(self) -> str:
        return self._term

    def track(self, tree: SkillTree) -> None:
        self._collapsible[tree.tree_id] = tree.collapsible
        self._notify([tree.tree_id])

    def untrack(self, tree_id: str) -> None:
        self._collapsible.pop(tree_id, None)
        self._collapsed.discard(tree_id)

    def tracked(self) -> List[str]:
        return sorted(self._collapsible)

    def subscribe(self, listener: VisibilityListener) -> Callable[[], None]:
        """Register ``listener(tree_id, visible)``; returns an unsubscribe function."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def set_filter(self, term: Optional[str]) -> Set[str]:
        """Apply a search term; returns the tracked trees that are now visible."""
        self._term = normalize_term(term)
        matches = self.filter_index.query(self._term)
        self._collapsed -= matches
        logger.debug("Filter %r matches %d tree(s)", self._term, len(matches))
        self._notify(self.tracked())
        return self.visible_trees()

    def toggle_collapsed(self, tree_id: str) -> bool:
        """Collapse or expand a collapsible tree; returns its visibility afterwards."""
        if not self._collapsible.get(tree_id, False):
            return self.is_visible(tree_id)
        if tree_id in self._collapsed:
            self._collapsed.discard(tree_id)
        else:
            self._collapsed.add(tree_id)
        self._notify([tree_id])
        return self.is_visible(tree_id)

    def is_collapsed(self, tree_id: str) -> bool:
        return tree_id in self._collapsed

    def is_visible(self, tree_id: str) -> bool:
        if tree_id in self._collapsed:
            return False
        return tree_id in self.filter_index.query(self._term)

    def visible_trees(self) -> Set[str]:
        matches = self.filter_index.query(self._term)
        return {tree_id for tree_id in self._collapsible if tree_id in matches and tree_id not in self._collapsed}

    def _notify(self, tree_ids: List[str]) -> None:
        if not self._listeners:
            return
        visible = self.visible_trees()
        for tree_id in tree_ids:
            for listener in list(self._listeners):
                listener(tree_id, tree_id in visible)


__all__ = ["VisibilityController", "VisibilityListener"]
