"""
Filter index: process-wide search token -> tree id mapping.

Tokens are the lowercased, stripped searchable labels of every skill in a tree
(title and tags). ``query`` does a case-insensitive substring match against the
tokens, which suits filtering as the user types; an empty term matches every
registered tree.

All mutations and queries hold a re-entrant lock so the index can be shared by
threads; each call completes synchronously.
"""

from __future__ import annotations

import logging
import threading
from typing import Dict, Optional, Sequence, Set

from skilltree.core.models import Skill
from skilltree.core.traversal import walk_skills

logger = logging.getLogger(__name__)


def normalize_term(term: Optional[str]) -> str:
    return (term or "").strip().lower()


def skill_tokens(skill: Skill) -> Set[str]:
    """Search tokens contributed by a single skill. Blank labels contribute none."""
    return {token for token in (normalize_term(label) for label in skill.searchable_labels) if token}


def forest_tokens(skills: Sequence[Skill]) -> Set[str]:
    tokens: Set[str] = set()
    for skill, _parent in walk_skills(skills):
        tokens |= skill_tokens(skill)
    return tokens


class FilterIndex:
    """Token -> set of tree ids, with per-tree bookkeeping for replacement and removal."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._index: Dict[str, Set[str]] = {}
        self._trees: Dict[str, Set[str]] = {}

    def register(self, tree_id: str, skills: Sequence[Skill]) -> None:
        """Index every skill of the tree, replacing any previous registration of ``tree_id``."""
        # tokens are gathered before the lock so a malformed forest changes nothing
        tokens = forest_tokens(skills)
        with self._lock:
            self._drop(tree_id)
            self._trees[tree_id] = tokens
            for token in tokens:
                self._index.setdefault(token, set()).add(tree_id)
        logger.debug("Registered tree %s with %d token(s)", tree_id, len(tokens))

    def unregister(self, tree_id: str) -> bool:
        """Remove ``tree_id`` everywhere. Unknown ids are ignored; returns whether it was known."""
        with self._lock:
            known = self._drop(tree_id)
        if known:
            logger.debug("Unregistered tree %s", tree_id)
        return known

    def query(self, term: Optional[str]) -> Set[str]:
        needle = normalize_term(term)
        with self._lock:
            if not needle:
                return set(self._trees)
            matches: Set[str] = set()
            for token, tree_ids in self._index.items():
                if needle in token:
                    matches |= tree_ids
            return matches

    def registered_trees(self) -> Set[str]:
        with self._lock:
            return set(self._trees)

    def is_registered(self, tree_id: str) -> bool:
        with self._lock:
            return tree_id in self._trees

    def tokens(self) -> Set[str]:
        with self._lock:
            return set(self._index)

    def tokens_for(self, tree_id: str) -> Set[str]:
        with self._lock:
            return set(self._trees.get(tree_id, ()))

    def clear(self) -> None:
        with self._lock:
            self._index.clear()
            self._trees.clear()

    def _drop(self, tree_id: str) -> bool:
        tokens = self._trees.pop(tree_id, None)
        if tokens is None:
            return False
        for token in tokens:
            tree_ids = self._index.get(token)
            if tree_ids is None:
                continue
            tree_ids.discard(tree_id)
            if not tree_ids:
                del self._index[token]
        return True


# Global singleton instance
_global_filter_index = FilterIndex()


def get_filter_index() -> FilterIndex:
    """Get the process-wide filter index."""
    return _global_filter_index


__all__ = [
    "FilterIndex",
    "forest_tokens",
    "get_filter_index",
    "normalize_term",
    "skill_tokens",
]
