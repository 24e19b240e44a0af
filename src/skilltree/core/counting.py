from __future__ import annotations

from typing import Dict, List, Sequence

from pydantic import BaseModel, Field

from skilltree.core.models import Skill
from skilltree.core.traversal import walk_skills


def count_nodes(skills: Sequence[Skill]) -> int:
    """Number of distinct nodes reachable from ``skills``, locked or not."""
    return sum(1 for _ in walk_skills(skills))


class NodeCountAggregator(BaseModel):
    """Running node total across mounted contributors, keyed by contributor id.

    A contributor (usually a tree id) holds at most one contribution; contributing
    again replaces it and withdrawing removes it from the total.
    """

    contributions: Dict[str, int] = Field(default_factory=dict)

    def contribute(self, contributor_id: str, skills: Sequence[Skill]) -> int:
        # count first so a malformed forest leaves the aggregate untouched
        count = count_nodes(skills)
        self.contributions[contributor_id] = count
        return count

    def withdraw(self, contributor_id: str) -> int:
        return self.contributions.pop(contributor_id, 0)

    def contribution(self, contributor_id: str) -> int:
        return self.contributions.get(contributor_id, 0)

    def contributors(self) -> List[str]:
        return sorted(self.contributions.keys())

    @property
    def total(self) -> int:
        return sum(self.contributions.values())


__all__ = ["NodeCountAggregator", "count_nodes"]
