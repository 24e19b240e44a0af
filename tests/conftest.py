"""
Shared fixtures for skill tree tests.
"""

from pathlib import Path
from typing import List

import pytest

from skilltree.core.counting import NodeCountAggregator
from skilltree.core.filter_index import FilterIndex
from skilltree.core.models import Skill, SkillTree

KB_TREES = Path(__file__).resolve().parents[1] / "kb" / "trees"


def legs_push_skills() -> List[Skill]:
    """Two roots; squat has two children, one of which has a child. 5 skills."""
    return [
        Skill(
            id="squat",
            title="Squat",
            tags=["push"],
            children=[
                Skill(
                    id="front-squat",
                    title="Front Squat",
                    max_points=3,
                    children=[Skill(id="pistol-squat", title="Pistol Squat")],
                ),
                Skill(id="split-squat", title="Split Squat"),
            ],
        ),
        Skill(id="lunge", title="Lunge", tags=["push"]),
    ]


def legs_pull_skills() -> List[Skill]:
    """A single branch of 6 skills."""
    return [
        Skill(
            id="deadlift",
            title="Deadlift",
            tags=["pull"],
            children=[
                Skill(
                    id="romanian-deadlift",
                    title="Romanian Deadlift",
                    children=[
                        Skill(
                            id="single-leg-deadlift",
                            title="Single Leg Deadlift",
                            children=[
                                Skill(
                                    id="nordic-curl",
                                    title="Nordic Curl",
                                    children=[
                                        Skill(
                                            id="glute-ham-raise",
                                            title="Glute Ham Raise",
                                            children=[Skill(id="razor-curl", title="Razor Curl")],
                                        )
                                    ],
                                )
                            ],
                        )
                    ],
                )
            ],
        )
    ]


@pytest.fixture
def filter_index() -> FilterIndex:
    """A fresh index so tests never see each other's trees."""
    return FilterIndex()


@pytest.fixture
def aggregator() -> NodeCountAggregator:
    return NodeCountAggregator()


@pytest.fixture
def legs_push() -> SkillTree:
    return SkillTree(tree_id="legs-push", title="Legs (push)", collapsible=True, skills=legs_push_skills())


@pytest.fixture
def legs_pull() -> SkillTree:
    return SkillTree(tree_id="legs-pull", title="Legs (pull)", skills=legs_pull_skills())


@pytest.fixture
def kb_trees_dir() -> str:
    return str(KB_TREES)
