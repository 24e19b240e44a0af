"""Formatting helpers for CLI presentation."""

from __future__ import annotations

from typing import Iterable

from rich.table import Table
from rich.tree import Tree

from skilltree.core.models import Skill
from skilltree.core.session import TreeSession

STATE_STYLES = {
    "locked": "dim",
    "unlocked": "cyan",
    "selected": "green",
}


def format_skill(skill: Skill, session: TreeSession) -> str:
    state = session.node_state(skill.id)
    style = STATE_STYLES[state]
    label = skill.describe()
    points = session.points(skill.id)
    return f"[{style}]{label}[/{style}] {points}/{skill.max_points} [{style}]{state}[/{style}]"


def build_skill_tree_view(session: TreeSession, show_requirements: bool = False) -> Tree:
    tree = session.tree
    root = Tree(f"[bold]{tree.title or tree.tree_id}[/bold] ({tree.tree_id})")

    def _add(branch: Tree, skills: Iterable[Skill]) -> None:
        for skill in skills:
            text = format_skill(skill, session)
            if show_requirements:
                text += f" [dim]requires {skill.requirement.describe()}[/dim]"
            _add(branch.add(text), skill.children)

    _add(root, tree.skills)
    return root


def build_count_table(sessions: Iterable[TreeSession]) -> Table:
    table = Table(title="Node counts")
    table.add_column("Tree")
    table.add_column("Skills", justify="right")
    table.add_column("Selected", justify="right")
    for session in sessions:
        table.add_row(session.tree_id, str(session.node_count), str(session.selected_count))
    return table


__all__ = ["build_count_table", "build_skill_tree_view", "format_skill"]
