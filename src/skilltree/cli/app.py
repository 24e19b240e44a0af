"""
Skill tree CLI: validate tree definitions, inspect unlock state, search and spend points.

Trees are read from ``kb/trees`` and saved state from ``outputs/saves.yaml``
unless overridden per command.
"""

from __future__ import annotations

from typing import Dict, Optional

import typer
from rich.console import Console

from skilltree.cli.formatters import build_count_table, build_skill_tree_view
from skilltree.cli.load_helpers import load_or_exit
from skilltree.cli.paths import kb_trees_path, saves_path
from skilltree.core.errors import LockedSkillError, SkillMaxedError, UnknownSkillError
from skilltree.core.filter_index import FilterIndex
from skilltree.core.models import SavedData, SkillTree
from skilltree.core.registries import TreeRegistry
from skilltree.core.session import TreeSession
from skilltree.io.loaders.tree_loader import load_trees
from skilltree.io.saves import YamlSaveHandler, load_saves
from skilltree.services.group import SkillTreeGroup
from skilltree.utils.logging import configure_logging

app = typer.Typer(help="Skill tree CLI: validate trees, inspect unlock state, search and spend points.")
console = Console()


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging")) -> None:
    configure_logging(verbose)


def _load_registry(trees: str | None, *, verbose_load: bool = False) -> TreeRegistry:
    registry = TreeRegistry()
    load_or_exit(load_trees, kb_trees_path(trees), registry, console=console, verbose_errors=verbose_load)
    return registry


def _load_saves(saves: str | None) -> Dict[str, SavedData]:
    return load_or_exit(load_saves, saves_path(saves), console=console, must_exist=False)


def _get_tree(registry: TreeRegistry, tree_id: str) -> SkillTree:
    try:
        return registry.get(tree_id)
    except KeyError:
        console.print(f"[red]Tree not found[/red]: {tree_id}")
        raise typer.Exit(code=2)


def _open_session(tree: SkillTree, saves: str | None) -> TreeSession:
    saved = _load_saves(saves)
    tree = tree.model_copy(
        update={
            "saved_data": saved.get(tree.tree_id),
            "handle_save": YamlSaveHandler(saves_path(saves)),
        }
    )
    return TreeSession(tree, filter_index=FilterIndex())


@app.command()
def validate(
    trees: Optional[str] = typer.Argument(None, help="Path to kb/trees folder or a tree file"),
    verbose: bool = typer.Option(False, "--verbose-load", help="Display full validation trace on loader errors"),
) -> None:
    """Validate skill tree definitions."""
    registry = _load_registry(trees, verbose_load=verbose)

    console.print(f"[green]OK[/green] Loaded {len(registry)} tree(s)")
    console.print(f"[green]OK[/green] {registry.total_nodes()} skill(s) in total")

    errors = registry.validate_structure() + registry.validate_references()
    if errors:
        console.print("[red]Validation errors detected:[/red]")
        for error in errors:
            console.print(f" - {error}")
        raise typer.Exit(code=1)

    console.print("[green]All validations passed[/green]")


@app.command()
def show(
    tree_id: str = typer.Argument(..., help="Tree id"),
    trees: Optional[str] = typer.Option(None, help="Path to kb/trees folder"),
    saves: Optional[str] = typer.Option(None, help="Path to the saves file"),
    requirements: bool = typer.Option(False, "--requirements", "-r", help="Show each skill's requirement"),
) -> None:
    """Show a tree with the unlock state of every skill."""
    registry = _load_registry(trees)
    session = _open_session(_get_tree(registry, tree_id), saves)
    console.print(build_skill_tree_view(session, show_requirements=requirements))
    console.print(
        f"Skills: {session.node_count}, Selected: {session.selected_count}, Points spent: {session.total_points}"
    )


@app.command()
def count(
    trees: Optional[str] = typer.Option(None, help="Path to kb/trees folder"),
    saves: Optional[str] = typer.Option(None, help="Path to the saves file"),
) -> None:
    """Count the skills of every tree and across all of them."""
    registry = _load_registry(trees)
    saved = _load_saves(saves)
    group = SkillTreeGroup(filter_index=FilterIndex())
    for tree in registry.all():
        group.mount(tree.model_copy(update={"saved_data": saved.get(tree.tree_id)}))

    console.print(build_count_table(group.sessions()))
    console.print(f"[bold]Total:[/bold] {group.total_count} skill(s), {group.selected_count} selected")


@app.command()
def search(
    term: str = typer.Argument("", help="Search term (empty shows every tree)"),
    trees: Optional[str] = typer.Option(None, help="Path to kb/trees folder"),
) -> None:
    """List the trees containing a skill that matches TERM."""
    registry = _load_registry(trees)
    group = SkillTreeGroup(filter_index=FilterIndex())
    for tree in registry.all():
        group.mount(tree)

    visible = sorted(group.visibility.set_filter(term))
    if not visible:
        console.print(f"[yellow]No trees match[/yellow] {term!r}")
        raise typer.Exit(code=1)
    for tree_id in visible:
        console.print(f"  - {tree_id}")


def _change_points(tree_id: str, skill_id: str, trees: str | None, saves: str | None, *, spend: bool) -> None:
    registry = _load_registry(trees)
    session = _open_session(_get_tree(registry, tree_id), saves)
    try:
        points = session.spend_point(skill_id) if spend else session.refund_point(skill_id)
    except UnknownSkillError as err:
        console.print(f"[red]{err}[/red]")
        raise typer.Exit(code=2)
    except (LockedSkillError, SkillMaxedError) as err:
        console.print(f"[red]Rejected:[/red] {err}")
        raise typer.Exit(code=1)

    console.print(f"[green]OK[/green] {skill_id}: {points} point(s), {session.node_state(skill_id)}")


@app.command()
def spend(
    tree_id: str = typer.Argument(..., help="Tree id"),
    skill_id: str = typer.Argument(..., help="Skill id"),
    trees: Optional[str] = typer.Option(None, help="Path to kb/trees folder"),
    saves: Optional[str] = typer.Option(None, help="Path to the saves file"),
) -> None:
    """Spend a point on a skill and save the tree state."""
    _change_points(tree_id, skill_id, trees, saves, spend=True)


@app.command()
def refund(
    tree_id: str = typer.Argument(..., help="Tree id"),
    skill_id: str = typer.Argument(..., help="Skill id"),
    trees: Optional[str] = typer.Option(None, help="Path to kb/trees folder"),
    saves: Optional[str] = typer.Option(None, help="Path to the saves file"),
) -> None:
    """Refund a point from a skill and save the tree state."""
    _change_points(tree_id, skill_id, trees, saves, spend=False)


__all__ = ["app"]
