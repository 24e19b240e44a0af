"""
Unit tests for CLI commands.

Tests cover:
- validate command
- show / count / search commands
- spend / refund commands persisting to a saves file
"""

import textwrap

import pytest
from typer.testing import CliRunner

from skilltree.cli.app import app
from skilltree.io.saves import load_saves

runner = CliRunner()


@pytest.fixture
def saves_file(tmp_path):
    return str(tmp_path / "saves.yaml")


class TestValidateCommand:
    def test_validate_success(self, kb_trees_dir):
        result = runner.invoke(app, ["validate", kb_trees_dir])

        assert result.exit_code == 0
        assert "Loaded 3 tree(s)" in result.stdout
        assert "14 skill(s)" in result.stdout
        assert "All validations passed" in result.stdout

    def test_validate_missing_path(self, tmp_path):
        result = runner.invoke(app, ["validate", str(tmp_path / "missing")])

        assert result.exit_code == 1
        assert "Path not found" in result.stdout

    def test_validate_reports_bad_references(self, tmp_path):
        (tmp_path / "t.yaml").write_text(
            textwrap.dedent(
                """
                id: t
                skills:
                  - id: a
                    requirement:
                      type: skill_points
                      skill_id: ghost
                """
            ),
            encoding="utf-8",
        )

        result = runner.invoke(app, ["validate", str(tmp_path)])

        assert result.exit_code == 1
        assert "requires unknown skill ghost" in result.stdout

    def test_validate_loader_error(self, tmp_path):
        (tmp_path / "t.yaml").write_text("id: t\nskills:\n  - title: no id\n", encoding="utf-8")

        result = runner.invoke(app, ["validate", str(tmp_path)])

        assert result.exit_code == 1
        assert "Failed to load data" in result.stdout


class TestShowCommand:
    def test_show_tree(self, kb_trees_dir, saves_file):
        result = runner.invoke(app, ["show", "legs-push", "--trees", kb_trees_dir, "--saves", saves_file])

        assert result.exit_code == 0
        assert "Squat" in result.stdout
        assert "Skills: 5, Selected: 0" in result.stdout

    def test_show_unknown_tree(self, kb_trees_dir, saves_file):
        result = runner.invoke(app, ["show", "arms", "--trees", kb_trees_dir, "--saves", saves_file])

        assert result.exit_code == 2
        assert "Tree not found" in result.stdout


class TestCountCommand:
    def test_count(self, kb_trees_dir, saves_file):
        result = runner.invoke(app, ["count", "--trees", kb_trees_dir, "--saves", saves_file])

        assert result.exit_code == 0
        assert "Total:" in result.stdout
        assert "14 skill(s)" in result.stdout


class TestSearchCommand:
    def test_search_match(self, kb_trees_dir):
        result = runner.invoke(app, ["search", "squat", "--trees", kb_trees_dir])

        assert result.exit_code == 0
        assert "legs-push" in result.stdout
        assert "legs-pull" not in result.stdout

    def test_search_empty_lists_all(self, kb_trees_dir):
        result = runner.invoke(app, ["search", "--trees", kb_trees_dir])

        assert result.exit_code == 0
        for tree_id in ("core", "legs-pull", "legs-push"):
            assert tree_id in result.stdout

    def test_search_no_match(self, kb_trees_dir):
        result = runner.invoke(app, ["search", "bench", "--trees", kb_trees_dir])

        assert result.exit_code == 1
        assert "No trees match" in result.stdout


class TestSpendRefundCommands:
    def test_spend_persists(self, kb_trees_dir, saves_file):
        result = runner.invoke(app, ["spend", "legs-push", "squat", "--trees", kb_trees_dir, "--saves", saves_file])

        assert result.exit_code == 0
        assert "squat: 1 point(s), selected" in result.stdout
        assert load_saves(saves_file)["legs-push"]["squat"].points == 1

    def test_spend_on_locked_skill(self, kb_trees_dir, saves_file):
        result = runner.invoke(
            app, ["spend", "legs-push", "front-squat", "--trees", kb_trees_dir, "--saves", saves_file]
        )

        assert result.exit_code == 1
        assert "Rejected" in result.stdout

    def test_spend_then_unlocked_child(self, kb_trees_dir, saves_file):
        args = ["--trees", kb_trees_dir, "--saves", saves_file]
        runner.invoke(app, ["spend", "legs-push", "squat", *args])

        result = runner.invoke(app, ["spend", "legs-push", "front-squat", *args])

        assert result.exit_code == 0
        assert load_saves(saves_file)["legs-push"]["front-squat"].points == 1

    def test_refund_cascades(self, kb_trees_dir, saves_file):
        args = ["--trees", kb_trees_dir, "--saves", saves_file]
        runner.invoke(app, ["spend", "legs-push", "squat", *args])
        runner.invoke(app, ["spend", "legs-push", "front-squat", *args])

        result = runner.invoke(app, ["refund", "legs-push", "squat", *args])

        assert result.exit_code == 0
        saved = load_saves(saves_file)["legs-push"]
        assert saved["front-squat"].points == 0
        assert saved["front-squat"].node_state == "locked"

    def test_unknown_skill(self, kb_trees_dir, saves_file):
        result = runner.invoke(app, ["spend", "legs-push", "bench", "--trees", kb_trees_dir, "--saves", saves_file])

        assert result.exit_code == 2
