"""
Tests for VisibilityController.
"""

import pytest

from skilltree.services.visibility import VisibilityController


@pytest.fixture
def controller(filter_index, legs_push, legs_pull):
    filter_index.register(legs_push.tree_id, legs_push.skills)
    filter_index.register(legs_pull.tree_id, legs_pull.skills)
    controller = VisibilityController(filter_index)
    controller.track(legs_push)
    controller.track(legs_pull)
    return controller


class TestFiltering:
    def test_everything_visible_initially(self, controller):
        assert controller.visible_trees() == {"legs-push", "legs-pull"}

    def test_filter_hides_non_matching_trees(self, controller):
        visible = controller.set_filter("Squat")

        assert visible == {"legs-push"}
        assert controller.is_visible("legs-pull") is False

    def test_clearing_filter_shows_all(self, controller):
        controller.set_filter("deadlift")
        assert controller.set_filter("") == {"legs-push", "legs-pull"}

    def test_subscribers_notified(self, controller):
        events = []
        unsubscribe = controller.subscribe(lambda tree_id, visible: events.append((tree_id, visible)))

        controller.set_filter("pull")
        unsubscribe()
        controller.set_filter("")

        assert sorted(events) == [("legs-pull", True), ("legs-push", False)]


class TestCollapsing:
    def test_collapsible_tree_toggles(self, controller):
        assert controller.toggle_collapsed("legs-push") is False
        assert controller.is_collapsed("legs-push")
        assert controller.toggle_collapsed("legs-push") is True

    def test_non_collapsible_tree_ignores_toggle(self, controller):
        assert controller.toggle_collapsed("legs-pull") is True
        assert not controller.is_collapsed("legs-pull")

    def test_matching_filter_expands_collapsed_tree(self, controller):
        controller.toggle_collapsed("legs-push")

        controller.set_filter("lunge")

        assert controller.is_visible("legs-push") is True

    def test_untracked_tree_forgotten(self, controller):
        controller.toggle_collapsed("legs-push")
        controller.untrack("legs-push")

        assert controller.tracked() == ["legs-pull"]
        assert not controller.is_collapsed("legs-push")
