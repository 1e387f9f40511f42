"""Tests for the document viewer's NavigationState."""

from __future__ import annotations

import pytest

from conftest import child
from yam.tree import NodeKind, get_by_path, root_value
from yam.tui.navigation import NavigationState


@pytest.fixture
def state(sample_doc) -> NavigationState:
    return NavigationState(sample_doc, viewport_height=3)


def keys(state: NavigationState) -> list[str | None]:
    return [node.key for node in state.visible]


class TestVisibleRows:
    """Tests for flattening."""

    def test_document_node_excluded(self, state):
        assert len(state.visible) == 8
        assert state.visible[0].kind is NodeKind.MAPPING
        assert keys(state) == [None, "server", "host", "port", "tags", None, None, "debug"]

    def test_current_node(self, state):
        assert state.current_node() is state.visible[0]

    def test_empty_tree(self, yaml_loader):
        state = NavigationState(yaml_loader.parse("{}\n"))
        assert len(state.visible) == 1
        state.move_cursor(5)
        assert state.cursor == 0


class TestCursor:
    """Tests for cursor movement and scrolling."""

    def test_move_and_clamp(self, state):
        state.move_cursor(1)
        assert state.cursor == 1
        state.move_cursor(100)
        assert state.cursor == 7
        state.move_cursor(-100)
        assert state.cursor == 0

    def test_offset_follows_cursor(self, state):
        state.move_cursor(4)
        assert state.offset == 2
        state.move_cursor(-3)
        assert state.offset == 1

    def test_top_and_bottom(self, state):
        state.go_bottom()
        assert (state.cursor, state.offset) == (7, 5)
        state.go_top()
        assert (state.cursor, state.offset) == (0, 0)

    def test_paging(self, state):
        state.page_down()
        assert state.cursor == 3
        state.page_down()
        state.page_down()
        assert state.cursor == 7
        state.page_up()
        assert state.cursor == 4

    def test_half_paging(self, state):
        state.half_page_down()
        assert state.cursor == 1
        state.set_viewport_height(6)
        state.half_page_down()
        assert state.cursor == 4
        state.half_page_up()
        assert state.cursor == 1

    def test_viewport_resize_keeps_cursor_visible(self, state):
        state.set_viewport_height(10)
        state.go_bottom()
        state.set_viewport_height(2)
        assert state.offset <= state.cursor < state.offset + 2

    def test_viewport_minimum(self, state):
        state.set_viewport_height(0)
        assert state.viewport_height == 1


class TestFolding:
    """Tests for toggle_fold(), expand_all() and collapse_all()."""

    def test_toggle_container(self, state):
        state.move_cursor(1)
        assert state.toggle_fold()
        assert keys(state) == [None, "server", "debug"]
        assert state.toggle_fold()
        assert len(state.visible) == 8

    def test_scalar_cannot_fold(self, state):
        state.move_cursor(2)
        assert not state.toggle_fold()
        assert len(state.visible) == 8

    def test_empty_container_cannot_fold(self, yaml_loader):
        state = NavigationState(yaml_loader.parse("a: {}\n"))
        state.move_cursor(1)
        assert not state.toggle_fold()

    def test_cursor_clamped_after_fold(self, sample_doc):
        state = NavigationState(sample_doc)
        state.go_bottom()
        state.toggle_fold(state.visible[0])
        assert state.cursor == 0
        assert len(state.visible) == 1

    def test_collapse_all_keeps_top_level(self, state):
        state.go_bottom()
        state.collapse_all()
        assert keys(state) == [None, "server", "debug"]
        assert state.cursor == 2
        assert state.offset == 0

    def test_collapse_all_keeps_subtree_root(self, yaml_loader):
        doc = yaml_loader.parse("a:\n  b:\n    c: 1\n  d: 2\n")
        subtree = get_by_path(doc, ".a")
        state = NavigationState(subtree)

        state.collapse_all()
        assert not subtree.collapsed
        assert child(subtree, "b").collapsed
        assert keys(state) == ["a", "b", "d"]

    def test_expand_all(self, state):
        state.collapse_all()
        state.expand_all()
        assert len(state.visible) == 8


class TestSearch:
    """Tests for search and match navigation."""

    def test_matches_keys_and_values(self, state):
        assert state.search("o") == 2
        assert state.matches == [2, 3]

    def test_case_insensitive(self, state):
        assert state.search("LOCAL") == 1
        assert state.visible[state.matches[0]].key == "host"

    def test_expands_collapsed_ancestors(self, state):
        state.collapse_all()
        assert state.search("api") == 1
        assert state.visible[state.matches[0]].value == "api"
        server = child(root_value(state.root), "server")
        assert not server.collapsed
        assert not child(server, "tags").collapsed

    def test_empty_query(self, state):
        state.collapse_all()
        assert state.search("") == 0
        assert state.matches == []
        assert len(state.visible) == 3

    def test_confirm_and_cycle(self, state):
        state.search("o")
        assert state.cursor == 0
        state.confirm_search()
        assert state.cursor == 2
        state.next_match()
        assert state.cursor == 3
        state.next_match()
        assert state.cursor == 2
        state.prev_match()
        assert state.cursor == 3

    def test_no_matches(self, state):
        assert state.search("zzz") == 0
        state.confirm_search()
        state.next_match()
        assert state.cursor == 0

    def test_clear_search(self, state):
        state.search("o")
        state.clear_search()
        assert state.matches == []
        assert state.query == ""
        assert not state.is_match(2)


class TestPositionText:
    """Tests for the status line text."""

    def test_root(self, state):
        assert state.position_text() == "1/8 | $"

    def test_nested(self, state):
        state.move_cursor(5)
        assert state.position_text() == "6/8 | $.server.tags.0"

    def test_with_matches(self, state):
        state.search("o")
        state.confirm_search()
        assert state.position_text() == "3/8 | $.server.host  [match 1/2]"
