"""Tests for the tree renderer in yam/renderer.py."""

from __future__ import annotations

import pytest

from conftest import child
from yam.renderer import RenderOptions, TreeRenderer, needs_quoting
from yam.tree import root_value


def plain_lines(renderer: TreeRenderer, root, visible_only: bool = True) -> list[str]:
    return [line.plain.rstrip() for line in renderer.render_lines(root, visible_only)]


class TestTreeStyles:
    """Tests for the three line styles."""

    def test_unicode(self, sample_doc):
        lines = plain_lines(TreeRenderer(), sample_doc)
        assert lines == [
            "",
            "├── server:",
            "│   ├── host: localhost",
            "│   ├── port: 8080",
            "│   └── tags:",
            "│       ├── web",
            "│       └── api",
            "└── debug: false",
        ]

    def test_ascii(self, sample_doc):
        lines = plain_lines(TreeRenderer(RenderOptions(tree_style="ascii")), sample_doc)
        assert lines[1] == "+-- server:"
        assert lines[2] == "|   +-- host: localhost"
        assert lines[6] == "|       `-- api"
        assert lines[7] == "`-- debug: false"

    def test_indent(self, sample_doc):
        lines = plain_lines(TreeRenderer(RenderOptions(tree_style="indent")), sample_doc)
        assert lines[1].strip() == "server:"
        assert lines[2].strip() == "host: localhost"
        assert lines[2].startswith(" ")

    def test_unknown_style_falls_back_to_unicode(self, sample_doc):
        lines = plain_lines(TreeRenderer(RenderOptions(tree_style="fancy")), sample_doc)
        assert lines[1] == "├── server:"

    def test_one_line_per_visible_node(self, sample_doc):
        """Lines line up with the rows a NavigationState would show."""
        from yam.tui.navigation import NavigationState

        state = NavigationState(sample_doc)
        assert len(TreeRenderer().render_lines(sample_doc)) == len(state.visible)

    def test_render_joins_lines(self, sample_doc):
        text = TreeRenderer().render(sample_doc)
        assert text.plain.count("\n") == 7


class TestInteractive:
    """Fold markers and collapsed placeholders."""

    def test_expanded_markers(self, sample_doc):
        lines = plain_lines(TreeRenderer(RenderOptions(interactive=True)), sample_doc)
        assert lines[0] == "▼"
        assert lines[1] == "├── ▼ server:"
        assert lines[2] == "│   ├── host: localhost"

    def test_collapsed_mapping(self, sample_doc):
        child(root_value(sample_doc), "server").collapsed = True
        lines = plain_lines(TreeRenderer(RenderOptions(interactive=True)), sample_doc)
        assert lines == ["▼", "├── ▶ server: {...}", "└── debug: false"]

    def test_collapsed_sequence(self, sample_doc):
        server = child(root_value(sample_doc), "server")
        child(server, "tags").collapsed = True
        lines = plain_lines(TreeRenderer(RenderOptions(interactive=True)), sample_doc)
        assert "│   └── ▶ tags: [2 items]" in lines
        assert len(lines) == 6

    def test_render_ignores_folds_by_default(self, sample_doc):
        child(root_value(sample_doc), "server").collapsed = True
        assert len(TreeRenderer().render(sample_doc).plain.split("\n")) == 8


class TestValues:
    """Tests for value formatting."""

    def test_type_labels(self, sample_doc):
        lines = plain_lines(TreeRenderer(RenderOptions(show_types=True)), sample_doc)
        assert lines[2].endswith("host: localhost <str>")
        assert lines[3].endswith("port: 8080 <int>")
        assert lines[7].endswith("debug: false <bool>")

    def test_float_label(self, yaml_loader):
        renderer = TreeRenderer(RenderOptions(show_types=True))
        lines = plain_lines(renderer, yaml_loader.parse("a: 1.5\nb: 2\nc: 1e3\n"))
        assert lines[1].endswith("a: 1.5 <float>")
        assert lines[2].endswith("b: 2 <int>")
        assert lines[3].endswith("c: 1e3 <float>")

    def test_null_shown_as_null(self, yaml_loader):
        lines = plain_lines(TreeRenderer(), yaml_loader.parse("a:\nb: ~\n"))
        assert lines[1:] == ["├── a: null", "└── b: null"]

    def test_ambiguous_string_is_quoted(self, yaml_loader):
        lines = plain_lines(TreeRenderer(), yaml_loader.parse("a: 'x: y'\n"))
        assert lines[1] == '└── a: "x: y"'

    def test_anchor_and_alias(self, yaml_loader):
        lines = plain_lines(TreeRenderer(), yaml_loader.parse("a: &base 1\nb: *base\n"))
        assert lines[1] == "├── a: 1 &base"
        assert lines[2] == "└── b: *base"

    def test_top_level_sequence(self, yaml_loader):
        lines = plain_lines(TreeRenderer(), yaml_loader.parse("- a\n- b\n"))
        assert lines == ["-", "├── a", "└── b"]


class TestNeedsQuoting:
    """Tests for needs_quoting()."""

    @pytest.mark.parametrize("value", ["", "yes", "Off", "null", "~", " pad", "a: b", "x#y", "a\nb"])
    def test_ambiguous(self, value):
        assert needs_quoting(value)

    @pytest.mark.parametrize("value", ["hello", "web-server", "v1.2", "a_b"])
    def test_plain(self, value):
        assert not needs_quoting(value)
