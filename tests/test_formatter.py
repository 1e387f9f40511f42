"""Tests for the fmt implementation in yam/data_formats/formatter.py."""

from __future__ import annotations

import pytest

from yam.data_formats import FormatOptions, YAMLLoader, can_be_unquoted, format_text
from yam.errors import FormatError, ParseError
from yam.tree import get_by_path


class TestCanBeUnquoted:
    """Tests for can_be_unquoted()."""

    @pytest.mark.parametrize("value", ["hello", "web-server", "v1.2", "a_b"])
    def test_plain_safe(self, value):
        assert can_be_unquoted(value, "!!str")

    @pytest.mark.parametrize(
        "value",
        ["", "yes", "Off", "null", "~", "a: b", "#tag", "x y", " lead", "-dash", "?q", "{a}", "*ref"],
    )
    def test_needs_quotes(self, value):
        assert not can_be_unquoted(value, "!!str")

    def test_reserved_words_only_matter_for_strings(self):
        assert can_be_unquoted("true", "!!bool")


class TestFormatText:
    """Tests for format_text()."""

    def test_reindents_mappings(self):
        assert format_text("a:\n    b: 1\n    c: 2\n") == "a:\n  b: 1\n  c: 2\n"

    def test_custom_indent(self):
        result = format_text("a:\n  b: 1\n", FormatOptions(indent=4))
        assert result == "a:\n    b: 1\n"

    def test_sequence_indent(self):
        assert format_text("items:\n- a\n- b\n") == "items:\n  - a\n  - b\n"

    def test_sort_keys(self):
        result = format_text("b: 1\na:\n  z: 1\n  y: 2\n", FormatOptions(sort_keys=True))
        assert result == "a:\n  y: 2\n  z: 1\nb: 1\n"

    def test_keys_kept_in_order_by_default(self):
        assert format_text("b: 1\na: 2\n") == "b: 1\na: 2\n"

    def test_removes_unneeded_quotes(self):
        assert format_text('name: "demo"\n') == "name: demo\n"

    def test_keeps_needed_quotes(self):
        assert format_text('flag: "yes"\n') == 'flag: "yes"\n'

    def test_trims_trailing_whitespace_in_values(self):
        assert format_text("name: 'demo   '\n") == "name: demo\n"

    def test_quoted_number_stays_a_string(self):
        """Dropping quotes never changes a value's type."""
        result = format_text('port: "8080"\n')
        port = get_by_path(YAMLLoader().parse(result), ".port")
        assert port.value == "8080"
        assert port.tag == "!!str"

    def test_preserves_structure(self):
        text = "a:\n  - x: 1\n    y: [1, 2]\nb: null\n"
        from yam.data_formats import to_python

        loader = YAMLLoader()
        assert to_python(loader.parse(format_text(text))) == to_python(loader.parse(text))

    def test_ensures_final_newline(self):
        assert format_text("a: 1").endswith("\n")

    def test_invalid_indent(self):
        with pytest.raises(FormatError, match="indent must be positive"):
            format_text("a: 1\n", FormatOptions(indent=0))

    def test_empty_input(self):
        with pytest.raises(ParseError, match="empty YAML document"):
            format_text("")

    def test_malformed_input(self):
        with pytest.raises(ParseError):
            format_text("a: [1\n")
