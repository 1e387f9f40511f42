"""Tests for diff output in yam/diff/render.py."""

from __future__ import annotations

from yam.data_formats import YAMLLoader
from yam.diff import DiffSummary, compare, render, render_summary, render_text


def diff_result(left: str, right: str, labels: tuple[str, str] = ("", "")):
    loader = YAMLLoader()
    result = compare(loader.parse(left), loader.parse(right))
    result.left_file, result.right_file = labels
    return result


class TestRender:
    """Tests for render() and render_text()."""

    def test_full_output(self):
        result = diff_result(
            "server:\n  port: 8080\nname: a\n",
            "server:\n  port: 9090\nname: a\ndebug: true\n",
            ("old.yaml", "new.yaml"),
        )
        assert render(result) == (
            "--- old.yaml\n"
            "+++ new.yaml\n"
            "\n"
            "+ debug: true\n"
            "~ server:\n"
            "~   port: 8080 → 9090\n"
            "\n"
            "Summary: 1 added, 0 removed, 3 modified\n"
        )

    def test_removed_key(self):
        output = render(diff_result("a: 1\nb: 2\n", "a: 1\n"))
        assert output.splitlines()[0] == "- b: 2"

    def test_sequence_items(self):
        output = render(diff_result("- a\n", "- a\n- b\n"))
        assert output.splitlines()[0] == "+ [1]: b"

    def test_added_container(self):
        output = render(diff_result("a: 1\n", "a: 1\nb:\n  c: 1\n"))
        assert output.splitlines()[0] == "+ b: {...}"

    def test_kind_mismatch(self):
        output = render(diff_result("a: 1\n", "a: [1, 2]\n"))
        assert output.splitlines()[0] == "~ a: 1 → [2 items]"

    def test_scalar_documents(self):
        output = render(diff_result("old\n", "new\n"))
        assert output.splitlines()[0] == "~ old → new"

    def test_unchanged_siblings_skipped(self):
        output = render(diff_result("a: 1\nb: 2\nc: 3\n", "a: 1\nb: 20\nc: 3\n"))
        assert output == "~ b: 2 → 20\n\nSummary: 0 added, 0 removed, 2 modified\n"

    def test_no_changes(self):
        assert render(diff_result("a: 1\n", "a: 1\n")) == ""

    def test_none(self):
        assert render(None) == ""

    def test_styles_applied(self):
        text = render_text(diff_result("a: 1\n", "a: 2\n"))
        assert any(span.style for span in text.spans)


class TestRenderSummary:
    """Tests for render_summary()."""

    def test_no_changes(self):
        assert render_summary(DiffSummary()) == "Summary: no changes"

    def test_counts(self):
        summary = DiffSummary(added=2, removed=1, modified=3, total=6)
        assert render_summary(summary) == "Summary: 2 added, 1 removed, 3 modified"
