"""
Batch rendering of diff results.

Only changed branches are printed, one line per changed node, with a
unified-diff style header and a summary line:

    --- old.yaml
    +++ new.yaml

    + debug: true
    ~ server:
    ~   port: 8080 → 9090

    Summary: 1 added, 0 removed, 3 modified
"""

from __future__ import annotations

from rich.text import Text

from yam.diff.engine import DiffNode, DiffResult, DiffSummary, DiffType
from yam.tree.nodes import Node, NodeKind

# Line prefix and colour per diff type
DIFF_STYLES: dict[DiffType, tuple[str, str]] = {
    DiffType.ADDED: ("+ ", "#A6E3A1"),
    DiffType.REMOVED: ("- ", "#F38BA8"),
    DiffType.MODIFIED: ("~ ", "#F9E2AF"),
    DiffType.UNCHANGED: ("  ", "#6C7086"),
}

KEY_STYLE = "#89B4FA"
ARROW = "→"


def diff_key(node: DiffNode) -> str:
    """Return the display key of a diff node.

    Mapping keys win; sequence items are shown as "[index]"; the root has
    no key.
    """
    for side in (node.left, node.right):
        if side is not None and side.key:
            return side.key
    for side in (node.left, node.right):
        if side is not None and side.parent is not None and side.parent.kind is NodeKind.SEQUENCE:
            return f"[{side.index}]"
    return ""


def format_value(node: Node | None) -> str:
    """Format one side of a diff node for display."""
    if node is None:
        return ""
    if node.kind is NodeKind.MAPPING:
        return "{...}"
    if node.kind is NodeKind.SEQUENCE:
        return f"[{len(node.children)} items]"
    return node.value


def render_summary(summary: DiffSummary) -> str:
    """Return the one-line summary of a diff.

    Examples:
        >>> render_summary(DiffSummary())
        'Summary: no changes'
        >>> render_summary(DiffSummary(added=1, removed=0, modified=2, total=3))
        'Summary: 1 added, 0 removed, 2 modified'
    """
    if summary.total == 0:
        return "Summary: no changes"
    return (
        f"Summary: {summary.added} added, {summary.removed} removed, "
        f"{summary.modified} modified"
    )


def _render_node(text: Text, node: DiffNode, indent: str) -> None:
    if not node.is_changed():
        return

    key = diff_key(node)
    side = node.side()

    # The root container has no header line
    if node.children and (not key or side.kind is NodeKind.DOCUMENT):
        for child in node.children:
            _render_node(text, child, indent)
        return

    prefix, color = DIFF_STYLES[node.type]
    text.append(prefix + indent, style=color)
    if key:
        text.append(key, style=KEY_STYLE)

    if node.children:
        text.append(":", style=color)
        text.append("\n")
        for child in node.children:
            _render_node(text, child, indent + "  ")
        return

    if node.type is DiffType.MODIFIED:
        value = f"{format_value(node.left)} {ARROW} {format_value(node.right)}"
    else:
        value = format_value(side)
    text.append(f": {value}" if key else value, style=color)
    text.append("\n")


def render_text(result: DiffResult | None) -> Text:
    """Render a diff result as styled rich Text."""
    text = Text()
    if result is None:
        return text

    if result.left_file or result.right_file:
        text.append(f"--- {result.left_file}\n", style=DIFF_STYLES[DiffType.REMOVED][1])
        text.append(f"+++ {result.right_file}\n", style=DIFF_STYLES[DiffType.ADDED][1])
        text.append("\n")

    if result.root is not None:
        _render_node(text, result.root, "")

    if result.summary.total > 0:
        text.append("\n")
        text.append(render_summary(result.summary), style="bold")
        text.append("\n")

    return text


def render(result: DiffResult | None) -> str:
    """Render a diff result as plain text."""
    return render_text(result).plain
