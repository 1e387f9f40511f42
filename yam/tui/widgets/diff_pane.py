"""
DiffPane widget: one side of the split diff view.

Both panes draw the same rows of a DiffNavigationState. The left pane shows
each row's left node and the right pane its right node, so aligned pairs
always sit on the same line.
"""

from __future__ import annotations

from typing import Any

from rich.text import Text
from textual import events
from textual.widget import Widget

from yam.diff.engine import DiffType
from yam.diff.render import DIFF_STYLES
from yam.tree.nodes import Node, NodeKind
from yam.tui.diff_navigation import DiffNavigationState

CURSOR_STYLE = "on #30363D"

# Per-side prefixes: an added row is blank on the left, and vice versa
SIDE_PREFIXES: dict[DiffType, tuple[str, str]] = {
    DiffType.ADDED: ("  ", "+ "),
    DiffType.REMOVED: ("- ", "  "),
    DiffType.MODIFIED: ("~ ", "~ "),
    DiffType.UNCHANGED: ("  ", "  "),
}


def format_side(node: Node | None) -> str:
    """Format one side of a diff row, indented by depth.

    Examples:
        >>> from yam.data_formats import YAMLLoader
        >>> doc = YAMLLoader().parse("a:\\n  b: 1")
        >>> format_side(doc.children[0].children[0].children[0])
        '    b: 1'
    """
    if node is None:
        return ""

    indent = "  " * node.depth
    key = node.label()

    if node.kind is NodeKind.MAPPING:
        return indent + (f"{key}:" if key else "{...}")
    if node.kind is NodeKind.SEQUENCE:
        return indent + (f"{key}:" if key else "[...]")
    return indent + (f"{key}: {node.value}" if key else node.value)


class DiffPane(Widget):
    """One side ("left" or "right") of the diff view."""

    DEFAULT_CSS = """
    DiffPane {
        width: 1fr;
        height: 1fr;
        padding: 0 1;
    }
    """

    def __init__(self, state: DiffNavigationState, side: str, **kwargs: Any) -> None:
        """Initialize the pane.

        Args:
            state: Shared diff navigation state.
            side: "left" or "right".
            **kwargs: Additional arguments passed to Widget.
        """
        super().__init__(**kwargs)
        if side not in ("left", "right"):
            raise ValueError(f"side must be 'left' or 'right', got {side!r}")
        self.state = state
        self.side = side

    def on_resize(self, event: events.Resize) -> None:
        self.state.set_viewport_height(event.size.height)

    def render(self) -> Text:
        state = self.state
        end = min(state.offset + state.viewport_height, len(state.rows))
        left_side = self.side == "left"

        output = Text(no_wrap=True, overflow="ellipsis")
        for index in range(state.offset, end):
            row = state.rows[index]
            left_prefix, right_prefix = SIDE_PREFIXES[row.type]
            prefix = left_prefix if left_side else right_prefix
            node = row.left if left_side else row.right

            line = Text(prefix + format_side(node), style=DIFF_STYLES[row.type][1])
            if index == state.cursor:
                line.stylize(CURSOR_STYLE)
            output.append_text(line)
            if index < end - 1:
                output.append("\n")
        return output
