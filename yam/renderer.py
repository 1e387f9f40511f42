"""
Tree rendering of documents as rich Text.

Each rendered line corresponds to one node. The lines produced for the
visible part of a tree line up one-to-one with the navigation model's
visible node list, so the TUI can highlight the cursor row by index.

Example (unicode style); the first, empty line is the top-level mapping:


    ├── name: web
    └── labels:
        └── app: web
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field

from rich.text import Text

from yam.tree.nodes import Node, NodeKind, ScalarType, infer_type


@dataclass(frozen=True)
class TreeChars:
    """Characters used to draw the tree."""

    vertical: str
    horizontal: str
    corner: str
    tee: str
    collapsed: str
    expanded: str


TREE_CHARS: dict[str, TreeChars] = {
    "unicode": TreeChars("│", "──", "└", "├", "▶", "▼"),
    "ascii": TreeChars("|", "--", "`", "+", "+", "-"),
    "indent": TreeChars(" ", "  ", " ", " ", "+", "-"),
}


@dataclass(frozen=True)
class Theme:
    """Rich styles for each document element."""

    key: str = "bold #79C0FF"
    key_separator: str = "#C9D1D9"
    string: str = "#A5D6FF"
    number: str = "#79C0FF"
    boolean: str = "#FF7B72"
    null: str = "italic #8B949E"
    timestamp: str = "#D2A8FF"
    anchor: str = "#FFA657"
    alias: str = "italic #FFA657"
    type_label: str = "#8B949E"
    comment: str = "italic #8B949E"
    branch: str = "#484F58"
    collapsed: str = "#8B949E"


TYPE_LABELS: dict[ScalarType, str] = {
    ScalarType.STRING: "<str>",
    ScalarType.NUMBER: "<int>",
    ScalarType.BOOLEAN: "<bool>",
    ScalarType.NULL: "<null>",
    ScalarType.TIMESTAMP: "<time>",
}


def type_label(node: Node, scalar_type: ScalarType) -> str:
    """Return the "<type>" label, telling floats apart from integers."""
    if scalar_type is ScalarType.NUMBER and (
        node.tag == "!!float"
        or (node.tag != "!!int" and any(char in node.value for char in ".eE"))
    ):
        return "<float>"
    return TYPE_LABELS[scalar_type]


@dataclass
class RenderOptions:
    """Options for TreeRenderer.

    Attributes:
        tree_style: "unicode", "ascii" or "indent".
        interactive: Draw fold indicators in front of containers.
        show_types: Append a type label to scalar values.
        theme: Styles for keys, values and tree lines.
    """

    tree_style: str = "unicode"
    interactive: bool = False
    show_types: bool = False
    theme: Theme = field(default_factory=Theme)


def needs_quoting(value: str) -> bool:
    """Whether a string value would be ambiguous if shown bare.

    Examples:
        >>> needs_quoting("yes")
        True
        >>> needs_quoting("hello")
        False
    """
    if not value:
        return True
    if value.lower() in ("true", "false", "yes", "no", "on", "off", "null", "~"):
        return True
    if value != value.strip():
        return True
    return any(char in value for char in ":#\n\t")


class TreeRenderer:
    """Render document trees as lists of styled lines."""

    def __init__(self, options: RenderOptions | None = None) -> None:
        self.options = options or RenderOptions()
        self.chars = TREE_CHARS.get(self.options.tree_style, TREE_CHARS["unicode"])
        self.theme = self.options.theme

    def render_lines(self, root: Node, visible_only: bool = True) -> list[Text]:
        """Render a tree into one Text per node.

        Args:
            root: A Document node or any node.
            visible_only: Skip the descendants of collapsed containers.

        Returns:
            The lines in pre-order, Document nodes excluded.
        """
        lines: list[Text] = []
        self._render_node(lines, root, Text(), True, visible_only)
        return lines

    def render(self, root: Node, visible_only: bool = False) -> Text:
        """Render a whole tree as a single newline-joined Text."""
        return Text("\n").join(self.render_lines(root, visible_only))

    def _render_node(
        self,
        lines: list[Text],
        node: Node,
        prefix: Text,
        is_last: bool,
        visible_only: bool,
    ) -> None:
        if node.kind is NodeKind.DOCUMENT:
            for i, child in enumerate(node.children):
                self._render_node(
                    lines, child, prefix, i == len(node.children) - 1, visible_only
                )
            return

        lines.append(self.render_node_line(node, prefix, is_last))

        if node.has_children() and not (visible_only and node.collapsed):
            child_prefix = self._child_prefix(prefix, is_last, node.depth)
            for i, child in enumerate(node.children):
                self._render_node(
                    lines, child, child_prefix, i == len(node.children) - 1, visible_only
                )

    def _child_prefix(self, prefix: Text, is_last: bool, depth: int) -> Text:
        if depth == 0:
            return Text()
        child_prefix = prefix.copy()
        if is_last:
            child_prefix.append("    ")
        else:
            child_prefix.append(self.chars.vertical, style=self.theme.branch)
            child_prefix.append("   ")
        return child_prefix

    def render_node_line(self, node: Node, prefix: Text, is_last: bool) -> Text:
        """Render the single line for ``node`` (children not included)."""
        theme = self.theme
        line = Text()

        if node.depth > 0:
            line.append_text(prefix)
            joint = self.chars.corner if is_last else self.chars.tee
            line.append(joint + self.chars.horizontal + " ", style=theme.branch)

        if self.options.interactive and node.is_container() and node.has_children():
            marker = self.chars.collapsed if node.collapsed else self.chars.expanded
            line.append(marker + " ", style=theme.branch)

        if node.key:
            line.append(node.key, style=theme.key)
            line.append(": ", style=theme.key_separator)

        if node.kind is NodeKind.MAPPING:
            if node.collapsed:
                line.append("{...}", style=theme.collapsed)
        elif node.kind is NodeKind.SEQUENCE:
            if node.collapsed:
                line.append(f"[{len(node.children)} items]", style=theme.collapsed)
            elif not node.key:
                line.append("-", style=theme.branch)
        elif node.kind is NodeKind.SCALAR:
            line.append_text(self.render_value(node))
        elif node.kind is NodeKind.ALIAS:
            line.append("*" + node.value, style=theme.alias)

        if node.anchor:
            line.append(" ")
            line.append("&" + node.anchor, style=theme.anchor)

        if node.line_comment:
            line.append(" ")
            line.append(node.line_comment, style=theme.comment)

        return line

    def render_value(self, node: Node) -> Text:
        """Render a scalar value styled by its inferred type."""
        theme = self.theme
        value = node.value
        scalar_type = infer_type(node)

        if scalar_type is ScalarType.NULL:
            text = Text("null" if value in ("", "~") else value, style=theme.null)
        elif scalar_type is ScalarType.BOOLEAN:
            text = Text(value, style=theme.boolean)
        elif scalar_type is ScalarType.NUMBER:
            text = Text(value, style=theme.number)
        elif scalar_type is ScalarType.TIMESTAMP:
            text = Text(value, style=theme.timestamp)
        elif needs_quoting(value):
            text = Text(json.dumps(value, ensure_ascii=False), style=theme.string)
        else:
            text = Text(value, style=theme.string)

        if self.options.show_types:
            text.append(" ")
            text.append(type_label(node, scalar_type), style=theme.type_label)

        return text
