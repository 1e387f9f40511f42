"""Modal screen for displaying everything known about one node."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import ScrollableContainer, Vertical
from textual.screen import ModalScreen
from textual.widgets import Label, Static

from yam.data_formats.json_loader import to_json
from yam.tree.nodes import Node, NodeKind, infer_type


def describe_node(node: Node) -> str:
    """Return a multi-line description of a node's metadata."""
    lines = [
        f"Path:    {node.path_string()}",
        f"Kind:    {node.kind.value}",
    ]
    if node.kind is NodeKind.SCALAR:
        lines.append(f"Type:    {infer_type(node).value}")
    if node.tag:
        lines.append(f"Tag:     {node.tag}")
    if node.anchor:
        lines.append(f"Anchor:  &{node.anchor}")
    if node.kind is NodeKind.ALIAS:
        lines.append(f"Alias:   *{node.value}")
    if node.is_container():
        lines.append(f"Items:   {len(node.children)}")
    if node.line:
        lines.append(f"Source:  line {node.line}, column {node.column}")
    for label, comment in (
        ("Head", node.head_comment),
        ("Line", node.line_comment),
        ("Foot", node.foot_comment),
    ):
        if comment:
            lines.append(f"{label} comment: {comment}")
    return "\n".join(lines)


class NodeDetailModal(ModalScreen[None]):
    """A modal screen that displays the metadata and full value of a node."""

    BINDINGS = [
        Binding("escape", "close", "Close"),
        Binding("enter", "close", "Close"),
        Binding("q", "close", "Close"),
    ]

    CSS = """
    NodeDetailModal {
        align: center middle;
    }

    NodeDetailModal > Vertical {
        width: 80%;
        height: 80%;
        background: $surface;
        border: solid $primary;
        padding: 1 2;
    }

    NodeDetailModal .modal-header {
        dock: top;
        height: auto;
        padding: 1 2;
        background: $primary;
        color: $text;
        text-align: center;
        text-style: bold;
    }

    NodeDetailModal .node-meta {
        dock: top;
        height: auto;
        padding: 1 2;
        background: $surface-darken-1;
        color: $secondary;
    }

    NodeDetailModal .content-container {
        height: 1fr;
        padding: 1 2;
        background: $surface-darken-2;
    }

    NodeDetailModal .node-content {
        width: 100%;
        height: auto;
        padding: 0;
    }

    NodeDetailModal .close-hint {
        dock: bottom;
        height: auto;
        padding: 1 2;
        text-align: center;
        color: $text-muted;
    }
    """

    def __init__(
        self,
        node: Node,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        """Initialize the node detail modal.

        Args:
            node: The node to describe.
            name: Optional name for the widget.
            id: Optional ID for the widget.
            classes: Optional CSS classes.
        """
        super().__init__(name=name, id=id, classes=classes)
        self.node = node

    def _format_value(self) -> str:
        """Scalars are shown as-is; containers as pretty-printed JSON."""
        if self.node.kind in (NodeKind.SCALAR, NodeKind.ALIAS):
            return self.node.value
        return to_json(self.node, indent=True)

    def compose(self) -> ComposeResult:
        """Compose the modal content."""
        title = self.node.label() or self.node.path_string()
        with Vertical():
            yield Label(title, classes="modal-header")
            yield Static(describe_node(self.node), classes="node-meta", markup=False)
            with ScrollableContainer(classes="content-container"):
                yield Static(self._format_value(), classes="node-content", markup=False)
            yield Label("Press [ESC] or [ENTER] to close", classes="close-hint", markup=False)

    def action_close(self) -> None:
        """Close the modal."""
        self.dismiss(None)
