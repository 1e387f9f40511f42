"""
DocumentView widget: the scrolling tree area of the document viewer.

The widget draws the rows ``offset .. offset + viewport_height`` of the
navigation state's visible list, rendered by TreeRenderer, and highlights
the cursor row, edited rows and search matches.
"""

from __future__ import annotations

from typing import Any

from rich.text import Text
from textual import events
from textual.widget import Widget

from yam.renderer import TreeRenderer
from yam.tui.edit_session import EditSession
from yam.tui.navigation import NavigationState

# Row backgrounds; the cursor wins over modified, modified over match
CURSOR_STYLE = "on #30363D"
MODIFIED_STYLE = "on #3D2800"
MATCH_STYLE = "on #3D3200"


class DocumentView(Widget):
    """Viewport over a NavigationState."""

    DEFAULT_CSS = """
    DocumentView {
        height: 1fr;
        padding: 0 1;
    }
    """

    def __init__(
        self,
        state: NavigationState,
        session: EditSession,
        renderer: TreeRenderer,
        **kwargs: Any,
    ) -> None:
        """Initialize the view.

        Args:
            state: Navigation state to draw.
            session: Edit session, used to highlight edited rows.
            renderer: Tree renderer (interactive mode).
            **kwargs: Additional arguments passed to Widget.
        """
        super().__init__(**kwargs)
        self.state = state
        self.session = session
        self.renderer = renderer

    def on_resize(self, event: events.Resize) -> None:
        """Track the real number of rows available for the tree."""
        self.state.set_viewport_height(event.size.height)

    def render(self) -> Text:
        """Render the rows currently inside the viewport."""
        state = self.state
        lines = self.renderer.render_lines(state.root)
        end = min(state.offset + state.viewport_height, len(lines))

        output = Text(no_wrap=True, overflow="ellipsis")
        for index in range(state.offset, end):
            line = lines[index]
            node = state.visible[index]
            if index == state.cursor:
                line.stylize(CURSOR_STYLE)
            elif self.session.is_modified(node):
                line.stylize(MODIFIED_STYLE)
            elif state.is_match(index):
                line.stylize(MATCH_STYLE)
            output.append_text(line)
            if index < end - 1:
                output.append("\n")
        return output
