"""
Diff Screen for side-by-side structural comparison.

Displays the left document's nodes next to the right document's nodes,
row-aligned by the diff tree, with keys to jump between differences.
"""

from __future__ import annotations

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import Screen
from textual.widgets import Footer, Static

from yam.diff.engine import DiffResult
from yam.diff.render import render_summary
from yam.tree.nodes import Node
from yam.tui.diff_navigation import DiffNavigationState
from yam.tui.mixins import DualPaneMixin, VimNavigationMixin
from yam.tui.widgets import DIFF_HELP, DiffPane, HelpModal


class DiffScreen(DualPaneMixin, VimNavigationMixin, Screen):
    """Side-by-side diff view.

    Both panes draw the same DiffNavigationState, so they always scroll
    together. The active pane only decides which side "m" describes.
    """

    CSS = """
    DiffScreen {
        layout: vertical;
    }

    #header {
        height: 1;
        background: #21262D;
        color: #79C0FF;
        text-style: bold;
    }

    #diff-container {
        height: 1fr;
    }

    #left-panel, #right-panel {
        width: 50%;
        padding: 0 1;
    }

    #left-panel {
        border-right: none;
    }

    #status {
        height: 1;
        background: #21262D;
        color: #8B949E;
        padding: 0 1;
    }
    """

    # All dual-pane bindings plus screen-specific bindings
    BINDINGS = DualPaneMixin.DUAL_PANE_BINDINGS + [
        Binding("up", "vim_up", "Up", show=False),
        Binding("down", "vim_down", "Down", show=False),
        Binding("home", "vim_top", "Top", show=False),
        Binding("end", "vim_bottom", "Bottom", show=False),
        Binding("pageup,b,ctrl+u", "page_up", "Page Up", show=False),
        Binding("pagedown,f,ctrl+d,space", "page_down", "Page Down", show=False),
        Binding("n,right_square_bracket", "next_diff", "Next Diff", show=True),
        Binding("N,left_square_bracket", "prev_diff", "Prev Diff", show=True),
        Binding("question_mark", "show_help", "Help", show=True),
    ]

    def __init__(
        self,
        result: DiffResult,
        viewport_chrome: int = 5,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        """Initialize the DiffScreen.

        Args:
            result: The comparison to display.
            viewport_chrome: Rows taken by header, pane titles and footer.
            name: Optional name for the screen.
            id: Optional ID for the screen.
            classes: Optional CSS classes for the screen.
        """
        super().__init__(name=name, id=id, classes=classes)
        self.result = result
        self.state = DiffNavigationState(result)
        self.viewport_chrome = viewport_chrome
        self._active_panel = "left"

    def compose(self) -> ComposeResult:
        left_name = self.result.left_file or "(left)"
        right_name = self.result.right_file or "(right)"

        yield Static(f" yam diff: {left_name} ↔ {right_name}", id="header", markup=False)
        with Horizontal(id="diff-container"):
            with Vertical(id="left-panel", classes="active"):
                yield Static(left_name, classes="panel-header", markup=False)
                yield DiffPane(self.state, "left", id="left-pane")
            with Vertical(id="right-panel", classes="inactive"):
                yield Static(right_name, classes="panel-header", markup=False)
                yield DiffPane(self.state, "right", id="right-pane")
        yield Static(self._status_text(), id="status", markup=False)
        yield Footer()

    def on_mount(self) -> None:
        self.state.set_viewport_height(self.app.size.height - self.viewport_chrome)
        self.refresh_view()

    def _navigation_state(self) -> DiffNavigationState:
        return self.state

    def _active_node(self) -> Node | None:
        row = self.state.current_row()
        if row is None:
            return None
        return row.left if self.is_left_active else row.right

    def refresh_view(self) -> None:
        self.query_one("#status", Static).update(self._status_text())
        for pane in self.query(DiffPane):
            pane.refresh()

    def _status_text(self) -> str:
        return f"{self.state.position_text()}  |  {render_summary(self.result.summary)}"

    def action_page_up(self) -> None:
        self.state.page_up()
        self.refresh_view()

    def action_page_down(self) -> None:
        self.state.page_down()
        self.refresh_view()

    def action_next_diff(self) -> None:
        self.state.next_diff()
        self.refresh_view()

    def action_prev_diff(self) -> None:
        self.state.prev_diff()
        self.refresh_view()

    def action_show_help(self) -> None:
        self.app.push_screen(HelpModal(DIFF_HELP, title="yam diff keys"))
