"""
Dual Pane Mixin for left/right pane switching in the diff view.

Both panes scroll together (they draw the same rows), so switching only
changes which side is highlighted and which side "m" describes:
- action_switch_panel(): Toggle between left and right panes
- action_vim_left(): Make the left pane active (vim h key)
- action_vim_right(): Make the right pane active (vim l key)
- _update_panel_styles(): Update active/inactive CSS classes on panes

Usage:
    # IMPORTANT: DualPaneMixin MUST come before VimNavigationMixin in MRO
    class MyDualPaneScreen(DualPaneMixin, VimNavigationMixin, Screen):
        BINDINGS = DualPaneMixin.DUAL_PANE_BINDINGS + [...]
"""

from __future__ import annotations

from textual.binding import Binding
from textual.css.query import NoMatches

from yam.tree.nodes import Node


class DualPaneMixin:
    """Mixin for screens with a left and a right pane.

    Subclasses implement ``_active_node()`` to return the node shown in the
    active pane under the cursor.

    Class Attributes:
        DUAL_PANE_BINDINGS: All bindings for dual-pane screens (includes
            vim j/k/g/G navigation plus pane switching).
    """

    DUAL_PANE_BINDINGS = [
        # Vim navigation (j/k/g/G from VimNavigationMixin)
        Binding("j", "vim_down", "Down", show=False),
        Binding("k", "vim_up", "Up", show=False),
        Binding("g", "vim_top", "Top", show=False),
        Binding("G", "vim_bottom", "Bottom", show=False),
        # Pane switching (h/l vim-style + arrow keys + tab)
        Binding("h", "vim_left", "Left Pane", show=False),
        Binding("l", "vim_right", "Right Pane", show=False),
        Binding("left", "vim_left", "Left Pane", show=False),
        Binding("right", "vim_right", "Right Pane", show=False),
        Binding("tab", "switch_panel", "Switch Pane", show=True),
        # Common actions
        Binding("escape", "quit", "Quit", show=False),
        Binding("q", "quit", "Quit", show=True),
        Binding("m", "show_node_detail", "Details", show=True),
    ]

    _active_panel: str = "left"
    """Currently active pane identifier ('left' or 'right')."""

    @property
    def is_left_active(self) -> bool:
        return self._active_panel == "left"

    @property
    def is_right_active(self) -> bool:
        return self._active_panel == "right"

    def action_switch_panel(self) -> None:
        """Toggle between left and right panes."""
        self._active_panel = "right" if self._active_panel == "left" else "left"
        self._update_panel_styles()

    def action_vim_left(self) -> None:
        """Switch to left pane (vim h key)."""
        if self._active_panel != "left":
            self._active_panel = "left"
            self._update_panel_styles()

    def action_vim_right(self) -> None:
        """Switch to right pane (vim l key)."""
        if self._active_panel != "right":
            self._active_panel = "right"
            self._update_panel_styles()

    def action_quit(self) -> None:
        """Exit the application."""
        self.app.exit()

    def action_show_node_detail(self) -> None:
        """Show the node detail modal for the active pane's node.

        Rows that exist only on the other side have nothing to show.
        """
        from yam.tui.widgets import NodeDetailModal

        node = self._active_node()
        if node is None:
            self.notify(f"Nothing on the {self._active_panel} side", severity="warning")
            return
        self.app.push_screen(NodeDetailModal(node))

    def _active_node(self) -> Node | None:
        raise NotImplementedError

    def _update_panel_styles(self) -> None:
        """Update active/inactive CSS classes on #left-panel and #right-panel."""
        try:
            left = self.query_one("#left-panel")
            right = self.query_one("#right-panel")
        except NoMatches:
            return

        for panel, is_active in [(left, self.is_left_active), (right, self.is_right_active)]:
            if is_active:
                panel.remove_class("inactive")
                panel.add_class("active")
            else:
                panel.remove_class("active")
                panel.add_class("inactive")
