"""
Vim Navigation Mixin for vim-style cursor keys.

Provides j/k/g/G navigation that works on every yam screen by delegating
to the screen's navigation state model.

Note: h/l bindings for pane switching are defined in DualPaneMixin.
"""

from __future__ import annotations

from typing import Any

from textual.binding import Binding


class VimNavigationMixin:
    """Mixin providing vim-style navigation keybindings.

    This mixin adds vim keybindings that delegate to the screen's state:
    - j/k: Move cursor down/up
    - g: Jump to first row
    - G: Jump to last row

    Screens implement ``_navigation_state()`` (returning an object with
    ``move_cursor``, ``go_top`` and ``go_bottom``) and ``refresh_view()``.

    Usage:
        class MyScreen(VimNavigationMixin, Screen):
            BINDINGS = VimNavigationMixin.VIM_BINDINGS + [...]

        # For dual-pane screens (DualPaneMixin MUST come first for h/l to work):
        class MyDualScreen(DualPaneMixin, VimNavigationMixin, Screen):
            BINDINGS = DualPaneMixin.DUAL_PANE_BINDINGS + [...]
    """

    VIM_BINDINGS = [
        Binding("j", "vim_down", "Down", show=False),
        Binding("k", "vim_up", "Up", show=False),
        Binding("g", "vim_top", "Top", show=False),
        Binding("G", "vim_bottom", "Bottom", show=False),
    ]

    def _navigation_state(self) -> Any:
        """Return the state model the vim keys move, or None."""
        return None

    def refresh_view(self) -> None:
        """Redraw the screen after the state changed."""

    def _before_navigation(self) -> bool:
        """Hook run before each move; return False to ignore the key."""
        return True

    def action_vim_down(self) -> None:
        """Move cursor down (vim j key)."""
        state = self._navigation_state()
        if state is None or not self._before_navigation():
            return
        state.move_cursor(1)
        self.refresh_view()

    def action_vim_up(self) -> None:
        """Move cursor up (vim k key)."""
        state = self._navigation_state()
        if state is None or not self._before_navigation():
            return
        state.move_cursor(-1)
        self.refresh_view()

    def action_vim_top(self) -> None:
        """Jump to first row (vim g)."""
        state = self._navigation_state()
        if state is None or not self._before_navigation():
            return
        state.go_top()
        self.refresh_view()

    def action_vim_bottom(self) -> None:
        """Jump to last row (vim G)."""
        state = self._navigation_state()
        if state is None or not self._before_navigation():
            return
        state.go_bottom()
        self.refresh_view()
