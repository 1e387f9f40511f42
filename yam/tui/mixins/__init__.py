"""Mixins for the TUI application."""

from yam.tui.mixins.dual_pane import DualPaneMixin
from yam.tui.mixins.vim_navigation import VimNavigationMixin

__all__ = [
    "DualPaneMixin",
    "VimNavigationMixin",
]
