"""TUI views for the yam viewer and differ."""

from yam.tui.views.diff_screen import DiffScreen
from yam.tui.views.document_screen import DocumentScreen

__all__ = ["DiffScreen", "DocumentScreen"]
