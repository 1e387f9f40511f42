"""TUI widgets for the yam viewer."""

from yam.tui.widgets.diff_pane import DiffPane, format_side
from yam.tui.widgets.document_view import DocumentView
from yam.tui.widgets.help_modal import DIFF_HELP, VIEWER_HELP, HelpModal
from yam.tui.widgets.node_detail_modal import NodeDetailModal, describe_node

__all__ = [
    # Document tree viewport
    "DocumentView",
    # Diff panes
    "DiffPane",
    "format_side",
    # Modals
    "NodeDetailModal",
    "describe_node",
    "HelpModal",
    "VIEWER_HELP",
    "DIFF_HELP",
]
