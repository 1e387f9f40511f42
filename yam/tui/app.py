"""
Main Textual application for yam.

The app runs in one of two modes: viewing/editing a single document, or
showing a side-by-side diff of two documents. All state lives in the
screens' state models; the app only picks the screen and owns the theme.
"""

from __future__ import annotations

import logging
import os
from enum import Enum

from textual.app import App
from textual.binding import Binding

from yam.config import ViewerConfig
from yam.data_formats.base import DocumentLoader
from yam.diff.engine import DiffResult
from yam.tree.nodes import Node
from yam.tui.edit_session import EditSession
from yam.tui.views import DiffScreen, DocumentScreen

LOG = logging.getLogger(__name__)


class AppMode(Enum):
    """Application mode for single document vs diff."""

    VIEW = "view"
    DIFF = "diff"


class YamApp(App):
    """A Textual app for exploring, editing and comparing documents."""

    TITLE = "yam"

    CSS = """
    Screen {
        background: $surface;
    }

    Footer {
        dock: bottom;
        height: 1;
        background: $primary-darken-2;
    }

    .panel-header {
        height: 1;
        text-align: center;
        text-style: bold;
    }

    #left-panel.active, #right-panel.active {
        border: solid $accent;
    }

    #left-panel.inactive, #right-panel.inactive {
        border: solid $primary-darken-2;
    }

    Static {
        width: 100%;
    }
    """

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit", show=False),
    ]

    def __init__(
        self,
        mode: AppMode,
        document: Node | None = None,
        session: EditSession | None = None,
        config: ViewerConfig | None = None,
        diff_result: DiffResult | None = None,
    ):
        """Initialize the app.

        Args:
            mode: Which screen to open.
            document: Document tree (VIEW mode).
            session: Edit session over ``document`` (VIEW mode).
            config: Viewer configuration (VIEW mode).
            diff_result: The comparison to show (DIFF mode).
        """
        super().__init__()
        if mode is AppMode.VIEW and (document is None or session is None):
            raise ValueError("VIEW mode needs a document and an edit session")
        if mode is AppMode.DIFF and diff_result is None:
            raise ValueError("DIFF mode needs a diff result")
        self.app_mode = mode
        self.document = document
        self.session = session
        self.config = config or ViewerConfig()
        self.diff_result = diff_result

    def on_mount(self) -> None:
        """Push the screen for the selected mode."""
        if self.app_mode is AppMode.DIFF:
            left = os.path.basename(self.diff_result.left_file) or "(left)"
            right = os.path.basename(self.diff_result.right_file) or "(right)"
            self.title = f"yam diff - {left} ↔ {right}"
            self.push_screen(DiffScreen(self.diff_result))
        else:
            self.title = f"yam - {os.path.basename(self.config.filename)}"
            self.push_screen(DocumentScreen(self.document, self.session, self.config))


def build_viewer_app(
    document: Node,
    loader: DocumentLoader,
    config: ViewerConfig,
    view_root: Node | None = None,
) -> YamApp:
    """Create the viewer app, wiring an edit session to the loader's serializer.

    Args:
        document: The whole parsed document; saving always writes all of it.
        loader: Loader whose serializer produces the saved text.
        config: Viewer configuration.
        view_root: Subtree to show instead of the whole document (path query).
    """
    session = EditSession(
        document,
        config.filename,
        loader.serialize,
        read_only=config.read_only,
        undo_limit=config.undo_limit,
    )
    return YamApp(
        AppMode.VIEW, document=view_root or document, session=session, config=config
    )


def run_viewer(
    document: Node,
    loader: DocumentLoader,
    config: ViewerConfig,
    view_root: Node | None = None,
) -> None:
    """Run the interactive viewer until the user quits."""
    LOG.info("opening viewer for %s", config.filename)
    build_viewer_app(document, loader, config, view_root).run()


def run_diff(result: DiffResult) -> None:
    """Run the interactive diff viewer until the user quits."""
    LOG.info("opening diff viewer for %s and %s", result.left_file, result.right_file)
    YamApp(AppMode.DIFF, diff_result=result).run()
