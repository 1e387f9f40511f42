"""
Document Screen for exploring and editing one document.

Shows the document tree with fold indicators, a search/edit prompt and a
status line. Every key calls one NavigationState or EditSession method and
then redraws.
"""

from __future__ import annotations

import logging

from textual.app import ComposeResult
from textual.binding import Binding
from textual.screen import Screen
from textual.widgets import Footer, Input, Static

from yam.config import ViewerConfig
from yam.renderer import RenderOptions, TreeRenderer
from yam.tree.nodes import Node
from yam.tui.edit_session import MSG_SAVED, EditSession
from yam.tui.mixins import VimNavigationMixin
from yam.tui.navigation import NavigationState
from yam.tui.widgets import VIEWER_HELP, DocumentView, HelpModal, NodeDetailModal

LOG = logging.getLogger(__name__)

SEARCH_MODE = "search"
EDIT_MODE = "edit"


class DocumentScreen(VimNavigationMixin, Screen):
    """Interactive tree view of a single document.

    The screen owns no document state itself: folding, cursor and search
    live in a NavigationState, values and history in an EditSession.
    """

    # The prompt is the only focusable widget; it takes focus only while open
    AUTO_FOCUS = None

    CSS = """
    DocumentScreen {
        layout: vertical;
    }

    #header {
        height: 1;
        background: #21262D;
        color: #79C0FF;
        text-style: bold;
    }

    #prompt {
        height: 3;
    }

    #status {
        height: 1;
        background: #21262D;
        color: #8B949E;
        padding: 0 1;
    }
    """

    BINDINGS = VimNavigationMixin.VIM_BINDINGS + [
        Binding("up", "vim_up", "Up", show=False),
        Binding("down", "vim_down", "Down", show=False),
        Binding("home", "vim_top", "Top", show=False),
        Binding("end", "vim_bottom", "Bottom", show=False),
        Binding("pageup,b", "page_up", "Page Up", show=False),
        Binding("pagedown,f,space", "page_down", "Page Down", show=False),
        Binding("ctrl+u", "half_page_up", "Half Page Up", show=False),
        Binding("ctrl+d", "half_page_down", "Half Page Down", show=False),
        Binding("enter,o", "toggle_fold", "Fold", show=True),
        Binding("O", "expand_all", "Expand All", show=False),
        Binding("C", "collapse_all", "Collapse All", show=False),
        Binding("slash", "start_search", "Search", show=True),
        Binding("n", "next_match", "Next Match", show=False),
        Binding("N", "prev_match", "Prev Match", show=False),
        Binding("e", "start_edit", "Edit", show=True),
        Binding("ctrl+s", "save", "Save", show=True),
        Binding("u", "undo", "Undo", show=False),
        Binding("ctrl+r", "redo", "Redo", show=False),
        Binding("m", "show_node_detail", "Details", show=True),
        Binding("question_mark", "show_help", "Help", show=True),
        Binding("escape", "cancel_prompt", "Cancel", show=False),
        Binding("q", "request_quit", "Quit", show=True),
    ]

    def __init__(
        self,
        document: Node,
        session: EditSession,
        config: ViewerConfig,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        """Initialize the DocumentScreen.

        Args:
            document: Root of the parsed document tree.
            session: Edit session over the same tree.
            config: Viewer configuration (style, types, chrome height).
            name: Optional name for the screen.
            id: Optional ID for the screen.
            classes: Optional CSS classes for the screen.
        """
        super().__init__(name=name, id=id, classes=classes)
        self.config = config
        self.session = session
        self.state = NavigationState(document)
        self.renderer = TreeRenderer(
            RenderOptions(
                tree_style=config.tree_style,
                interactive=True,
                show_types=config.show_types,
            )
        )
        self._prompt_mode: str | None = None

    def compose(self) -> ComposeResult:
        yield Static(self._header_text(), id="header", markup=False)
        yield DocumentView(self.state, self.session, self.renderer, id="document")
        prompt = Input(id="prompt", disabled=True)
        prompt.display = False
        yield prompt
        yield Static(self._status_text(), id="status", markup=False)
        yield Footer()

    def on_mount(self) -> None:
        # DocumentView.on_resize refines this once the layout is known
        self.state.set_viewport_height(self.app.size.height - self.config.viewport_chrome)
        self.refresh_view()

    # VimNavigationMixin hooks

    def _navigation_state(self) -> NavigationState:
        return self.state

    def _before_navigation(self) -> bool:
        if self._prompt_mode is not None:
            return False
        self.session.clear_status()
        return True

    def refresh_view(self) -> None:
        self.query_one("#header", Static).update(self._header_text())
        self.query_one("#status", Static).update(self._status_text())
        self.query_one("#document", DocumentView).refresh()

    def _header_text(self) -> str:
        text = f" yam - {self.config.filename}"
        if self.session.is_dirty:
            text += " [modified]"
        if self.session.read_only:
            text += " [read-only]"
        return text

    def _status_text(self) -> str:
        if self._prompt_mode == EDIT_MODE:
            return "[Enter: confirm, Esc: cancel]"
        if self._prompt_mode == SEARCH_MODE:
            if self.state.matches:
                return f"[{self.state.match_index + 1}/{len(self.state.matches)}]"
            if self.state.query:
                return "[no matches]"
            return "[Enter: jump to first match, Esc: cancel]"
        if self.session.status_message:
            return self.session.status_message
        return self.state.position_text()

    # Paging and folding

    def action_page_up(self) -> None:
        if self._before_navigation():
            self.state.page_up()
            self.refresh_view()

    def action_page_down(self) -> None:
        if self._before_navigation():
            self.state.page_down()
            self.refresh_view()

    def action_half_page_up(self) -> None:
        if self._before_navigation():
            self.state.half_page_up()
            self.refresh_view()

    def action_half_page_down(self) -> None:
        if self._before_navigation():
            self.state.half_page_down()
            self.refresh_view()

    def action_toggle_fold(self) -> None:
        if self._before_navigation():
            self.state.toggle_fold()
            self.refresh_view()

    def action_expand_all(self) -> None:
        if self._before_navigation():
            self.state.expand_all()
            self.refresh_view()

    def action_collapse_all(self) -> None:
        if self._before_navigation():
            self.state.collapse_all()
            self.refresh_view()

    # Search

    def action_start_search(self) -> None:
        if not self._before_navigation():
            return
        self._open_prompt(SEARCH_MODE, "", "/ search")

    def action_next_match(self) -> None:
        if self._before_navigation():
            self.state.next_match()
            self.refresh_view()

    def action_prev_match(self) -> None:
        if self._before_navigation():
            self.state.prev_match()
            self.refresh_view()

    # Editing

    def action_start_edit(self) -> None:
        if not self._before_navigation():
            return
        node = self.state.current_node()
        if not self.session.start_edit(node):
            self.refresh_view()
            return
        self._open_prompt(EDIT_MODE, node.value, f"{node.label() or node.path_string()}:")

    def action_save(self) -> None:
        if not self._before_navigation():
            return
        if self.session.save():
            self.notify(MSG_SAVED)
        elif self.session.status_message.startswith("Error:"):
            self.notify(self.session.status_message, severity="error")
        self.refresh_view()

    def action_undo(self) -> None:
        if self._before_navigation():
            self.session.undo()
            self.refresh_view()

    def action_redo(self) -> None:
        if self._before_navigation():
            self.session.redo()
            self.refresh_view()

    # Prompt handling

    def _open_prompt(self, mode: str, value: str, placeholder: str) -> None:
        self._prompt_mode = mode
        prompt = self.query_one("#prompt", Input)
        prompt.placeholder = placeholder
        prompt.value = value
        prompt.display = True
        prompt.disabled = False
        prompt.focus()
        self.refresh_view()

    def _close_prompt(self) -> None:
        self._prompt_mode = None
        prompt = self.query_one("#prompt", Input)
        prompt.display = False
        prompt.disabled = True
        self.set_focus(None)
        self.refresh_view()

    def on_input_changed(self, event: Input.Changed) -> None:
        """Search incrementally while the query is typed."""
        if self._prompt_mode == SEARCH_MODE:
            self.state.search(event.value)
            self.refresh_view()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        if self._prompt_mode == SEARCH_MODE:
            self.state.confirm_search()
        elif self._prompt_mode == EDIT_MODE:
            self.session.confirm_edit(event.value)
        self._close_prompt()

    def action_cancel_prompt(self) -> None:
        if self._prompt_mode == SEARCH_MODE:
            self.state.clear_search()
        elif self._prompt_mode == EDIT_MODE:
            self.session.cancel_edit()
        else:
            return
        self._close_prompt()

    # Modals and quitting

    def action_show_node_detail(self) -> None:
        if not self._before_navigation():
            return
        node = self.state.current_node()
        if node is not None:
            self.app.push_screen(NodeDetailModal(node))

    def action_show_help(self) -> None:
        if self._before_navigation():
            self.app.push_screen(HelpModal(VIEWER_HELP, title="yam keys"))

    def action_request_quit(self) -> None:
        if not self._before_navigation():
            return
        if self.session.request_quit():
            LOG.debug("quitting viewer for %s", self.config.filename)
            self.app.exit()
        else:
            self.refresh_view()
