"""Modal screen listing the key bindings of the current view."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Label, Static

VIEWER_HELP: list[tuple[str, str]] = [
    ("↑/k ↓/j", "move up / down"),
    ("PgUp/b PgDn/f/Space", "page up / down"),
    ("Ctrl+U Ctrl+D", "half page up / down"),
    ("g/Home G/End", "go to top / bottom"),
    ("Enter/o", "toggle fold"),
    ("O C", "expand all / collapse all"),
    ("/ n N", "search, next match, previous match"),
    ("e", "edit scalar value"),
    ("u Ctrl+R", "undo / redo"),
    ("Ctrl+S", "save"),
    ("m", "node details"),
    ("?", "help"),
    ("q", "quit"),
]

DIFF_HELP: list[tuple[str, str]] = [
    ("↑/k ↓/j", "move up / down"),
    ("PgUp/b PgDn/f/Space", "page up / down"),
    ("g/Home G/End", "go to top / bottom"),
    ("n/] N/[", "next / previous difference"),
    ("h/l Tab", "switch active pane"),
    ("m", "node details (active pane)"),
    ("?", "help"),
    ("q/Esc", "quit"),
]


def format_help(entries: list[tuple[str, str]]) -> str:
    """Lay out (keys, description) pairs in two aligned columns."""
    width = max(len(keys) for keys, _ in entries)
    return "\n".join(f"{keys.ljust(width)}  {description}" for keys, description in entries)


class HelpModal(ModalScreen[None]):
    """A modal screen showing key bindings."""

    BINDINGS = [
        Binding("escape", "close", "Close"),
        Binding("question_mark", "close", "Close"),
        Binding("q", "close", "Close"),
    ]

    CSS = """
    HelpModal {
        align: center middle;
    }

    HelpModal > Vertical {
        width: 60;
        height: auto;
        background: $surface;
        border: solid $primary;
        padding: 1 2;
    }

    HelpModal .modal-header {
        width: 100%;
        text-align: center;
        text-style: bold;
        background: $primary;
        color: $text;
    }
    """

    def __init__(self, entries: list[tuple[str, str]], title: str = "Keys") -> None:
        super().__init__()
        self.entries = entries
        self.title_text = title

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Label(self.title_text, classes="modal-header")
            yield Static(format_help(self.entries), markup=False)

    def action_close(self) -> None:
        self.dismiss(None)
