"""
Configuration model for yam viewer sessions.

The CLI constructs a ViewerConfig from its flags and hands it to the
renderer and the TUI, so behavior can be adjusted without global state.
"""

from __future__ import annotations

from dataclasses import dataclass

# Maximum number of undo entries kept per editing session
MAX_UNDO_STACK_SIZE = 10

# Names accepted by --style
TREE_STYLES = ("unicode", "ascii", "indent")

# Filenames that mean "read from standard input"
STDIN_NAMES = frozenset(["-", "stdin"])


@dataclass
class ViewerConfig:
    """
    Top-level configuration for a viewing/editing session.

    Attributes:
        filename: Source file name, or "stdin" when piped.
        tree_style: One of TREE_STYLES.
        show_types: Append <type> labels to scalar values.
        read_only: Refuse edits and saves (input came from a stream).
        undo_limit: Maximum undo history length.
        viewport_chrome: Rows taken by header, footer and help line.
    """

    filename: str = "stdin"
    tree_style: str = "unicode"
    show_types: bool = False
    read_only: bool = False
    undo_limit: int = MAX_UNDO_STACK_SIZE
    viewport_chrome: int = 4

    def __post_init__(self) -> None:
        if self.tree_style not in TREE_STYLES:
            raise ValueError(
                f"Unknown tree style '{self.tree_style}'. "
                f"Supported styles: {', '.join(TREE_STYLES)}"
            )
        if self.filename in STDIN_NAMES:
            self.read_only = True
