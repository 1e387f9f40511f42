"""
Navigation state for the side-by-side diff viewer.

The diff tree is flattened once, in pre-order, into rows. Unlike the
document viewer there is no folding or searching; the extra moves jump
between changed rows.
"""

from __future__ import annotations

from yam.diff.engine import DiffNode, DiffResult, walk_diff
from yam.tree.nodes import NodeKind


def _is_document(node: DiffNode) -> bool:
    return any(
        side is not None and side.kind is NodeKind.DOCUMENT
        for side in (node.left, node.right)
    )


class DiffNavigationState:
    """Cursor and viewport over the rows of a diff tree.

    Attributes:
        result: The diff being shown.
        rows: Diff nodes in pre-order, Document-level nodes excluded.
        cursor: Index of the selected row.
        offset: Index of the first row shown.
        viewport_height: Number of rows the screen can show.
    """

    def __init__(self, result: DiffResult, viewport_height: int = 20) -> None:
        self.result = result
        self.rows = [node for node in walk_diff(result.root) if not _is_document(node)]
        self.cursor = 0
        self.offset = 0
        self.viewport_height = max(1, viewport_height)

    def current_row(self) -> DiffNode | None:
        if 0 <= self.cursor < len(self.rows):
            return self.rows[self.cursor]
        return None

    def set_viewport_height(self, height: int) -> None:
        self.viewport_height = max(1, height)
        self.adjust_offset()

    def adjust_offset(self) -> None:
        """Scroll the minimum amount that keeps the cursor visible."""
        if self.cursor < self.offset:
            self.offset = self.cursor
        if self.cursor >= self.offset + self.viewport_height:
            self.offset = self.cursor - self.viewport_height + 1

    def move_cursor(self, delta: int) -> None:
        self.cursor = max(0, min(self.cursor + delta, len(self.rows) - 1))
        self.adjust_offset()

    def go_top(self) -> None:
        self.cursor = 0
        self.offset = 0

    def go_bottom(self) -> None:
        if self.rows:
            self.cursor = len(self.rows) - 1
            self.adjust_offset()

    def page_down(self) -> None:
        self.move_cursor(self.viewport_height)

    def page_up(self) -> None:
        self.move_cursor(-self.viewport_height)

    def next_diff(self) -> bool:
        """Jump to the next changed row; stay put at the last one."""
        for i in range(self.cursor + 1, len(self.rows)):
            if self.rows[i].is_changed():
                self.cursor = i
                self.adjust_offset()
                return True
        return False

    def prev_diff(self) -> bool:
        """Jump to the previous changed row; stay put at the first one."""
        for i in range(self.cursor - 1, -1, -1):
            if self.rows[i].is_changed():
                self.cursor = i
                self.adjust_offset()
                return True
        return False

    def position_text(self) -> str:
        return f"{self.cursor + 1}/{len(self.rows)}"
