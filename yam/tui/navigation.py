"""
Navigation state for the document viewer.

NavigationState owns the fold flags of a document tree and the derived
list of visible nodes, plus cursor, scroll offset and search matches.
Every method is a synchronous state transition triggered by one key
press; the screen redraws from the resulting state.
"""

from __future__ import annotations

import logging

from yam.tree.nodes import Node, NodeKind, flatten_visible, root_value, walk_all

LOG = logging.getLogger(__name__)


class NavigationState:
    """Cursor, viewport, fold and search state over one document tree.

    Attributes:
        root: The document tree (usually a Document node).
        visible: Unfolded nodes in display order, Document node excluded.
        cursor: Index into ``visible`` of the selected row.
        offset: Index of the first row shown in the viewport.
        matches: Indices into ``visible`` of search matches, in order.
        match_index: Position of the current match within ``matches``.
        viewport_height: Number of tree rows the screen can show.
        query: The last search query.
    """

    def __init__(self, root: Node, viewport_height: int = 20) -> None:
        self.root = root
        self.visible: list[Node] = []
        self.cursor = 0
        self.offset = 0
        self.matches: list[int] = []
        self.match_index = 0
        self.viewport_height = max(1, viewport_height)
        self.query = ""
        self.rebuild()

    # Flattening

    def rebuild(self) -> None:
        """Recompute the visible list from the fold flags."""
        nodes = flatten_visible(self.root)
        if nodes and nodes[0].kind is NodeKind.DOCUMENT:
            nodes = nodes[1:]
        self.visible = nodes

    def _clamp_cursor(self) -> None:
        if self.cursor >= len(self.visible):
            self.cursor = len(self.visible) - 1
        if self.cursor < 0:
            self.cursor = 0

    def current_node(self) -> Node | None:
        """Return the node under the cursor, or None for an empty tree."""
        if 0 <= self.cursor < len(self.visible):
            return self.visible[self.cursor]
        return None

    def set_viewport_height(self, height: int) -> None:
        """Resize the viewport and keep the cursor on screen."""
        self.viewport_height = max(1, height)
        self.adjust_offset()

    # Cursor movement

    def adjust_offset(self) -> None:
        """Scroll the minimum amount that keeps the cursor visible."""
        if self.cursor < self.offset:
            self.offset = self.cursor
        if self.cursor >= self.offset + self.viewport_height:
            self.offset = self.cursor - self.viewport_height + 1

    def move_cursor(self, delta: int) -> None:
        """Move the cursor by ``delta`` rows, clamped to the visible list."""
        self.cursor += delta
        self._clamp_cursor()
        self.adjust_offset()

    def go_top(self) -> None:
        self.cursor = 0
        self.offset = 0

    def go_bottom(self) -> None:
        if self.visible:
            self.cursor = len(self.visible) - 1
            self.adjust_offset()

    def page_down(self) -> None:
        self.move_cursor(self.viewport_height)

    def page_up(self) -> None:
        self.move_cursor(-self.viewport_height)

    def half_page_down(self) -> None:
        self.move_cursor(max(1, self.viewport_height // 2))

    def half_page_up(self) -> None:
        self.move_cursor(-max(1, self.viewport_height // 2))

    # Folding

    def toggle_fold(self, node: Node | None = None) -> bool:
        """Flip the fold state of ``node`` (default: the cursor node).

        Only containers with at least one child can be folded.

        Returns:
            True if the fold state changed.
        """
        node = node if node is not None else self.current_node()
        if node is None or not (node.is_container() and node.has_children()):
            return False

        node.collapsed = not node.collapsed
        self.rebuild()
        self._clamp_cursor()
        self.adjust_offset()
        return True

    def expand_all(self) -> None:
        """Expand every container."""

        def expand(node: Node) -> bool:
            node.collapsed = False
            return True

        walk_all(self.root, expand)
        self.rebuild()

    def collapse_all(self) -> None:
        """Collapse every container with children except the displayed root."""
        top = root_value(self.root)

        def collapse(node: Node) -> bool:
            if node is top or node.kind is NodeKind.DOCUMENT:
                return True
            if node.is_container() and node.has_children():
                node.collapsed = True
            return True

        walk_all(self.root, collapse)
        self.rebuild()
        self._clamp_cursor()
        self.offset = 0

    # Search

    def search(self, query: str) -> int:
        """Find nodes whose key or value contains ``query``.

        Matching is case-insensitive and covers the whole tree, including
        collapsed branches, whose ancestors are expanded so every match is
        visible.

        Args:
            query: The text to look for. An empty query clears matches and
                leaves fold state alone.

        Returns:
            The number of matches.
        """
        self.query = query
        self.matches = []
        self.match_index = 0
        if not query:
            return 0

        needle = query.lower()
        matched: list[Node] = []

        def visit(node: Node) -> bool:
            if node.kind is NodeKind.DOCUMENT:
                return True
            if needle in (node.key or "").lower() or needle in node.value.lower():
                matched.append(node)
            return True

        walk_all(self.root, visit)

        for node in matched:
            for ancestor in node.ancestors():
                ancestor.collapsed = False

        self.rebuild()
        matched_ids = {id(node) for node in matched}
        self.matches = [
            i for i, node in enumerate(self.visible) if id(node) in matched_ids
        ]
        self._clamp_cursor()
        LOG.debug("search %r: %d matches", query, len(self.matches))
        return len(self.matches)

    def confirm_search(self) -> None:
        """Jump to the first match, if any."""
        if self.matches:
            self.match_index = 0
            self.cursor = self.matches[0]
            self.adjust_offset()

    def clear_search(self) -> None:
        self.query = ""
        self.matches = []
        self.match_index = 0

    def next_match(self) -> None:
        """Move to the next match, wrapping around."""
        if not self.matches:
            return
        self.match_index = (self.match_index + 1) % len(self.matches)
        self.cursor = self.matches[self.match_index]
        self.adjust_offset()

    def prev_match(self) -> None:
        """Move to the previous match, wrapping around."""
        if not self.matches:
            return
        self.match_index = (self.match_index - 1) % len(self.matches)
        self.cursor = self.matches[self.match_index]
        self.adjust_offset()

    def is_match(self, index: int) -> bool:
        return index in self.matches

    def position_text(self) -> str:
        """Return "cursor/total | path" for the status line."""
        position = f"{self.cursor + 1}/{len(self.visible)}"
        node = self.current_node()
        if node is not None:
            position += " | " + node.path_string()
        if self.matches:
            position += f"  [match {self.match_index + 1}/{len(self.matches)}]"
        return position
