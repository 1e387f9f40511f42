"""
Edit, undo and save state for the document viewer.

EditSession mutates scalar values of the shared document tree. Every
rejected action leaves the tree untouched and explains itself through
``status_message``; errors never escape to the caller.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Callable

from yam.config import MAX_UNDO_STACK_SIZE
from yam.data_formats.base import write_atomic
from yam.errors import YamError
from yam.tree.nodes import Node, NodeKind

LOG = logging.getLogger(__name__)

# Status messages shown in the footer
MSG_NOT_SCALAR = "Cannot edit: not a scalar value"
MSG_EDIT_READ_ONLY = "Cannot edit: read-only (stdin)"
MSG_SAVE_READ_ONLY = "Cannot save: read-only (stdin)"
MSG_NO_CHANGES = "No changes to save"
MSG_NOTHING_TO_UNDO = "Nothing to undo"
MSG_UNDONE = "Undo: restored value"
MSG_NOTHING_TO_REDO = "Nothing to redo"
MSG_REDONE = "Redo: re-applied value"
MSG_SAVED = "Saved!"
MSG_UNSAVED = "Unsaved changes! Press q again to quit, or Ctrl+S to save"

# Tags pinned at load time from the literal; stale once the text changes
RESOLVED_TAGS = frozenset(["!!null", "!!bool", "!!int", "!!float"])


@dataclass
class UndoEntry:
    """One confirmed edit: the node and its value before and after."""

    node: Node
    old_value: str
    new_value: str


class EditSession:
    """Scalar editing with bounded undo/redo and atomic saving.

    Args:
        root: The document tree being edited.
        filename: Target of save(); ignored when read_only.
        serializer: Turns the tree into file contents.
        read_only: Refuse edits and saves (input came from a stream).
        undo_limit: Maximum entries kept on each history stack.

    Attributes:
        undo_stack: Confirmed edits, newest last.
        redo_stack: Undone edits, newest last.
        modified_nodes: Nodes whose current value differs from a prior one.
        modified: Unsaved-changes flag.
        status_message: Feedback for the last action ("" when none).
        editing: The node being edited, or None outside edit mode.
    """

    def __init__(
        self,
        root: Node,
        filename: str,
        serializer: Callable[[Node], str],
        read_only: bool = False,
        undo_limit: int = MAX_UNDO_STACK_SIZE,
    ) -> None:
        self.root = root
        self.filename = filename
        self.serializer = serializer
        self.read_only = read_only
        self.undo_stack: deque[UndoEntry] = deque(maxlen=undo_limit)
        self.redo_stack: deque[UndoEntry] = deque(maxlen=undo_limit)
        self.modified_nodes: set[Node] = set()
        self.modified = False
        self.status_message = ""
        self.editing: Node | None = None
        self.original_value = ""

    @property
    def is_dirty(self) -> bool:
        return self.modified or bool(self.modified_nodes)

    def is_modified(self, node: Node) -> bool:
        return node in self.modified_nodes

    def clear_status(self) -> None:
        self.status_message = ""

    # Editing

    def start_edit(self, node: Node | None) -> bool:
        """Enter edit mode on ``node``.

        Returns:
            True if editing started; otherwise status_message says why.
        """
        if node is None or node.kind is not NodeKind.SCALAR:
            self.status_message = MSG_NOT_SCALAR
            return False
        if self.read_only:
            self.status_message = MSG_EDIT_READ_ONLY
            return False

        self.editing = node
        self.original_value = node.value
        return True

    def confirm_edit(self, new_value: str) -> bool:
        """Apply ``new_value`` to the node being edited and leave edit mode.

        Returns:
            True if the value changed.
        """
        node = self.editing
        self.editing = None
        if node is None or new_value == self.original_value:
            return False

        self.undo_stack.append(UndoEntry(node, self.original_value, new_value))
        self.redo_stack.clear()
        self._set_value(node, new_value)
        self.modified = True
        self.modified_nodes.add(node)
        LOG.info("edited %s: %r -> %r", node.path_string(), self.original_value, new_value)
        return True

    def cancel_edit(self) -> None:
        self.editing = None
        self.original_value = ""

    # History

    def undo(self) -> bool:
        """Revert the most recent edit."""
        if not self.undo_stack:
            self.status_message = MSG_NOTHING_TO_UNDO
            return False

        entry = self.undo_stack.pop()
        self._set_value(entry.node, entry.old_value)
        self.redo_stack.append(entry)
        self._recompute_modified()
        self.status_message = MSG_UNDONE
        return True

    def redo(self) -> bool:
        """Re-apply the most recently undone edit."""
        if not self.redo_stack:
            self.status_message = MSG_NOTHING_TO_REDO
            return False

        entry = self.redo_stack.pop()
        self._set_value(entry.node, entry.new_value)
        self.undo_stack.append(entry)
        self.modified = True
        self.modified_nodes.add(entry.node)
        self.status_message = MSG_REDONE
        return True

    def _set_value(self, node: Node, value: str) -> None:
        node.value = value
        # Plain scalars re-infer their type from the new text
        if node.tag in RESOLVED_TAGS and not getattr(node.raw, "style", None):
            node.tag = None

    def _recompute_modified(self) -> None:
        # A node stays dirty while some remaining edit proves it diverged
        self.modified_nodes = {
            entry.node
            for entry in self.undo_stack
            if entry.node.value != entry.old_value
        }
        self.modified = bool(self.modified_nodes)

    # Saving

    def save(self) -> bool:
        """Serialize the tree and write it to ``filename`` atomically.

        Undo and redo history are kept after a successful save.

        Returns:
            True if the file was written.
        """
        if self.read_only:
            self.status_message = MSG_SAVE_READ_ONLY
            return False
        if not self.is_dirty:
            self.status_message = MSG_NO_CHANGES
            return False

        try:
            write_atomic(self.filename, self.serializer(self.root))
        except (YamError, OSError) as e:
            LOG.warning("save to %s failed: %s", self.filename, e)
            self.status_message = f"Error: {e}"
            return False

        self.modified = False
        self.modified_nodes = set()
        self.status_message = MSG_SAVED
        return True

    def request_quit(self) -> bool:
        """Ask to quit; the first request with unsaved changes is refused.

        Returns:
            True if the caller may exit now.
        """
        if self.modified:
            self.modified = False
            self.status_message = MSG_UNSAVED
            return False
        return True
