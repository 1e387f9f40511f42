"""
Structural diff engine for document trees.

Two trees are aligned recursively and each aligned pair becomes a DiffNode.

Alignment rules:
    - mappings: union of keys, visited once each in sorted order
    - sequences: positional, index by index (no move detection)
    - scalars and aliases: exact comparison of their text
    - differing kinds: modified, with no children
    - documents: transparent, their single values are compared in place

Diff Types:
    - unchanged: Values match exactly
    - added: Node exists only on the right
    - removed: Node exists only on the left
    - modified: Value differs, or a container has a changed descendant
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from yam.tree.nodes import Node, NodeKind

# Kinds compared by their literal text
_TEXT_KINDS = (NodeKind.SCALAR, NodeKind.ALIAS)


class DiffType(Enum):
    """Classification of one aligned pair of nodes."""

    UNCHANGED = "unchanged"
    ADDED = "added"
    REMOVED = "removed"
    MODIFIED = "modified"


@dataclass(eq=False)
class DiffNode:
    """One aligned pair in the diff tree.

    Attributes:
        left: Node from the left document (None if added).
        right: Node from the right document (None if removed).
        type: The diff classification.
        children: Aligned child pairs (containers on both sides only).
        path: JSONPath-like location, e.g. "$.spec.ports[0]".
    """

    left: Node | None
    right: Node | None
    type: DiffType
    children: list[DiffNode] = field(default_factory=list)
    path: str = "$"

    def is_changed(self) -> bool:
        return self.type is not DiffType.UNCHANGED

    def side(self) -> Node:
        """Return the right node if present, else the left one."""
        return self.right if self.right is not None else self.left


@dataclass
class DiffSummary:
    """Counts of non-unchanged diff nodes.

    Containers that are modified only because of a descendant are counted
    too, so one changed leaf under two mappings yields modified == 3.
    """

    added: int = 0
    removed: int = 0
    modified: int = 0
    total: int = 0


@dataclass
class DiffResult:
    """The diff tree, its summary and the labels of the compared files."""

    root: DiffNode | None
    summary: DiffSummary
    left_file: str = ""
    right_file: str = ""

    @property
    def has_changes(self) -> bool:
        return self.summary.total > 0


def compare(left: Node | None, right: Node | None) -> DiffResult:
    """Compare two trees and return the diff tree with its summary.

    Args:
        left: Root of the left tree (a Document or any node), or None.
        right: Root of the right tree, or None.

    Returns:
        A DiffResult; ``root`` is None only when both sides are None.

    Examples:
        >>> from yam.data_formats import YAMLLoader
        >>> loader = YAMLLoader()
        >>> result = compare(loader.parse("a: 1"), loader.parse("a: 2"))
        >>> result.summary.modified
        2
    """
    if left is None and right is None:
        return DiffResult(root=None, summary=DiffSummary())

    root = compare_nodes(left, right, "$")
    return DiffResult(root=root, summary=calculate_summary(root))


def compare_nodes(left: Node | None, right: Node | None, path: str) -> DiffNode | None:
    """Align two nodes at ``path`` and recurse into matching containers."""
    if left is None and right is None:
        return None
    if left is None:
        return DiffNode(left=None, right=right, type=DiffType.ADDED, path=path)
    if right is None:
        return DiffNode(left=left, right=None, type=DiffType.REMOVED, path=path)

    if left.kind is NodeKind.MAPPING and right.kind is NodeKind.MAPPING:
        left_by_key = {child.key: child for child in left.children}
        right_by_key = {child.key: child for child in right.children}
        children = [
            compare_nodes(left_by_key.get(key), right_by_key.get(key), f"{path}.{key}")
            for key in sorted(set(left_by_key) | set(right_by_key))
        ]
        return _container(left, right, children, path)

    if left.kind is NodeKind.SEQUENCE and right.kind is NodeKind.SEQUENCE:
        length = max(len(left.children), len(right.children))
        children = [
            compare_nodes(
                left.children[i] if i < len(left.children) else None,
                right.children[i] if i < len(right.children) else None,
                f"{path}[{i}]",
            )
            for i in range(length)
        ]
        return _container(left, right, children, path)

    if left.kind in _TEXT_KINDS and left.kind is right.kind:
        diff_type = DiffType.MODIFIED if left.value != right.value else DiffType.UNCHANGED
        return DiffNode(left=left, right=right, type=diff_type, path=path)

    if left.kind is not right.kind:
        return DiffNode(left=left, right=right, type=DiffType.MODIFIED, path=path)

    if left.kind is NodeKind.DOCUMENT:
        return compare_nodes(
            left.children[0] if left.children else None,
            right.children[0] if right.children else None,
            path,
        )

    return DiffNode(left=left, right=right, type=DiffType.UNCHANGED, path=path)


def _container(
    left: Node, right: Node, children: list[DiffNode | None], path: str
) -> DiffNode:
    kept = [child for child in children if child is not None]
    changed = any(child.is_changed() for child in kept)
    return DiffNode(
        left=left,
        right=right,
        type=DiffType.MODIFIED if changed else DiffType.UNCHANGED,
        children=kept,
        path=path,
    )


def calculate_summary(root: DiffNode | None) -> DiffSummary:
    """Count every non-unchanged node of a diff tree, containers included."""
    summary = DiffSummary()
    if root is None:
        return summary

    stack = [root]
    while stack:
        node = stack.pop()
        if node.type is DiffType.ADDED:
            summary.added += 1
        elif node.type is DiffType.REMOVED:
            summary.removed += 1
        elif node.type is DiffType.MODIFIED:
            summary.modified += 1
        stack.extend(reversed(node.children))

    summary.total = summary.added + summary.removed + summary.modified
    return summary


def walk_diff(root: DiffNode | None) -> list[DiffNode]:
    """Return the diff tree in pre-order."""
    nodes: list[DiffNode] = []
    stack = [root] if root is not None else []
    while stack:
        node = stack.pop()
        nodes.append(node)
        stack.extend(reversed(node.children))
    return nodes
