"""
Document tree model.

A parsed YAML or JSON document is represented as a tree of Node objects.
Each node knows its kind, its scalar value (if any), its key or index
within its parent, its depth and its path from the root. Parents are held
through weak references so the tree is owned top-down by the root.

Document nodes are transparent: the single top-level value shares the
Document's depth (0) and path ([]), and is treated as the root for
folding, navigation and path queries.
"""

from __future__ import annotations

import weakref
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Iterator, Union

# A path segment is a mapping key or a sequence index
PathSegment = Union[str, int]

# Values matched case-insensitively when a scalar has no explicit tag
NULL_LITERALS = frozenset(["null", "~", ""])
BOOLEAN_LITERALS = frozenset(["true", "false", "yes", "no", "on", "off"])
TRUTHY_LITERALS = frozenset(["true", "yes", "on"])


class NodeKind(Enum):
    """Kind of a document tree node."""

    DOCUMENT = "document"
    MAPPING = "mapping"
    SEQUENCE = "sequence"
    SCALAR = "scalar"
    ALIAS = "alias"


class ScalarType(Enum):
    """Inferred type of a scalar value."""

    STRING = "str"
    NUMBER = "number"
    BOOLEAN = "bool"
    NULL = "null"
    TIMESTAMP = "timestamp"


# Short YAML core tags and the scalar type they pin
TAG_TYPES: dict[str, ScalarType] = {
    "!!null": ScalarType.NULL,
    "!!bool": ScalarType.BOOLEAN,
    "!!int": ScalarType.NUMBER,
    "!!float": ScalarType.NUMBER,
    "!!timestamp": ScalarType.TIMESTAMP,
    "!!str": ScalarType.STRING,
}


@dataclass(eq=False)
class Node:
    """One element of a parsed document.

    Nodes compare and hash by identity, so they can be used as members
    of sets (e.g. the set of edited nodes).

    Attributes:
        kind: The node kind.
        value: Scalar text; for aliases, the anchor name being referenced.
        tag: Short YAML tag (e.g. "!!str", "!!int") or None if untagged.
        key: Mapping key when owned by a mapping, else None.
        index: Position in the parent sequence, or pair order in a mapping.
        depth: Distance from the root (the Document's value has depth 0).
        path: Keys and indices from the root to this node.
        collapsed: Fold state used by the navigation model.
        anchor: Anchor name declared on this node, if any.
        head_comment: Comment lines preceding the node.
        line_comment: Comment on the same line as the node.
        foot_comment: Comment lines following the node.
        line: 1-based source line (0 if unknown).
        column: 1-based source column (0 if unknown).
        children: Ordered child nodes for containers.
        raw: The parser's own node this one was built from, used when
            writing the document back out.
    """

    kind: NodeKind
    value: str = ""
    tag: str | None = None
    key: str | None = None
    index: int = 0
    depth: int = 0
    path: list[PathSegment] = field(default_factory=list)
    collapsed: bool = False
    anchor: str | None = None
    head_comment: str = ""
    line_comment: str = ""
    foot_comment: str = ""
    line: int = 0
    column: int = 0
    children: list[Node] = field(default_factory=list, repr=False)
    raw: Any = field(default=None, repr=False)
    _parent_ref: weakref.ReferenceType | None = field(
        default=None, repr=False, compare=False
    )

    @property
    def parent(self) -> Node | None:
        """The owning container, or None for the root."""
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    def add_child(self, child: Node, key: str | None = None) -> Node:
        """Attach a child, populating its key, index, depth and path.

        Args:
            child: The node to attach. Its own children must be added after
                this call so that depth and path propagate top-down.
            key: The mapping key (required when self is a mapping).

        Returns:
            The attached child.
        """
        child._parent_ref = weakref.ref(self)
        child.index = len(self.children)

        if self.kind is NodeKind.DOCUMENT:
            child.depth = self.depth
            child.path = list(self.path)
        elif self.kind is NodeKind.MAPPING:
            child.key = "" if key is None else key
            child.depth = self.depth + 1
            child.path = self.path + [child.key]
        elif self.kind is NodeKind.SEQUENCE:
            child.depth = self.depth + 1
            child.path = self.path + [child.index]
        else:
            raise ValueError(f"{self.kind.value} nodes cannot have children")

        self.children.append(child)
        return child

    def is_container(self) -> bool:
        """Whether this node kind can hold children."""
        return self.kind in (NodeKind.MAPPING, NodeKind.SEQUENCE, NodeKind.DOCUMENT)

    def has_children(self) -> bool:
        return len(self.children) > 0

    def ancestors(self) -> Iterator[Node]:
        """Yield the parent chain, nearest first."""
        current = self.parent
        while current is not None:
            yield current
            current = current.parent

    def path_string(self) -> str:
        """Return the path for display, e.g. "$" or "$.spec.ports.0"."""
        if not self.path:
            return "$"
        return "$." + ".".join(str(segment) for segment in self.path)

    def label(self) -> str:
        """Return the key, or "[index]" for sequence items, or ""."""
        if self.key is not None:
            return self.key
        parent = self.parent
        if parent is not None and parent.kind is NodeKind.SEQUENCE:
            return f"[{self.index}]"
        return ""


def root_value(node: Node) -> Node | None:
    """Return the top-level value, skipping a Document wrapper."""
    if node.kind is NodeKind.DOCUMENT:
        return node.children[0] if node.children else None
    return node


def is_number(text: str) -> bool:
    """Check ``text`` against the loose numeric grammar used for display.

    Accepts an optional sign, digits, at most one decimal point, at most
    one exponent marker followed by an optional sign, and underscores as
    separators anywhere.

    Examples:
        >>> is_number("1_000.5e-3")
        True
        >>> is_number("1.2.3")
        False
    """
    if not text:
        return False

    start = 0
    if text[0] in "+-":
        start = 1
        if len(text) == 1:
            return False

    has_digit = False
    has_dot = False
    has_exponent = False

    for i in range(start, len(text)):
        char = text[i]
        if "0" <= char <= "9":
            has_digit = True
        elif char == ".":
            if has_dot or has_exponent:
                return False
            has_dot = True
        elif char in "eE":
            if has_exponent or not has_digit:
                return False
            has_exponent = True
            has_digit = False
        elif char in "+-":
            if i == 0 or text[i - 1] not in "eE":
                return False
        elif char == "_":
            continue
        else:
            return False

    return has_digit


def infer_type(node: Node) -> ScalarType:
    """Infer the display type of a scalar node.

    An explicit core tag wins. Untagged (or "!"-tagged) values are
    matched against null and boolean literals, then the numeric grammar.
    Non-scalar nodes are reported as strings.
    """
    if node.kind is not NodeKind.SCALAR:
        return ScalarType.STRING

    if node.tag in TAG_TYPES:
        return TAG_TYPES[node.tag]

    if node.tag in (None, "", "!"):
        lowered = node.value.lower()
        if lowered in NULL_LITERALS:
            return ScalarType.NULL
        if lowered in BOOLEAN_LITERALS:
            return ScalarType.BOOLEAN
        if is_number(node.value):
            return ScalarType.NUMBER

    return ScalarType.STRING


def walk_all(node: Node, visit: Callable[[Node], bool]) -> None:
    """Depth-first pre-order traversal over every node.

    Returning False from ``visit`` skips that node's children; siblings
    are still visited.
    """
    stack = [node]
    while stack:
        current = stack.pop()
        if not visit(current):
            continue
        stack.extend(reversed(current.children))


def walk_visible(node: Node, visit: Callable[[Node], bool]) -> None:
    """Like walk_all, but never descends into collapsed nodes."""
    stack = [node]
    while stack:
        current = stack.pop()
        if not visit(current) or current.collapsed:
            continue
        stack.extend(reversed(current.children))


def flatten(root: Node) -> list[Node]:
    """Return every node in pre-order."""
    nodes: list[Node] = []

    def collect(node: Node) -> bool:
        nodes.append(node)
        return True

    walk_all(root, collect)
    return nodes


def flatten_visible(root: Node) -> list[Node]:
    """Return the nodes reachable without entering collapsed containers."""
    nodes: list[Node] = []

    def collect(node: Node) -> bool:
        nodes.append(node)
        return True

    walk_visible(root, collect)
    return nodes
