"""
Path queries over the document tree.

Paths use a jq-like dot/bracket notation:
    "."              the root
    ".metadata.name" mapping keys
    ".items[0].name" sequence indices (".items.0.name" is also accepted)
"""

from __future__ import annotations

from yam.errors import PathError
from yam.tree.nodes import Node, NodeKind, PathSegment, root_value


def parse_index(text: str) -> int | None:
    """Parse an optionally negative run of ASCII digits, else return None.

    Examples:
        >>> parse_index("12"), parse_index("+1"), parse_index("1_0")
        (12, None, None)
    """
    digits = text.removeprefix("-")
    if not (digits.isascii() and digits.isdigit()):
        return None
    return int(text)


def parse_path(path: str) -> list[PathSegment]:
    """Split a path query into key (str) and index (int) segments.

    Args:
        path: The query, e.g. ".spec.ports[0]".

    Returns:
        The segments; an empty list addresses the root.

    Raises:
        PathError: If the path does not start with "." or has a malformed
            bracket expression.

    Examples:
        >>> parse_path(".foo[0].bar")
        ['foo', 0, 'bar']
        >>> parse_path(".")
        []
    """
    if path in ("", "."):
        return []

    if not path.startswith("."):
        raise PathError(f"path must start with '.': {path}")

    body = path[1:]
    segments: list[PathSegment] = []
    current: list[str] = []
    i = 0

    while i < len(body):
        char = body[i]
        if char == ".":
            if current:
                segments.append("".join(current))
                current = []
            i += 1
        elif char == "[":
            if current:
                segments.append("".join(current))
                current = []
            end = body.find("]", i)
            if end == -1:
                raise PathError(f"unclosed bracket in path: {path}")
            index_text = body[i + 1 : end]
            index = parse_index(index_text)
            if index is None:
                raise PathError(f"invalid array index: {index_text}")
            segments.append(index)
            i = end + 1
        else:
            current.append(char)
            i += 1

    if current:
        segments.append("".join(current))

    return segments


def get_by_path(root: Node, path: str) -> Node:
    """Resolve a path query against a tree.

    Args:
        root: A Document node or any container node.
        path: The query string.

    Returns:
        The addressed node.

    Raises:
        PathError: If the path is malformed or does not resolve.
    """
    segments = parse_path(path)
    if not segments:
        return root

    current = root_value(root)
    if current is None:
        raise PathError("document is empty")

    for segment in segments:
        if current.kind is NodeKind.MAPPING:
            match = next(
                (child for child in current.children if child.key == str(segment)),
                None,
            )
            if match is None:
                raise PathError(f"path not found: {segment}")
            current = match
        elif current.kind is NodeKind.SEQUENCE:
            index = segment if isinstance(segment, int) else parse_index(segment)
            if index is None:
                raise PathError(f"expected array index, got: {segment}")
            if index < 0 or index >= len(current.children):
                raise PathError(
                    f"array index out of bounds: {index} "
                    f"(length: {len(current.children)})"
                )
            current = current.children[index]
        else:
            raise PathError(f"cannot traverse into scalar value at: {segment}")

    return current
