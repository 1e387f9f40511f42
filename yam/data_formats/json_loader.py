"""
JSON format document loader.

This module provides the JSONLoader class, which parses JSON text into the
same document tree as YAML. Object key order is preserved and number
literals keep their source text.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from yam.data_formats.base import DocumentLoader
from yam.errors import ParseError
from yam.tree.nodes import (
    BOOLEAN_LITERALS,
    TRUTHY_LITERALS,
    Node,
    NodeKind,
    ScalarType,
    infer_type,
    root_value,
)

LOG = logging.getLogger(__name__)


class _Pairs(list):
    """Ordered (key, value) pairs of a JSON object, duplicates kept."""


class _NumberLiteral(str):
    """A JSON number kept as its source text."""


def _number_tag(literal: str) -> str:
    return "!!float" if any(c in literal for c in ".eE") else "!!int"


class JSONLoader(DocumentLoader):
    """Document loader for JSON format.

    Attributes:
        format_name: Returns 'json'.
        supported_extensions: Returns ['.json'].
    """

    def __init__(self, indent: bool = True) -> None:
        self.indent = indent

    @property
    def format_name(self) -> str:
        """Return the format name."""
        return "json"

    @property
    def supported_extensions(self) -> list[str]:
        """Return supported file extensions."""
        return [".json"]

    def parse(self, text: str) -> Node:
        """Parse JSON text into a document tree.

        Args:
            text: JSON source.

        Returns:
            A Document node wrapping the top-level value.

        Raises:
            ParseError: If the text is empty or not valid JSON.

        Examples:
            >>> doc = JSONLoader().parse('{"b": 1, "a": 2}')
            >>> [child.key for child in doc.children[0].children]
            ['b', 'a']
        """
        if not text.strip():
            raise ParseError("empty JSON document")

        try:
            data = json.loads(
                text,
                object_pairs_hook=_Pairs,
                parse_int=_NumberLiteral,
                parse_float=_NumberLiteral,
            )
        except json.JSONDecodeError as e:
            raise ParseError(f"failed to parse JSON: {e}") from e

        document = Node(kind=NodeKind.DOCUMENT)
        top = document.add_child(self._make_node(data))
        self._add_children(top, data)
        return document

    def _make_node(self, value: Any) -> Node:
        if isinstance(value, _Pairs):
            return Node(kind=NodeKind.MAPPING, tag="!!map")
        if isinstance(value, list):
            return Node(kind=NodeKind.SEQUENCE, tag="!!seq")
        if value is None:
            return Node(kind=NodeKind.SCALAR, value="null", tag="!!null")
        if isinstance(value, bool):
            return Node(
                kind=NodeKind.SCALAR,
                value="true" if value else "false",
                tag="!!bool",
            )
        if isinstance(value, _NumberLiteral):
            return Node(kind=NodeKind.SCALAR, value=str(value), tag=_number_tag(value))
        return Node(kind=NodeKind.SCALAR, value=str(value), tag="!!str")

    def _add_children(self, node: Node, value: Any) -> None:
        # Iterative so deeply nested arrays do not hit the recursion limit
        stack = [(node, value)]
        while stack:
            parent, data = stack.pop()
            if isinstance(data, _Pairs):
                for key, item in data:
                    child = parent.add_child(self._make_node(item), key)
                    stack.append((child, item))
            elif isinstance(data, list):
                for item in data:
                    child = parent.add_child(self._make_node(item))
                    stack.append((child, item))

    def serialize(self, root: Node) -> str:
        """Serialize a tree to JSON text (newline terminated)."""
        return to_json(root, indent=self.indent) + "\n"


def scalar_to_python(node: Node) -> Any:
    """Convert a scalar node to a Python value by its inferred type.

    Booleans and numbers that fail to convert fall back to the raw text.
    """
    scalar_type = infer_type(node)
    if scalar_type is ScalarType.NULL:
        return None
    if scalar_type is ScalarType.BOOLEAN and node.value.lower() in BOOLEAN_LITERALS:
        return node.value.lower() in TRUTHY_LITERALS
    if scalar_type is ScalarType.NUMBER:
        for convert in (int, float):
            try:
                return convert(node.value)
            except ValueError:
                continue
        return node.value
    return node.value


def to_python(node: Node | None) -> Any:
    """Convert a tree into plain dicts, lists and scalars."""
    if node is None:
        return None
    if node.kind is NodeKind.DOCUMENT:
        return to_python(root_value(node))
    if node.kind is NodeKind.MAPPING:
        return {child.key: to_python(child) for child in node.children}
    if node.kind is NodeKind.SEQUENCE:
        return [to_python(child) for child in node.children]
    if node.kind is NodeKind.ALIAS:
        return node.value
    return scalar_to_python(node)


def to_json(node: Node | None, indent: bool = True) -> str:
    """Render a tree as JSON text.

    Args:
        node: The Document node or any subtree.
        indent: Pretty-print with two-space indentation.

    Returns:
        The JSON text, without a trailing newline.
    """
    return json.dumps(
        to_python(node),
        indent=2 if indent else None,
        ensure_ascii=False,
        default=str,
    )
