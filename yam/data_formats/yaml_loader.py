"""
YAML format document loader.

Parsing goes through ruamel.yaml's composer, which yields a representation
graph that still carries tags, styles, anchors and comments. Each
document Node keeps a reference to the ruamel node it came from, so that
saving re-serializes the original graph with only the edited scalar
values changed.
"""

from __future__ import annotations

import io
import logging
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap, CommentedSeq
from ruamel.yaml.error import YAMLError
from ruamel.yaml.nodes import MappingNode, ScalarNode, SequenceNode
from ruamel.yaml.tokens import CommentToken

from yam.data_formats.base import DocumentLoader
from yam.errors import ParseError, SaveError
from yam.tree.nodes import Node, NodeKind, root_value, walk_all

LOG = logging.getLogger(__name__)

# Prefix of the YAML core schema tags, shortened to "!!"
CORE_TAG_PREFIX = "tag:yaml.org,2002:"


def short_tag(tag: Any) -> str | None:
    """Return a ruamel tag as a short string (e.g. "!!int").

    Newer ruamel.yaml releases wrap tags in a Tag object exposing
    ``.value``; older ones use plain strings.
    """
    raw = getattr(tag, "value", tag)
    if not raw:
        return None
    raw = str(raw)
    if raw.startswith(CORE_TAG_PREFIX):
        return "!!" + raw[len(CORE_TAG_PREFIX) :]
    return raw


def comment_tokens(comment: Any) -> list[CommentToken]:
    """Flatten ruamel's nested comment attribute into a list of tokens."""
    tokens: list[CommentToken] = []
    if comment is None:
        return tokens
    if isinstance(comment, CommentToken):
        return [comment]
    if isinstance(comment, (list, tuple)):
        for item in comment:
            tokens.extend(comment_tokens(item))
    return tokens


def _split_comments(raw: Any) -> tuple[str, str]:
    """Return (line_comment, foot_comment) text for a ruamel node."""
    lines: list[str] = []
    for token in comment_tokens(getattr(raw, "comment", None)):
        lines.extend(
            line.strip() for line in str(token.value).splitlines() if line.strip()
        )
    if not lines:
        return "", ""
    return lines[0], "\n".join(lines[1:])


class YAMLLoader(DocumentLoader):
    """Document loader for YAML.

    Only the first document of a multi-document stream is loaded.

    Attributes:
        format_name: Returns 'yaml'.
        supported_extensions: Returns ['.yaml', '.yml'].
    """

    def __init__(self, indent: int = 2) -> None:
        self._yaml = YAML(typ="rt")
        self.set_indent(indent)

    @property
    def format_name(self) -> str:
        """Return the format name."""
        return "yaml"

    @property
    def supported_extensions(self) -> list[str]:
        """Return supported file extensions."""
        return [".yaml", ".yml"]

    def set_indent(self, indent: int) -> None:
        """Set the mapping indent; sequences are offset under their key."""
        self._yaml.indent(mapping=indent, sequence=indent + 2, offset=indent)

    def compose(self, text: str) -> Any:
        """Compose the first document of ``text`` into a ruamel node graph.

        Raises:
            ParseError: If the stream holds no document or is malformed.
        """
        try:
            raw = next(iter(self._yaml.compose_all(text)), None)
        except YAMLError as e:
            raise ParseError(f"failed to parse YAML: {e}") from e
        if raw is None:
            raise ParseError("empty YAML document")
        return raw

    def parse(self, text: str) -> Node:
        """Parse YAML text into a document tree.

        Args:
            text: YAML source.

        Returns:
            A Document node wrapping the top-level value.

        Raises:
            ParseError: If the text is empty or malformed.

        Examples:
            >>> doc = YAMLLoader().parse("a: 1")
            >>> doc.children[0].children[0].key
            'a'
        """
        return self.build_tree(self.compose(text))

    def build_tree(self, raw: Any) -> Node:
        """Convert a composed ruamel graph into a document tree."""
        document = Node(kind=NodeKind.DOCUMENT)
        document.raw = raw
        seen: dict[int, Any] = {}
        top = self._convert(raw, seen)
        document.add_child(top)
        self._convert_children(top, raw, seen)
        return document

    def _convert(self, raw: Any, seen: dict[int, Any], key_raw: Any = None) -> Node:
        """Create a Node for one ruamel node (children are added later)."""
        anchor = getattr(raw, "anchor", None)
        anchor_name = getattr(anchor, "value", anchor)

        if anchor_name and id(raw) in seen:
            # The composer hands back the same object for every *alias
            node = Node(kind=NodeKind.ALIAS, value=str(anchor_name))
            node.raw = None
            return node

        if isinstance(raw, MappingNode):
            kind = NodeKind.MAPPING
        elif isinstance(raw, SequenceNode):
            kind = NodeKind.SEQUENCE
        else:
            kind = NodeKind.SCALAR

        line_comment, foot_comment = _split_comments(raw)
        if not line_comment and key_raw is not None:
            line_comment, foot_comment = _split_comments(key_raw)

        node = Node(
            kind=kind,
            value=str(raw.value) if kind is NodeKind.SCALAR else "",
            tag=short_tag(raw.tag),
            anchor=str(anchor_name) if anchor_name else None,
            line_comment=line_comment,
            foot_comment=foot_comment,
            line=raw.start_mark.line + 1 if raw.start_mark else 0,
            column=raw.start_mark.column + 1 if raw.start_mark else 0,
        )
        node.raw = raw
        if anchor_name:
            seen[id(raw)] = raw
        return node

    def _convert_children(self, node: Node, raw: Any, seen: dict[int, Any]) -> None:
        if node.kind is NodeKind.MAPPING:
            for key_raw, value_raw in raw.value:
                key = (
                    str(key_raw.value)
                    if isinstance(key_raw, ScalarNode)
                    else f"<{type(key_raw).__name__}>"
                )
                child = node.add_child(self._convert(value_raw, seen, key_raw), key)
                self._convert_children(child, value_raw, seen)
        elif node.kind is NodeKind.SEQUENCE:
            for item_raw in raw.value:
                child = node.add_child(self._convert(item_raw, seen))
                self._convert_children(child, item_raw, seen)

    def serialize_raw(self, raw: Any) -> str:
        """Emit a composed ruamel graph as YAML text."""
        stream = io.StringIO()
        self._yaml.serialize(raw, stream)
        return stream.getvalue()

    def serialize(self, root: Node, sort_keys: bool = False) -> str:
        """Serialize a tree to YAML text.

        Trees parsed by this loader are written from their ruamel graph,
        keeping styles, tags, anchors and comments. Other trees (e.g. from
        JSON) are converted to ruamel round-trip containers first.

        Args:
            root: The Document node (or any node) to write.
            sort_keys: Sort mapping keys recursively before writing.

        Raises:
            SaveError: If the emitter rejects the tree.
        """
        top = root_value(root)
        try:
            if top is not None and top.raw is not None:
                self._sync_scalars(root)
                if sort_keys:
                    sort_mapping_keys(top.raw)
                return self.serialize_raw(top.raw)
            stream = io.StringIO()
            self._yaml.dump(to_round_trip(top, sort_keys), stream)
            return stream.getvalue()
        except YAMLError as e:
            raise SaveError(f"failed to serialize YAML: {e}") from e

    def _sync_scalars(self, root: Node) -> None:
        """Copy edited scalar values back into the ruamel graph."""

        def sync(node: Node) -> bool:
            raw = node.raw
            if node.kind is NodeKind.SCALAR and raw is not None and raw.value != node.value:
                LOG.debug("syncing edited scalar at %s", node.path_string())
                raw.value = node.value
                if not raw.style:
                    # Plain scalars re-resolve so "8080" -> "abc" stays untagged
                    raw.tag = self._yaml.resolver.resolve(
                        ScalarNode, node.value, (True, False)
                    )
            return True

        walk_all(root, sync)


def serialize_yaml(root: Node, indent: int = 2, sort_keys: bool = False) -> str:
    """Serialize a tree to YAML text with the given mapping indent."""
    return YAMLLoader(indent=indent).serialize(root, sort_keys=sort_keys)


def sort_mapping_keys(raw: Any) -> None:
    """Sort the pairs of every mapping in a ruamel graph by key, in place."""
    stack = [raw]
    visited: set[int] = set()
    while stack:
        current = stack.pop()
        if id(current) in visited:
            continue
        visited.add(id(current))
        if isinstance(current, MappingNode):
            current.value.sort(key=lambda pair: str(pair[0].value))
            stack.extend(value for _, value in current.value)
        elif isinstance(current, SequenceNode):
            stack.extend(current.value)


def to_round_trip(node: Node | None, sort_keys: bool = False) -> Any:
    """Build ruamel round-trip containers (CommentedMap/Seq) from a tree."""
    from yam.data_formats.json_loader import scalar_to_python

    if node is None:
        return None
    if node.kind is NodeKind.DOCUMENT:
        return to_round_trip(root_value(node), sort_keys)
    if node.kind is NodeKind.MAPPING:
        mapping = CommentedMap()
        children = node.children
        if sort_keys:
            children = sorted(children, key=lambda child: child.key or "")
        for child in children:
            mapping[child.key] = to_round_trip(child, sort_keys)
            if child.line_comment and child.kind is NodeKind.SCALAR:
                mapping.yaml_add_eol_comment(child.line_comment, child.key)
        return mapping
    if node.kind is NodeKind.SEQUENCE:
        return CommentedSeq(to_round_trip(child, sort_keys) for child in node.children)
    if node.kind is NodeKind.ALIAS:
        return node.value
    return scalar_to_python(node)
