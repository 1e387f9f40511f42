"""
YAML reformatting for the ``fmt`` command.

Formatting works on the composed ruamel graph, so anchors, tags and
comments survive. It removes trailing whitespace from scalar values and
comments, drops quotes where a plain scalar reads the same, optionally
sorts mapping keys, and re-emits the document with a consistent indent.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from ruamel.yaml.error import YAMLError
from ruamel.yaml.nodes import MappingNode, ScalarNode, SequenceNode

from yam.data_formats.yaml_loader import (
    YAMLLoader,
    comment_tokens,
    short_tag,
    sort_mapping_keys,
)
from yam.errors import FormatError

LOG = logging.getLogger(__name__)

# Characters that force a scalar to stay quoted
QUOTE_REQUIRED_CHARS = frozenset(":#[]{},&*!|>'\"%@` \n\r\t")

# Strings that would read as another type if written plain
RESERVED_WORDS = frozenset(["true", "false", "yes", "no", "on", "off", "null", "~"])


@dataclass
class FormatOptions:
    """Options for format_text().

    Attributes:
        indent: Indentation width in spaces.
        sort_keys: Sort mapping keys alphabetically.
    """

    indent: int = 2
    sort_keys: bool = False


def can_be_unquoted(value: str, tag: str | None) -> bool:
    """Whether a quoted string can be written as a plain scalar.

    Examples:
        >>> can_be_unquoted("hello", "!!str")
        True
        >>> can_be_unquoted("yes", "!!str")
        False
        >>> can_be_unquoted("a: b", "!!str")
        False
    """
    if not value:
        return False
    if tag == "!!str" and value.lower() in RESERVED_WORDS:
        return False
    if any(char in QUOTE_REQUIRED_CHARS for char in value):
        return False
    if value != value.strip():
        return False
    return value[0] not in "-?: "


def _normalize_comment(comment: Any) -> None:
    for token in comment_tokens(comment):
        lines = str(token.value).split("\n")
        token.value = "\n".join(line.rstrip(" \t") for line in lines)


def normalize(raw: Any) -> None:
    """Normalize a ruamel graph in place."""
    stack = [raw]
    visited: set[int] = set()
    while stack:
        node = stack.pop()
        if id(node) in visited:
            continue
        visited.add(id(node))

        if isinstance(node, ScalarNode):
            node.value = node.value.rstrip(" \t")
            if node.style in ("'", '"') and can_be_unquoted(
                node.value, short_tag(node.tag)
            ):
                node.style = None
        elif isinstance(node, MappingNode):
            for key, value in node.value:
                stack.append(key)
                stack.append(value)
        elif isinstance(node, SequenceNode):
            stack.extend(node.value)

        _normalize_comment(getattr(node, "comment", None))


def format_text(text: str, options: FormatOptions | None = None) -> str:
    """Reformat YAML text.

    Args:
        text: YAML source.
        options: Indentation and key sorting; defaults to FormatOptions().

    Returns:
        The formatted document, ending with a newline.

    Raises:
        ParseError: If the text is empty or malformed.
        FormatError: If the document cannot be re-emitted.
    """
    options = options or FormatOptions()
    if options.indent < 1:
        raise FormatError(f"indent must be positive, got {options.indent}")

    loader = YAMLLoader(indent=options.indent)
    raw = loader.compose(text)

    normalize(raw)
    if options.sort_keys:
        sort_mapping_keys(raw)

    try:
        output = loader.serialize_raw(raw)
    except YAMLError as e:
        raise FormatError(f"failed to format: {e}") from e

    if not output.endswith("\n"):
        output += "\n"
    LOG.debug("formatted %d bytes into %d bytes", len(text), len(output))
    return output
