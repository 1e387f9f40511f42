"""
Format detection utilities for document files.

This module provides functions to detect file formats and get appropriate loaders.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

from yam.config import STDIN_NAMES
from yam.errors import FormatError

if TYPE_CHECKING:
    from yam.data_formats.base import DocumentLoader
    from yam.tree.nodes import Node

LOG = logging.getLogger(__name__)

# Mapping of file extensions to format names
EXTENSION_MAP: dict[str, str] = {
    ".yaml": "yaml",
    ".yml": "yaml",
    ".json": "json",
}

# Supported format names
SUPPORTED_FORMATS = frozenset(["yaml", "json"])


def sniff_format(text: str) -> str:
    """Guess the format of document text from its first non-space character.

    Examples:
        >>> sniff_format('  {"a": 1}')
        'json'
        >>> sniff_format("a: 1")
        'yaml'
    """
    stripped = text.lstrip()
    if stripped[:1] in ("{", "["):
        return "json"
    return "yaml"


def detect_format(filename: str) -> str:
    """Detect file format from extension or content.

    Unknown extensions are sniffed: a document starting with "{" or "["
    is JSON, anything else is YAML.

    Args:
        filename: Path to the file.

    Returns:
        Format name: "yaml" or "json"

    Examples:
        >>> detect_format("config.yml")
        'yaml'
        >>> detect_format("package.json")
        'json'
    """
    extension = Path(filename).suffix.lower()

    if extension in EXTENSION_MAP:
        return EXTENSION_MAP[extension]

    path = Path(filename)
    if path.is_file():
        try:
            with open(filename, "r", encoding="utf-8") as f:
                return sniff_format(f.read(1024))
        except (OSError, UnicodeDecodeError):
            LOG.debug("could not sniff %s, assuming yaml", filename)

    return "yaml"


def get_loader_for_format(format_name: str) -> "DocumentLoader":
    """Get a loader for a specific format name.

    Args:
        format_name: The format name ("yaml" or "json").

    Returns:
        A DocumentLoader instance for the specified format.

    Raises:
        FormatError: If the format name is not supported.

    Examples:
        >>> get_loader_for_format("json").format_name
        'json'
    """
    # Import loaders here to avoid circular imports
    from yam.data_formats.json_loader import JSONLoader
    from yam.data_formats.yaml_loader import YAMLLoader

    if format_name not in SUPPORTED_FORMATS:
        raise FormatError(
            f"Unsupported format '{format_name}'. "
            f"Supported formats: {', '.join(sorted(SUPPORTED_FORMATS))}"
        )

    loaders: dict[str, DocumentLoader] = {
        "yaml": YAMLLoader(),
        "json": JSONLoader(),
    }

    return loaders[format_name]


def get_loader(filename: str) -> "DocumentLoader":
    """Factory function to get appropriate loader for a file.

    Standard input ("-" or "stdin") is always read as YAML, which also
    accepts JSON documents.

    Examples:
        >>> get_loader("values.yaml").format_name
        'yaml'
    """
    if filename in STDIN_NAMES:
        return get_loader_for_format("yaml")
    return get_loader_for_format(detect_format(filename))


def load_file(filename: str, stdin: TextIO | None = None) -> tuple["Node", "DocumentLoader"]:
    """Load a document and return it with the loader that parsed it.

    Args:
        filename: Path to the file, or "-"/"stdin" for standard input.
        stdin: Stream to read when filename names standard input.

    Returns:
        A (document, loader) tuple; the loader is used again to save edits.

    Raises:
        FileNotFoundError: If the file does not exist.
        ParseError: If the document is empty or malformed.
    """
    loader = get_loader(filename)
    if filename in STDIN_NAMES:
        return loader.load_stream(stdin if stdin is not None else sys.stdin), loader
    return loader.load(filename), loader
