"""
Abstract base class for document loaders.

This module defines the DocumentLoader interface that all format-specific
loaders must implement. A loader parses text into a document tree and
serializes a (possibly edited) tree back to text.
"""

from __future__ import annotations

import logging
import os
import stat
import tempfile
from abc import ABC, abstractmethod
from typing import TextIO

from yam.errors import SaveError
from yam.tree.nodes import Node

LOG = logging.getLogger(__name__)


class DocumentLoader(ABC):
    """Abstract base class for loading and saving documents.

    All format-specific loaders (YAML, JSON) must inherit from this class
    and implement all abstract methods.
    """

    @property
    @abstractmethod
    def format_name(self) -> str:
        """Return the format name (e.g., 'yaml', 'json')."""
        pass

    @property
    @abstractmethod
    def supported_extensions(self) -> list[str]:
        """Return supported file extensions (e.g., ['.yaml', '.yml'])."""
        pass

    @abstractmethod
    def parse(self, text: str) -> Node:
        """Parse document text into a tree.

        Args:
            text: The document source.

        Returns:
            A Document node whose single child is the top-level value.

        Raises:
            ParseError: If the text is empty or malformed.
        """
        pass

    @abstractmethod
    def serialize(self, root: Node) -> str:
        """Serialize a tree back to document text.

        Args:
            root: The Document node returned by parse().

        Returns:
            The document source, ending with a newline.
        """
        pass

    def load(self, filename: str) -> Node:
        """Read and parse a file.

        Args:
            filename: Path to the file.

        Returns:
            The parsed Document node.

        Raises:
            FileNotFoundError: If the file does not exist.
            ParseError: If the file is empty or malformed.
        """
        LOG.debug("loading %s as %s", filename, self.format_name)
        with open(filename, "r", encoding="utf-8") as f:
            return self.parse(f.read())

    def load_stream(self, stream: TextIO) -> Node:
        """Parse a document from an open text stream (e.g. stdin)."""
        return self.parse(stream.read())


def write_atomic(filename: str, text: str) -> None:
    """Write ``text`` to ``filename`` through a temp file and a rename.

    The temp file is created in the target's directory so the final
    os.replace() stays on one filesystem. The original file's permission
    bits are kept.

    Raises:
        SaveError: If the temp file cannot be written or renamed.
    """
    directory = os.path.dirname(os.path.abspath(filename))
    try:
        fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".yam-", suffix=".tmp")
    except OSError as e:
        raise SaveError(f"failed to create temp file: {e}") from e

    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
        if os.path.exists(filename):
            os.chmod(tmp_path, stat.S_IMODE(os.stat(filename).st_mode))
        os.replace(tmp_path, filename)
    except OSError as e:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise SaveError(f"failed to write file: {e}") from e

    LOG.info("wrote %s (%d bytes)", filename, len(text))
