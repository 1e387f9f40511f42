"""
Custom exception types used across yam.

The CLI catches YamError subclasses and reports them as user-facing
failures; anything else is an unexpected bug and propagates.
"""

from __future__ import annotations


class YamError(Exception):
    """Base class for all yam specific errors."""


class ParseError(YamError):
    """Raised when a document is empty or malformed."""


class PathError(YamError):
    """Raised when a path query is invalid or does not resolve."""


class FormatError(YamError):
    """Raised when a file format cannot be determined or formatting fails."""


class SaveError(YamError):
    """Raised when a document cannot be serialized or written."""
