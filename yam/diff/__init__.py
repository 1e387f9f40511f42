"""Structural comparison of two document trees."""

from yam.diff.engine import (
    DiffNode,
    DiffResult,
    DiffSummary,
    DiffType,
    calculate_summary,
    compare,
    walk_diff,
)
from yam.diff.render import render, render_summary, render_text

__all__ = [
    # Engine
    "DiffType",
    "DiffNode",
    "DiffSummary",
    "DiffResult",
    "compare",
    "calculate_summary",
    "walk_diff",
    # Output
    "render",
    "render_text",
    "render_summary",
]
