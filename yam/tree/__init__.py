"""Document tree model: nodes, traversal and path queries."""

from yam.tree.nodes import (
    Node,
    NodeKind,
    PathSegment,
    ScalarType,
    flatten,
    flatten_visible,
    infer_type,
    is_number,
    root_value,
    walk_all,
    walk_visible,
)
from yam.tree.path import get_by_path, parse_path

__all__ = [
    # Model
    "Node",
    "NodeKind",
    "PathSegment",
    "ScalarType",
    "infer_type",
    "is_number",
    "root_value",
    # Traversal
    "walk_all",
    "walk_visible",
    "flatten",
    "flatten_visible",
    # Path queries
    "parse_path",
    "get_by_path",
]
