"""
Document formats: parsing, serialization and formatting.

This module provides a unified interface for loading YAML and JSON
documents into the tree model and writing them back.

Usage:
    from yam.data_formats import load_file

    # Auto-detect format and keep the loader for saving
    document, loader = load_file("config.yaml")
    text = loader.serialize(document)

    # Or detect format explicitly
    from yam.data_formats import detect_format
    format_name = detect_format("package.json")  # Returns 'json'
"""

from yam.data_formats.base import DocumentLoader, write_atomic
from yam.data_formats.format_detector import (
    EXTENSION_MAP,
    SUPPORTED_FORMATS,
    detect_format,
    get_loader,
    get_loader_for_format,
    load_file,
    sniff_format,
)
from yam.data_formats.formatter import FormatOptions, can_be_unquoted, format_text
from yam.data_formats.json_loader import JSONLoader, to_json, to_python
from yam.data_formats.yaml_loader import YAMLLoader, serialize_yaml

__all__ = [
    # Base class
    "DocumentLoader",
    "write_atomic",
    # Format detection
    "detect_format",
    "sniff_format",
    "get_loader",
    "get_loader_for_format",
    "load_file",
    "EXTENSION_MAP",
    "SUPPORTED_FORMATS",
    # Loaders
    "YAMLLoader",
    "JSONLoader",
    # Serialization
    "serialize_yaml",
    "to_json",
    "to_python",
    # Formatting
    "FormatOptions",
    "format_text",
    "can_be_unquoted",
]
