"""Pytest configuration and shared fixtures for yam tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from yam.data_formats import JSONLoader, YAMLLoader
from yam.tree import Node

SAMPLE_YAML = """\
server:
  host: localhost
  port: 8080
  tags:
    - web
    - api
debug: false
"""

SAMPLE_JSON = """\
{
  "server": {"host": "localhost", "port": 8080, "tags": ["web", "api"]},
  "debug": false
}
"""


@pytest.fixture
def yaml_loader() -> YAMLLoader:
    """Return a fresh YAML loader."""
    return YAMLLoader()


@pytest.fixture
def json_loader() -> JSONLoader:
    """Return a fresh JSON loader."""
    return JSONLoader()


@pytest.fixture
def sample_doc(yaml_loader: YAMLLoader) -> Node:
    """Return the parsed sample document.

    Visible rows, fully expanded: top mapping, server, host, port, tags,
    web, api, debug.
    """
    return yaml_loader.parse(SAMPLE_YAML)


@pytest.fixture
def sample_yaml_file(tmp_path: Path) -> Path:
    """Write the sample document to a .yaml file."""
    path = tmp_path / "config.yaml"
    path.write_text(SAMPLE_YAML, encoding="utf-8")
    return path


@pytest.fixture
def sample_json_file(tmp_path: Path) -> Path:
    """Write the sample document to a .json file."""
    path = tmp_path / "config.json"
    path.write_text(SAMPLE_JSON, encoding="utf-8")
    return path


def child(node: Node, key: str) -> Node:
    """Return the child of a mapping node with the given key."""
    for item in node.children:
        if item.key == key:
            return item
    raise KeyError(key)
