"""
yam - a terminal viewer, editor and structural differ for YAML and JSON.

Usage:
    python -m yam view config.yaml
    python -m yam view -i config.yaml
    python -m yam diff config-dev.yaml config-prod.yaml
    python -m yam fmt --sort-keys config.yaml

Components:
    - yam.tree: Document tree model (nodes, walks, path queries)
    - yam.data_formats: YAML/JSON loaders, serializer and formatter
    - yam.diff: Structural diff engine and renderer
    - yam.tui: Navigation/edit state models and the Textual front end
"""

__version__ = "0.1.0"
