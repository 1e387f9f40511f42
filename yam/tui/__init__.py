"""
Interactive terminal UI for yam.

A Textual front end over two synchronous state models: NavigationState
(cursor, folding, search) and EditSession (edits, undo/redo, save).

Usage:
    python -m yam view -i config.yaml
    python -m yam diff -i left.yaml right.yaml

Components:
    - YamApp: Main application class
    - DocumentScreen: Tree explorer and editor
    - DiffScreen: Side-by-side diff view
    - NavigationState / DiffNavigationState: cursor and viewport models
    - EditSession: edit, undo/redo and save model
"""
