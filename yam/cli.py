#!/usr/bin/env python3
"""
yam - YAML/JSON viewer, editor and structural differ.

Usage:
    yam view config.yaml               Render a file as a tree
    cat config.yaml | yam view         Render from stdin
    yam view -i config.yaml            Interactive TUI mode
    yam view .data.host config.yaml    Extract the value at a path
    yam view '.items[0]' config.yaml   Extract an array element
    yam diff dev.yaml prod.yaml        Show structural differences
    yam diff -s dev.yaml prod.json     Summary line only (cross-format)
    yam fmt -w --sort-keys config.yaml Format in place

Exit codes:
    view, fmt: 0 success, 1 error
    diff:      0 no differences, 1 differences found, 2 error
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Optional

from rich.console import Console
from rich.text import Text

from yam import __version__
from yam.config import TREE_STYLES, ViewerConfig
from yam.data_formats import FormatOptions, format_text, load_file, to_json, write_atomic
from yam.diff import compare, render_summary, render_text
from yam.errors import YamError
from yam.logging_utils import configure_logging
from yam.renderer import RenderOptions, TreeRenderer
from yam.tree import get_by_path

LOG = logging.getLogger(__name__)

console = Console(soft_wrap=True, highlight=False)
err_console = Console(stderr=True, soft_wrap=True, highlight=False)

DIFF_NO_CHANGES = 0
DIFF_HAS_CHANGES = 1
DIFF_ERROR = 2


def print_error(message: str) -> None:
    err_console.print(Text(f"Error: {message}", style="bold red"))


def require_piped_stdin() -> None:
    """Refuse to block on an interactive terminal when no file was given."""
    if sys.stdin is None or sys.stdin.isatty():
        raise YamError("no input: provide a file or pipe YAML content")


def reattach_terminal() -> None:
    """Point file descriptor 0 back at the terminal after reading piped input."""
    try:
        fd = os.open("/dev/tty", os.O_RDONLY)
    except OSError as e:
        raise YamError(f"cannot open terminal for interactive mode: {e}") from e
    os.dup2(fd, 0)
    os.close(fd)


def split_view_args(path: Optional[str], file: Optional[str]) -> tuple[Optional[str], Optional[str]]:
    """Resolve ``[path] [file]``: a lone argument is a path if it starts with '.'.

    Examples:
        >>> split_view_args("config.yaml", None)
        (None, 'config.yaml')
        >>> split_view_args(".a.b", None)
        ('.a.b', None)
        >>> split_view_args(".a", "config.yaml")
        ('.a', 'config.yaml')
    """
    if file is None and path is not None and not path.startswith("."):
        return None, path
    return path, file


# ============== Commands ==============

def cmd_view(args: argparse.Namespace) -> int:
    """Render a document (or the node at a path) as a tree."""
    path_query, filename = split_view_args(args.path, args.file)

    if filename is None:
        require_piped_stdin()
        filename = "stdin"

    document, loader = load_file(filename)
    node = get_by_path(document, path_query) if path_query else document

    if args.interactive:
        from yam.tui.app import run_viewer

        if filename == "stdin":
            reattach_terminal()
        config = ViewerConfig(
            filename=filename,
            tree_style=args.style,
            show_types=args.types,
        )
        run_viewer(document, loader, config, view_root=node if path_query else None)
        return 0

    if args.json:
        console.print(to_json(node), markup=False)
        return 0

    renderer = TreeRenderer(RenderOptions(tree_style=args.style, show_types=args.types))
    console.print(renderer.render(node))
    return 0


def cmd_diff(args: argparse.Namespace) -> int:
    """Compare two documents structurally."""
    trees = []
    for filename in (args.file1, args.file2):
        try:
            document, _ = load_file(filename)
        except (YamError, OSError) as e:
            print_error(f"failed to parse {filename}: {e}")
            return DIFF_ERROR
        trees.append(document)

    result = compare(trees[0], trees[1])
    result.left_file = args.file1
    result.right_file = args.file2
    LOG.info(
        "diff %s %s: %d added, %d removed, %d modified",
        args.file1,
        args.file2,
        result.summary.added,
        result.summary.removed,
        result.summary.modified,
    )

    if args.interactive:
        from yam.tui.app import run_diff

        run_diff(result)
        return DIFF_NO_CHANGES

    if args.summary:
        console.print(render_summary(result.summary), markup=False)
    elif not result.has_changes:
        console.print("No differences found.", markup=False)
    else:
        console.print(render_text(result), end="")

    return DIFF_HAS_CHANGES if result.has_changes else DIFF_NO_CHANGES


def cmd_fmt(args: argparse.Namespace) -> int:
    """Reformat a YAML document to stdout or in place."""
    if args.file is None:
        if args.write:
            raise YamError("cannot use -w with stdin input")
        require_piped_stdin()
        text = sys.stdin.read()
    else:
        with open(args.file, "r", encoding="utf-8") as f:
            text = f.read()

    formatted = format_text(text, FormatOptions(indent=args.indent, sort_keys=args.sort_keys))

    if args.write:
        write_atomic(args.file, formatted)
    else:
        sys.stdout.write(formatted)
        sys.stdout.flush()
    return 0


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="yam",
        description="A terminal viewer, editor and structural differ for YAML and JSON.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (can be specified multiple times).",
    )
    parser.add_argument("--log-file", help="Write log messages to this file instead of stderr")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # View command
    view_parser = subparsers.add_parser("view", help="Render a document as a tree")
    view_parser.add_argument("path", nargs="?", help="Path query such as .data.items[0] (optional)")
    view_parser.add_argument("file", nargs="?", help="YAML or JSON file (default: stdin)")
    view_parser.add_argument("-i", "--interactive", action="store_true", help="Interactive TUI mode")
    view_parser.add_argument(
        "-s",
        "--style",
        choices=TREE_STYLES,
        default="unicode",
        help="Tree style (default: unicode)",
    )
    view_parser.add_argument("-t", "--types", action="store_true", help="Show type annotations")
    view_parser.add_argument("--json", action="store_true", help="Print the selected node as JSON")
    view_parser.set_defaults(func=cmd_view)

    # Diff command
    diff_parser = subparsers.add_parser("diff", help="Compare two YAML/JSON files")
    diff_parser.add_argument("file1", help="Left (old) file")
    diff_parser.add_argument("file2", help="Right (new) file")
    diff_parser.add_argument("-s", "--summary", action="store_true", help="Show only the summary line")
    diff_parser.add_argument(
        "-i", "--interactive", action="store_true", help="Interactive TUI mode with split view"
    )
    diff_parser.set_defaults(func=cmd_diff)

    # Fmt command
    fmt_parser = subparsers.add_parser("fmt", help="Format a YAML file")
    fmt_parser.add_argument("file", nargs="?", help="YAML file (default: stdin)")
    fmt_parser.add_argument(
        "-w", "--write", action="store_true", help="Write result to the source file instead of stdout"
    )
    fmt_parser.add_argument("-i", "--indent", type=int, default=2, help="Indentation width (default: 2)")
    fmt_parser.add_argument("-s", "--sort-keys", action="store_true", help="Sort mapping keys alphabetically")
    fmt_parser.set_defaults(func=cmd_fmt)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    configure_logging(
        verbosity=args.verbose,
        log_file=args.log_file,
        interactive=getattr(args, "interactive", False),
    )

    try:
        return args.func(args)
    except KeyboardInterrupt:
        return 130
    except (YamError, OSError) as e:
        LOG.debug("command %s failed", args.command, exc_info=True)
        print_error(str(e))
        return DIFF_ERROR if args.command == "diff" else 1


if __name__ == "__main__":
    raise SystemExit(main())
