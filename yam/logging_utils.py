"""
Logging configuration for the yam command line.

Library modules only create loggers with ``logging.getLogger(__name__)``;
handlers are attached here, once, by the CLI entry point.
"""

from __future__ import annotations

import logging
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def _level_for(verbosity: int) -> int:
    if verbosity >= 2:
        return logging.DEBUG
    if verbosity == 1:
        return logging.INFO
    return logging.WARNING


def configure_logging(
    verbosity: int = 0,
    log_file: Optional[str] = None,
    interactive: bool = False,
) -> None:
    """Configure the root ``yam`` logger.

    Args:
        verbosity: Number of ``-v`` flags given (0 = WARNING, 1 = INFO, 2+ = DEBUG).
        log_file: Optional path to log to instead of stderr.
        interactive: The TUI owns the terminal; without ``log_file`` nothing
            is logged at all.
    """
    logger = logging.getLogger("yam")
    logger.setLevel(_level_for(verbosity))

    # Re-configuring (e.g. in tests) must not stack handlers.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if log_file:
        handler: logging.Handler = logging.FileHandler(log_file, encoding="utf-8")
    elif interactive:
        handler = logging.NullHandler()
    else:
        handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
