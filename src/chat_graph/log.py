"""Logging setup for the chat-graph CLI.

Library modules only create module loggers with ``logging.getLogger``;
nothing is emitted until the CLI calls :func:`setup_logging` with the
configured level.  Records are pipe-separated with ISO 8601 timestamps.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"


class _ChatGraphHandler(logging.StreamHandler):
    """Stream handler owned by :func:`setup_logging`."""


def level_number(name: str) -> int:
    """Return the numeric logging level for *name*, case-insensitively.

    Raises:
        ValueError: If *name* is not a standard logging level name.
    """
    number = logging.getLevelName(name.strip().upper())
    if not isinstance(number, int):
        raise ValueError(f"Invalid log level: {name!r}")
    return number


def setup_logging(level: str = "INFO", stream: TextIO | None = None) -> logging.Handler:
    """Send log records at *level* and above to *stream* (stderr by default).

    The root logger carries at most one chat-graph handler.  A repeated
    call updates its level, and its stream when *stream* is given, rather
    than stacking another handler.

    Returns:
        The chat-graph handler on the root logger.

    Raises:
        ValueError: If *level* is not a recognised logging level string.
    """
    number = level_number(level)
    root = logging.getLogger()
    root.setLevel(number)

    handler = next((h for h in root.handlers if isinstance(h, _ChatGraphHandler)), None)
    if handler is None:
        handler = _ChatGraphHandler(stream or sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        root.addHandler(handler)
    elif stream is not None:
        handler.setStream(stream)

    handler.setLevel(number)
    return handler
