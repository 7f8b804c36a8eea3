"""
Logging setup for the installer CLI.

``main.py`` calls ``setup_logging`` once, before any step runs; modules
only do ``logger = logging.getLogger(__name__)``. Progress for the user
is printed by the CLI itself, so the console log stays quiet by default.

Console level, highest precedence first:
    --debug  >  --verbose  >  --quiet  >  $ZSHB_LOG_LEVEL  >  WARNING

A log file can be added with $ZSHB_LOG_FILE (level $ZSHB_LOG_FILE_LEVEL).
"""

from __future__ import annotations

import logging
import os
import sys

LOG_LEVEL_ENV = "ZSHB_LOG_LEVEL"
LOG_FILE_ENV = "ZSHB_LOG_FILE"
LOG_FILE_LEVEL_ENV = "ZSHB_LOG_FILE_LEVEL"

# Console format per threshold; the first entry the level reaches wins
_CONSOLE_FORMATS: tuple[tuple[int, str, str | None], ...] = (
    (logging.DEBUG, "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d: %(message)s", "%H:%M:%S"),
    (logging.INFO, "%(asctime)s [%(name)s] %(message)s", "%H:%M:%S"),
)
_CONSOLE_DEFAULT = "%(message)s"

_FILE_FORMAT = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d: %(message)s"
_FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"


def resolve_level(debug: bool = False, verbose: bool = False, quiet: bool = False) -> str:
    """Console level name from the CLI flags, falling back to the env."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    return os.environ.get(LOG_LEVEL_ENV, "WARNING")


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Replace the root logger's handlers with the installer's.

    Args:
        level: Console level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Also log to this file.
        log_file_level: File level name; defaults to ``level``.
    """
    console_level = _parse_level(level)
    fmt, datefmt = _CONSOLE_DEFAULT, None
    for threshold, candidate, candidate_datefmt in _CONSOLE_FORMATS:
        if console_level <= threshold:
            fmt, datefmt = candidate, candidate_datefmt
            break

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(fmt, datefmt=datefmt))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)
    root_level = console_level

    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else console_level
        handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setLevel(file_level)
        handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt=_FILE_DATEFMT))
        root.addHandler(handler)
        root_level = min(root_level, file_level)

    root.setLevel(root_level)

    # A closed stderr must never abort an install halfway
    logging.raiseExceptions = False


def _parse_level(level: str | None) -> int:
    """Level name to number; unknown or empty names mean WARNING."""
    numeric = logging.getLevelName(level.upper()) if level else None
    return numeric if isinstance(numeric, int) else logging.WARNING
