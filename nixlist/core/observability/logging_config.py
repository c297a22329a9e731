"""
Logging configuration for the ``nixlist`` logger tree.

Called once by main.py.  Only the ``nixlist`` logger gets handlers, so
the root logger (and anything a host process attached to it) is left
alone.  Output goes to stderr, keeping stdout for package listings that
are meant to be piped.

Levels are resolved in precedence order:
    --debug / --verbose / --quiet  >  NIX_LIST_LOG_LEVEL  >  WARNING

Optional file output via NIX_LIST_LOG_FILE / NIX_LIST_LOG_FILE_LEVEL.
"""

from __future__ import annotations

import logging
import sys

from nixlist.core.errors import ConfigError

LOGGER_NAME = "nixlist"

# WARNING and above: prefixed so warnings stand apart from listing output
_FMT_CONSOLE = "nix-list: %(message)s"

# INFO: when each nix / brew call happened
_FMT_VERBOSE = "%(asctime)s %(message)s"

# DEBUG: which service issued the external command
_FMT_DEBUG = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d %(message)s"

_DATEFMT_CONSOLE = "%H:%M:%S"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> logging.Logger:
    """Configure the ``nixlist`` logger and return it.

    Args:
        level: Console level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path to a log file, always written at DEBUG format.
        log_file_level: Level for the log file (default: ``level``).

    Raises:
        ConfigError: If ``log_file`` cannot be opened.
    """
    console_level = _parse_level(level)

    if console_level <= logging.DEBUG:
        fmt = _FMT_DEBUG
    elif console_level <= logging.INFO:
        fmt = _FMT_VERBOSE
    else:
        fmt = _FMT_CONSOLE

    logger = logging.getLogger(LOGGER_NAME)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(fmt, datefmt=_DATEFMT_CONSOLE))
    logger.addHandler(console)

    effective_level = console_level
    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else console_level
        try:
            fh = logging.FileHandler(log_file, encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Cannot open log file {log_file}: {e.strerror}") from e
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FMT_DEBUG, datefmt=_DATEFMT_FILE))
        logger.addHandler(fh)
        effective_level = min(effective_level, file_level)

    logger.setLevel(effective_level)
    logger.propagate = False
    return logger


def _parse_level(level: str | None) -> int:
    """Convert a level name string to its numeric constant."""
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return logging.WARNING
    return numeric
