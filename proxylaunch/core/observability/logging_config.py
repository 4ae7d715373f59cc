"""
Logging configuration — set up once by the CLI entrypoint.

Modules log through ``logging.getLogger(__name__)`` and inherit this
setup.  Console output goes to stderr, keeping stdout free for ``--json``
and for the selection prompt's callers.

Console level precedence:
    CLI flag  >  PXL_LOG_LEVEL  >  WARNING

A log file is opt-in: PXL_LOG_FILE, with its own PXL_LOG_FILE_LEVEL.
"""

from __future__ import annotations

import logging
import sys

# (upper bound, format, datefmt): first bound >= level wins
_CONSOLE_FORMATS = (
    (logging.DEBUG, "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s", "%H:%M:%S"),
    (logging.INFO, "%(asctime)s [%(name)s] %(message)s", "%H:%M:%S"),
    (logging.CRITICAL, "%(message)s", None),
)

_FILE_FORMAT = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"
_FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Held at WARNING unless the console runs at DEBUG
_NOISY_LOGGERS = ("urllib3", "asyncio")


def _console_formatter(level: int) -> logging.Formatter:
    for bound, fmt, datefmt in _CONSOLE_FORMATS:
        if level <= bound:
            return logging.Formatter(fmt, datefmt=datefmt)
    return logging.Formatter("%(message)s")


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
    quiet_third_party: bool = True,
) -> None:
    """Configure the root logger for this process.

    Args:
        level: Console level name.  Unknown names mean WARNING.
        log_file: Also log to this file.
        log_file_level: Level for the file; defaults to ``level``.
        quiet_third_party: Hold noisy library loggers at WARNING.
    """
    console_level = _parse_level(level)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(_console_formatter(console_level))

    handlers: list[logging.Handler] = [console]
    root_level = console_level

    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else console_level
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(file_level)
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt=_FILE_DATEFMT))
        handlers.append(file_handler)
        root_level = min(root_level, file_level)

    root = logging.getLogger()
    root.handlers.clear()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(root_level)

    if quiet_third_party and console_level > logging.DEBUG:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    logging.raiseExceptions = False


def _parse_level(level: str | None) -> int:
    """Level name to number; WARNING for empty or unknown names."""
    numeric = getattr(logging, (level or "").upper(), None)
    return numeric if isinstance(numeric, int) and level else logging.WARNING
