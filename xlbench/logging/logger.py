# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Structured JSON logger for xlbench.

Every log line is one JSON object with a UTC timestamp, the level, the
logger name and the message. Anything passed through `extra=` (benchmark
name, language, command line, elapsed time) is merged in as extra keys, so
a run of the harness can be grepped or loaded with any JSON tool.

    {"ts": "2026-...", "level": "INFO", "module": "xlbench.build.compiler",
     "msg": "Compiled", "benchmark": "fib", "language": "rust", ...}

Modules get their logger through `get_logger(__name__)` once at import time.
Those module loggers have no handlers and no level of their own. Records
propagate to the package logger `xlbench`, which owns the stderr handler,
the optional log file and the level. `configure_logging` is the one place
that changes any of them, so a module imported after the CLI has set
verbosity still logs at that verbosity and into the same file.
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

PACKAGE_LOGGER = "xlbench"

# Attributes every LogRecord carries. Anything else on a record came from
# the caller's `extra` dict.
_RESERVED_ATTRS: frozenset[str] = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", None, None).__dict__
) | {"message", "asctime", "taskName"}

_VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class JsonFormatter(logging.Formatter):
    """Render a log record as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, object] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "module": record.name,
            "msg": record.getMessage(),
        }

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                entry[key] = value

        if record.exc_info:
            entry["exc"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


class _StderrHandler(logging.StreamHandler):
    """StreamHandler bound to whatever sys.stderr is at emit time, not at creation."""

    def emit(self, record: logging.LogRecord) -> None:
        self.stream = sys.stderr
        super().emit(record)


def _resolve_log_level(level_name: str) -> int:
    upper = level_name.upper()
    if upper not in _VALID_LOG_LEVELS:
        raise ValueError(
            f"Invalid log level '{level_name}'. Must be one of: {', '.join(_VALID_LOG_LEVELS)}"
        )
    return getattr(logging, upper)


def _package_logger() -> logging.Logger:
    """The `xlbench` logger, given its stderr handler the first time it's asked for."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    if not any(isinstance(handler, _StderrHandler) for handler in logger.handlers):
        # stderr, so hyperfine's own report on stdout stays readable
        stream_handler = _StderrHandler()
        stream_handler.setFormatter(JsonFormatter())
        logger.addHandler(stream_handler)
        logger.setLevel(logging.INFO)
        logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Logger for a module under the `xlbench` package.

    The returned logger carries no handlers; its records are written by the
    package logger at whatever level `configure_logging` last set.

    Args:
        name: Logger name, normally the caller's __name__.
    """
    _package_logger()
    return logging.getLogger(name)


def configure_logging(
    log_level: str = "INFO",
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """
    Set the level for every xlbench logger and optionally add a log file.

    Calling this again changes the level. A log file is attached once per
    path, so repeated calls with the same file don't duplicate lines.

    Args:
        log_level: One of DEBUG, INFO, WARNING, ERROR, CRITICAL.
        log_file: Optional file that receives the same JSON lines as stderr.

    Returns:
        The package logger.

    Raises:
        ValueError: Unknown level name.
    """
    level = _resolve_log_level(log_level)
    logger = _package_logger()
    logger.setLevel(level)

    if log_file is not None:
        target = os.path.abspath(log_file)
        attached = any(
            isinstance(handler, logging.FileHandler) and handler.baseFilename == target
            for handler in logger.handlers
        )
        if not attached:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(target, encoding="utf-8")
            file_handler.setFormatter(JsonFormatter())
            logger.addHandler(file_handler)

    return logger
