"""Logging configuration helpers for statesync.

statesync is silent by default (the package logger only carries a
NullHandler). The host runtime opts in with one of the helpers below.

Example usage:
    import statesync

    # Console logging while debugging replication
    statesync.enable_console_logging(level="DEBUG")

    # Rotating file logging, one JSON object per line
    statesync.enable_file_logging("replica.log", json=True)

    # Configure from environment variables
    statesync.configure_from_env()

Environment variables:
    STATESYNC_LOGGING: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    STATESYNC_LOG_FILE: Path to log file (enables rotating file logging)
    STATESYNC_LOG_JSON: Set to "1" for JSON output
"""

from __future__ import annotations

import json as jsonlib
import logging
import os
from datetime import UTC, datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Literal

__all__ = [
    "JsonFormatter",
    "configure_from_env",
    "disable_logging",
    "enable_console_logging",
    "enable_file_logging",
    "set_level",
    "set_module_level",
]

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

DEFAULT_MAX_BYTES = 10 * 1024 * 1024  # 10 MB
DEFAULT_BACKUP_COUNT = 5

LOGGER_NAME = "statesync"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class JsonFormatter(logging.Formatter):
    """Render each record as a single-line JSON object.

    Example output:
        {"timestamp": "2026-01-15T10:30:00.123456+00:00", "level": "DEBUG",
         "logger": "statesync.crdt.gset", "message": "GSet delta harvested: 2 added"}
    """

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return jsonlib.dumps(payload)


def _get_level(level: str | int) -> int:
    """Convert a level name or int to a logging level constant."""
    if isinstance(level, int):
        return level
    return getattr(logging, level.upper(), logging.INFO)


def _get_logger() -> logging.Logger:
    return logging.getLogger(LOGGER_NAME)


def _clear_handlers() -> None:
    """Remove and close every handler on the package logger except NullHandler."""
    logger = _get_logger()
    for handler in logger.handlers[:]:
        if not isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)
            handler.close()


def _install(
    handler: logging.Handler,
    level: LogLevel | int,
    json: bool,
    format: str,
    date_format: str,
) -> None:
    logger = _get_logger()
    logger.setLevel(_get_level(level))
    handler.setLevel(_get_level(level))
    if json:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(format, date_format))
    logger.addHandler(handler)


def enable_console_logging(
    level: LogLevel | int = "INFO",
    json: bool = False,
    format: str = DEFAULT_FORMAT,
    date_format: str = DEFAULT_DATE_FORMAT,
) -> logging.StreamHandler:
    """Send statesync logs to stderr.

    Args:
        level: Log level name or int.
        json: Emit one JSON object per record instead of formatted text.
        format: Log message format string (ignored when ``json`` is set).
        date_format: Date format string for %(asctime)s.

    Returns:
        The created StreamHandler.
    """
    handler = logging.StreamHandler()
    _install(handler, level, json, format, date_format)
    return handler


def enable_file_logging(
    path: str | Path,
    level: LogLevel | int = "INFO",
    json: bool = False,
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
    format: str = DEFAULT_FORMAT,
    date_format: str = DEFAULT_DATE_FORMAT,
) -> RotatingFileHandler:
    """Send statesync logs to a size-rotated file.

    When the file reaches ``max_bytes`` it is rolled over and up to
    ``backup_count`` old files are kept.

    Args:
        path: Log file path. Parent directories are created.
        level: Log level name or int.
        json: Emit one JSON object per line.
        max_bytes: Maximum size of each log file in bytes.
        backup_count: Number of rolled-over files to keep.
        format: Log message format string (ignored when ``json`` is set).
        date_format: Date format string for %(asctime)s.

    Returns:
        The created RotatingFileHandler.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(path, maxBytes=max_bytes, backupCount=backup_count)
    _install(handler, level, json, format, date_format)
    return handler


def configure_from_env() -> None:
    """Configure logging from ``STATESYNC_*`` environment variables.

    Does nothing unless STATESYNC_LOGGING or STATESYNC_LOG_FILE is set.
    """
    level = os.environ.get("STATESYNC_LOGGING", "").upper()
    log_file = os.environ.get("STATESYNC_LOG_FILE", "")
    use_json = os.environ.get("STATESYNC_LOG_JSON", "") == "1"

    if not level and not log_file:
        return

    level = level or "INFO"
    if log_file:
        enable_file_logging(log_file, level=level, json=use_json)
    else:
        enable_console_logging(level=level, json=use_json)


def set_level(level: LogLevel | int) -> None:
    """Set the level of the package logger."""
    _get_logger().setLevel(_get_level(level))


def set_module_level(module: str, level: LogLevel | int) -> None:
    """Set the level of one statesync submodule logger.

    Args:
        module: Module name relative to statesync (e.g. ``"crdt.gset"``).
        level: Log level name or int.
    """
    logging.getLogger(f"{LOGGER_NAME}.{module}").setLevel(_get_level(level))


def disable_logging() -> None:
    """Drop all handlers and raise the level above CRITICAL."""
    logger = _get_logger()
    _clear_handlers()
    logger.addHandler(logging.NullHandler())
    logger.setLevel(logging.CRITICAL + 1)
