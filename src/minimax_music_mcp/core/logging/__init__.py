"""
minimax-music-mcp Structured Logging Module.

This module provides a unified logging system for the MCP server with:
    - Numeric log levels (1-4) for simplified configuration
    - Colored console output on stderr (stdout carries MCP traffic)
    - JSONL file output for machine parsing and analysis
    - Request ID correlation per tool invocation

Log Levels:
    1 = MINIMAL  - Startup, shutdown, failures only
    2 = NORMAL   - Invocation lifecycle, remote status (default)
    3 = VERBOSE  - Payload shape, per-call timing
    4 = DEBUG    - Internal state, tracing

Configuration:
    Set log level via environment variable or settings.yaml:
        export MINIMAX_MCP_LOG_LEVEL=3  # VERBOSE
        export MINIMAX_MCP_NO_COLOR=1   # Disable colors

    In settings.yaml:
        logging:
          level: 2
          log_dir: logs
          jsonl_file: minimax-mcp.jsonl

Usage:
    from minimax_music_mcp.core.logging import get_logger, info, warn, error

    log = get_logger("minimax-mcp.mymodule")

    info(log, "generation_submitted", model="minimax-music", status="queued")
    warn(log, "remote_http_error", http_status=500)
    verbose(log, "payload_built", keys=["model", "prompt"])

Output Examples:
    Console (stderr, colored):
        14:30:05 [ INFO  ] (abc123) generation_submitted model=minimax-music status=queued
        14:30:07 [ WARN  ] (abc123) remote_http_error http_status=500 0.412s

    JSONL file:
        {"ts":"2024-01-15T14:30:05+03:00","level":2,"tag":"INFO","message":"generation_submitted",...}
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Optional

from .levels import LogLevel, LEVEL_MAP, LEVEL_NAMES, coerce_level
from .colors import Colors, supports_color, colorize, get_tag_color
from .context import (
    get_request_id,
    set_request_id,
    get_level,
    set_level,
    get_level_name,
    is_configured,
    set_configured,
    read_logging_config,
)
from .formatters import JsonlFormatter, ColoredConsoleFormatter


def configure_logging(level: Optional[int | str | LogLevel] = None, force: bool = False) -> None:
    """
    Configure the logging system.

    Console output is written to stderr: under the stdio transport,
    anything on stdout would corrupt the JSON-RPC stream.

    Args:
        level: Log level (1-4, level name, or LogLevel enum)
        force: Force reconfiguration even if already configured
    """
    from . import colors

    if is_configured() and not force:
        return

    colors.USE_COLORS = supports_color()

    log_config = read_logging_config()

    current_level = coerce_level(level or log_config.get("level", LogLevel.NORMAL))
    set_level(current_level)

    python_level = LEVEL_MAP.get(current_level, logging.INFO)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG - 10)  # Allow all, filter in handlers
    root.handlers = []

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(python_level)
    console.setFormatter(ColoredConsoleFormatter())
    root.addHandler(console)

    # File handler (JSONL)
    log_dir = log_config.get("log_dir")
    jsonl_file = log_config.get("jsonl_file", "minimax-mcp.jsonl")
    max_bytes = int(log_config.get("rotate_max_bytes", 10 * 1024 * 1024))
    backup_count = int(log_config.get("rotate_backup_count", 5))

    if log_dir:
        Path(log_dir).mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            Path(log_dir) / str(jsonl_file),
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
            delay=True,
        )
        file_handler.setLevel(logging.DEBUG - 10)
        file_handler.setFormatter(JsonlFormatter())
        root.addHandler(file_handler)

    # httpx logs every request at INFO; keep it out of our stream
    logging.getLogger("httpx").setLevel(logging.WARNING)

    set_configured(True)


def _log(
    logger: logging.Logger,
    level: int,
    tag: str,
    msg: str,
    numeric_level: int = 2,
    **fields: Any
) -> None:
    """Internal log function."""
    if numeric_level > get_level():
        return

    event = fields.pop("event", None)
    seconds = fields.pop("seconds", None)
    logger.log(
        level,
        msg,
        extra={
            "tag": tag,
            "request_id": get_request_id(),
            "event": event,
            "seconds": seconds,
            "extra_data": fields or None,
            "numeric_level": numeric_level,
        },
    )


def get_logger(name: str = "minimax-mcp") -> logging.Logger:
    """Get a logger instance, configuring logging if needed."""
    configure_logging()
    return logging.getLogger(name)


def info(logger: logging.Logger, msg: str, **fields: Any) -> None:
    """Log an info message (level 2 = NORMAL)."""
    _log(logger, logging.INFO, "INFO", msg, numeric_level=2, **fields)


def warn(logger: logging.Logger, msg: str, **fields: Any) -> None:
    """Log a warning message (level 2 = NORMAL)."""
    _log(logger, logging.WARNING, "WARN", msg, numeric_level=2, **fields)


def error(logger: logging.Logger, msg: str, **fields: Any) -> None:
    """Log an error message (level 1 = MINIMAL)."""
    _log(logger, logging.ERROR, "ERROR", msg, numeric_level=1, **fields)


def success(logger: logging.Logger, msg: str, **fields: Any) -> None:
    """Log a success message (level 2 = NORMAL)."""
    _log(logger, logging.INFO, "SUCCESS", msg, numeric_level=2, **fields)


def fail(logger: logging.Logger, msg: str, **fields: Any) -> None:
    """Log a failure message (level 1 = MINIMAL)."""
    _log(logger, logging.ERROR, "FAIL", msg, numeric_level=1, **fields)


def verbose(logger: logging.Logger, msg: str, **fields: Any) -> None:
    """Log a verbose message (level 3 = VERBOSE)."""
    _log(logger, logging.DEBUG, "INFO", msg, numeric_level=3, **fields)


def debug(logger: logging.Logger, msg: str, **fields: Any) -> None:
    """Log a debug message (level 4 = DEBUG)."""
    _log(logger, logging.DEBUG, "DEBUG", msg, numeric_level=4, **fields)


__all__ = [
    # Levels
    "LogLevel",
    "LEVEL_MAP",
    "LEVEL_NAMES",
    "coerce_level",
    # Colors
    "Colors",
    "supports_color",
    "colorize",
    "get_tag_color",
    # Context
    "get_request_id",
    "set_request_id",
    "get_level",
    "get_level_name",
    # Formatters
    "JsonlFormatter",
    "ColoredConsoleFormatter",
    # Configuration
    "configure_logging",
    "get_logger",
    # Logging functions
    "info",
    "warn",
    "error",
    "success",
    "fail",
    "verbose",
    "debug",
]
