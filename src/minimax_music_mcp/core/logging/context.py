"""
Request Context and Configuration State for Logging.

The request_id context variable tags every log line emitted while a
single tool invocation is being handled. The MCP server sets it at the
start of each tools/call request (see api/server.py).

Environment Variables:
    - MINIMAX_MCP_SETTINGS: Settings file path (default config/settings.yaml)
    - MINIMAX_MCP_LOG_LEVEL: Override log level (1-4)
    - MINIMAX_MCP_LOG_DIR: Enable JSONL file logging in this directory
    - MINIMAX_MCP_JSONL_FILE: Override JSONL filename
    - MINIMAX_MCP_LOG_ROTATE_BYTES: Max log file size
    - MINIMAX_MCP_LOG_ROTATE_BACKUP: Number of backup files
"""
from __future__ import annotations

import os
from contextvars import ContextVar
from typing import Any, Dict

from .levels import LEVEL_NAMES, LogLevel

# "-" marks log lines emitted outside a tool invocation
_request_id: ContextVar[str] = ContextVar("request_id", default="-")

_configured: bool = False
_current_level: LogLevel = LogLevel.NORMAL


def get_request_id() -> str:
    """Get current request ID from context, or "-" if not set."""
    return _request_id.get()


def set_request_id(rid: str) -> None:
    """Set request ID in context for log correlation."""
    _request_id.set(rid)


def get_level() -> LogLevel:
    return _current_level


def set_level(level: LogLevel) -> None:
    global _current_level
    _current_level = level


def get_level_name() -> str:
    """Get current log level as human-readable name."""
    return LEVEL_NAMES.get(_current_level, "NORMAL")


def is_configured() -> bool:
    return _configured


def set_configured(value: bool) -> None:
    global _configured
    _configured = value


def read_logging_config() -> Dict[str, Any]:
    """
    Read logging configuration from settings file and environment.

    Configuration priority (highest to lowest):
        1. Environment variables (MINIMAX_MCP_LOG_LEVEL, etc.)
        2. settings.yaml logging section
        3. Default values

    Returns:
        Dictionary with resolved logging configuration.
    """
    cfg: Dict[str, Any] = {}

    settings_path = os.getenv("MINIMAX_MCP_SETTINGS", "config/settings.yaml")
    try:
        from minimax_music_mcp.core.config import load_settings
        settings = load_settings(settings_path)
        cfg.update(settings.raw.get("logging", {}) or {})
    except Exception:
        # Settings file not found or invalid - use defaults
        pass

    if os.getenv("MINIMAX_MCP_LOG_LEVEL"):
        cfg["level"] = os.environ["MINIMAX_MCP_LOG_LEVEL"]
    if os.getenv("MINIMAX_MCP_LOG_DIR"):
        cfg["log_dir"] = os.environ["MINIMAX_MCP_LOG_DIR"]
    if os.getenv("MINIMAX_MCP_JSONL_FILE"):
        cfg["jsonl_file"] = os.environ["MINIMAX_MCP_JSONL_FILE"]
    if os.getenv("MINIMAX_MCP_LOG_ROTATE_BYTES"):
        try:
            cfg["rotate_max_bytes"] = int(os.environ["MINIMAX_MCP_LOG_ROTATE_BYTES"])
        except ValueError:
            pass  # Invalid value, ignore
    if os.getenv("MINIMAX_MCP_LOG_ROTATE_BACKUP"):
        try:
            cfg["rotate_backup_count"] = int(os.environ["MINIMAX_MCP_LOG_ROTATE_BACKUP"])
        except ValueError:
            pass  # Invalid value, ignore

    return cfg
