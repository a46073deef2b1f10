"""
Log Formatters for JSON and Console Output.

    JsonlFormatter: one JSON object per line, for the optional log file.
    ColoredConsoleFormatter: human-readable line for stderr.

Output Examples:
    JSONL (file):
        {"ts":"2024-01-15T14:30:05+03:00","level":2,"tag":"INFO","message":"generation_polled","request_id":"abc123","extra":{"status":"completed"}}

    Console (colored):
        14:30:05 [ INFO  ] (abc123) generation_polled status=completed http_status=200 0.231s

Color Schemes:
    Timing (seconds):
        - < 1s: Green
        - 1-5s: Yellow
        - > 5s: Red

    http_status:
        - 2xx: Green
        - 4xx: Yellow
        - 5xx: Red

    status (generation state):
        - completed: Green
        - failed/error: Red
        - anything else (queued, generating): Cyan
"""
from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any, Dict

from .colors import Colors, colorize, get_tag_color


class JsonlFormatter(logging.Formatter):
    """
    Format log records as JSON Lines for file output.

    Output Format:
        {
            "ts": "2024-01-15T14:30:05+03:00",
            "level": 2,
            "tag": "INFO",
            "message": "generation_submitted",
            "request_id": "abc123",
            "event": "submit",       # optional
            "seconds": 0.5,          # optional
            "extra": {"id": "g1"}    # optional
        }
    """

    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.fromtimestamp(record.created).astimezone().isoformat()

        payload: Dict[str, Any] = {
            "ts": ts,
            "level": getattr(record, "numeric_level", 2),
            "tag": getattr(record, "tag", record.levelname),
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", "-"),
        }

        event = getattr(record, "event", None)
        if event:
            payload["event"] = event

        seconds = getattr(record, "seconds", None)
        if seconds is not None:
            payload["seconds"] = seconds

        extra_data = getattr(record, "extra_data", None)
        if extra_data:
            payload["extra"] = extra_data

        return json.dumps(payload, ensure_ascii=False, default=str)


class ColoredConsoleFormatter(logging.Formatter):
    """
    Format log records with ANSI colors for console output.

    Output Format:
        HH:MM:SS [ TAG   ] (rid) message key=value 0.123s
    """

    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
        tag = getattr(record, "tag", record.levelname)
        rid = getattr(record, "request_id", "-")
        msg = record.getMessage()

        parts = [
            colorize(ts, Colors.DIM),
            colorize(f"[{tag:^7}]", get_tag_color(tag)),
        ]
        if rid != "-":
            parts.append(colorize(f"({rid})", Colors.DIM + Colors.CYAN))
        parts.append(msg)

        event = getattr(record, "event", None)
        if event:
            parts.append(colorize(f"event={event}", Colors.BLUE))

        seconds = getattr(record, "seconds", None)
        if seconds is not None:
            if seconds < 1.0:
                time_color = Colors.GREEN
            elif seconds < 5.0:
                time_color = Colors.YELLOW
            else:
                time_color = Colors.RED
            parts.append(colorize(f"{seconds:.3f}s", time_color))

        extra_data = getattr(record, "extra_data", None)
        if extra_data:
            for k, v in extra_data.items():
                parts.append(colorize(f"{k}={v}", self._get_field_color(k, v)))

        return " ".join(parts)

    def _get_field_color(self, key: str, value: Any) -> str:
        """Get color for an extra field based on its key and value."""
        if key == "http_status" and isinstance(value, int):
            if value < 300:
                return Colors.GREEN
            elif value < 500:
                return Colors.YELLOW
            else:
                return Colors.RED

        if key == "status" and isinstance(value, str):
            lowered = value.lower()
            if lowered == "completed":
                return Colors.GREEN
            if lowered in ("failed", "error"):
                return Colors.RED
            return Colors.CYAN

        return Colors.DIM
