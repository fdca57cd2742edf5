"""
Log formatters and color utilities.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

import orjson

from .entry import LogEntry
from .privacy import format_metadata, redact

# =============================================================================
# Colors
# =============================================================================

COLORS = {
    "reset": "\033[0m",
    "dim": "\033[2m",
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[1;31m",
    "timestamp": "\033[90m",
}


def colorize(text: str, color: str) -> str:
    """Apply ANSI color to text."""
    return f"{COLORS.get(color, '')}{text}{COLORS['reset']}"


def format_timestamp(timestamp: datetime) -> str:
    """Render ``YYYY-MM-DD HH:MM:SS.mmm`` in local time.

    Naive datetimes are rendered as they are.
    """
    if timestamp.tzinfo is not None:
        timestamp = timestamp.astimezone()
    return f"{timestamp:%Y-%m-%d %H:%M:%S}.{timestamp.microsecond // 1000:03d}"


# =============================================================================
# Console Formatter
# =============================================================================


class ConsoleFormatter:
    """Human-readable single line rendering.

    Fields appear in a fixed order, each one optional except level, message and
    metadata::

        [2025-01-31 12:00:00.000] ℹ️ [INFO] [app.py:42] message {key=value}
    """

    SEPARATOR = " "

    def __init__(
        self,
        *,
        use_timestamp: bool = True,
        use_glyph: bool = True,
        use_source_location: bool = False,
        use_color: bool = False,
    ) -> None:
        self.use_timestamp = use_timestamp
        self.use_glyph = use_glyph
        self.use_source_location = use_source_location
        self.use_color = use_color

    def _maybe_color(self, text: str, color: str) -> str:
        if not self.use_color:
            return text
        return colorize(text, color)

    def format(self, entry: LogEntry, is_production: bool) -> str:
        parts: list[str] = []

        if self.use_timestamp:
            parts.append(self._maybe_color(f"[{format_timestamp(entry.timestamp)}]", "timestamp"))

        if self.use_glyph:
            parts.append(entry.level.glyph)

        parts.append(self._maybe_color(f"[{entry.level}]", entry.level.name))

        if self.use_source_location:
            parts.append(f"[{entry.file_name}:{entry.line}]")

        parts.append(entry.message)

        if entry.metadata:
            metadata_text = "{" + format_metadata(entry.metadata, is_production) + "}"
            parts.append(self._maybe_color(metadata_text, "dim"))

        return self.SEPARATOR.join(parts)


# =============================================================================
# JSON Formatter
# =============================================================================


def orjson_dumps(v: Any, *, default: Any = None) -> str:
    """Fast JSON serialization using orjson."""
    return orjson.dumps(v, default=default).decode()


class JsonFormatter:
    """One JSON object per entry, metadata redacted."""

    def format(self, entry: LogEntry, is_production: bool) -> str:
        payload: dict[str, Any] = {
            "timestamp": entry.timestamp.isoformat(),
            "level": entry.level.name,
            "message": entry.message,
            "category": entry.category,
            "subsystem": entry.subsystem,
            "file": entry.file,
            "function": entry.function,
            "line": entry.line,
            "metadata": {key: redact(value, is_production) for key, value in entry.metadata.items()},
        }
        return orjson_dumps(payload)


__all__ = ["COLORS", "ConsoleFormatter", "JsonFormatter", "colorize", "format_timestamp", "orjson_dumps"]
