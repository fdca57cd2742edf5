"""
Log destinations.

A destination receives finished ``LogEntry`` objects from the facade, drops the
ones below its ``minimum_level`` and writes the rest to its own output channel.
"""

from __future__ import annotations

import logging
import sys
import threading
from abc import ABC, abstractmethod
from typing import Any, Literal, TextIO

from .entry import LogEntry
from .formatters import ConsoleFormatter, JsonFormatter
from .levels import LogLevel
from .privacy import format_metadata, redact

LogFormat = Literal["console", "json"]

METADATA_RECORD_ATTR = "arclog_metadata"


# =============================================================================
# Destination Abstraction (Strategy Pattern)
# =============================================================================


class Destination(ABC):
    """Base class for log destinations.

    Subclasses implement ``emit``; ``write`` applies the level filter first.
    ``minimum_level`` defaults to ``DEBUG`` so a destination that does not set
    it accepts everything.
    """

    minimum_level: LogLevel = LogLevel.DEBUG

    def accepts(self, level: LogLevel) -> bool:
        return level >= self.minimum_level

    def write(self, entry: LogEntry, is_production: bool) -> None:
        if not self.accepts(entry.level):
            return
        self.emit(entry, is_production)

    @abstractmethod
    def emit(self, entry: LogEntry, is_production: bool) -> None:
        """Format and output an entry that passed the level filter."""
        ...

    def close(self) -> None:
        """Release resources held by the destination."""


class ConsoleDestination(Destination):
    """Writes one line per entry to a text stream.

    Args:
        minimum_level: Entries below this level are dropped.
        use_timestamp: Prefix lines with ``[YYYY-MM-DD HH:MM:SS.mmm]``.
        use_glyph: Include the level emoji.
        use_source_location: Include ``[file:line]``.
        fmt: "console" (human-readable) or "json".
        stream: Output stream (default: stdout).
        use_color: ANSI colors; ``None`` enables them when the stream is a TTY.
    """

    def __init__(
        self,
        minimum_level: LogLevel = LogLevel.DEBUG,
        *,
        use_timestamp: bool = True,
        use_glyph: bool = True,
        use_source_location: bool = False,
        fmt: LogFormat = "console",
        stream: TextIO | None = None,
        use_color: bool | None = None,
    ) -> None:
        self.minimum_level = LogLevel.parse(minimum_level)
        self._stream = stream or sys.stdout
        self._fmt = fmt
        self._lock = threading.Lock()
        if use_color is None:
            use_color = _is_tty(self._stream)
        self._formatter: ConsoleFormatter | JsonFormatter
        if fmt == "json":
            self._formatter = JsonFormatter()
        else:
            self._formatter = ConsoleFormatter(
                use_timestamp=use_timestamp,
                use_glyph=use_glyph,
                use_source_location=use_source_location,
                use_color=use_color,
            )

    @property
    def formatter(self) -> ConsoleFormatter | JsonFormatter:
        return self._formatter

    def format(self, entry: LogEntry, is_production: bool) -> str:
        return self._formatter.format(entry, is_production)

    def emit(self, entry: LogEntry, is_production: bool) -> None:
        output = self.format(entry, is_production)
        with self._lock:
            try:
                self._stream.write(output + "\n")
                self._stream.flush()
            except (OSError, ValueError):
                # Closed or broken stream: the line is dropped.
                pass


def _is_tty(stream: TextIO) -> bool:
    try:
        return bool(getattr(stream, "isatty", lambda: False)())
    except (OSError, ValueError):
        return False


class StdlibDestination(Destination):
    """Hands entries to the standard library ``logging`` module.

    The record keeps the call site of the original log call. Redacted metadata
    is appended to the message and attached as ``record.arclog_metadata``.

    Args:
        minimum_level: Entries below this level are dropped (default: INFO).
        logger_name: Target logger; derived from the entry's
            ``subsystem.category`` when omitted.
    """

    def __init__(self, minimum_level: LogLevel = LogLevel.INFO, *, logger_name: str | None = None) -> None:
        self.minimum_level = LogLevel.parse(minimum_level)
        self._logger_name = logger_name

    def _target(self, entry: LogEntry) -> logging.Logger:
        if self._logger_name:
            return logging.getLogger(self._logger_name)
        name = ".".join(part for part in (entry.subsystem, entry.category) if part)
        return logging.getLogger(name or None)

    def emit(self, entry: LogEntry, is_production: bool) -> None:
        logger = self._target(entry)
        levelno = entry.level.stdlib_level
        if not logger.isEnabledFor(levelno):
            return

        message = f"{entry.level.glyph} {entry.message}"
        if entry.metadata:
            message = f"{message} {{{format_metadata(entry.metadata, is_production)}}}"

        extra: dict[str, Any] = {
            METADATA_RECORD_ATTR: {key: redact(value, is_production) for key, value in entry.metadata.items()}
        }
        record = logger.makeRecord(
            logger.name,
            levelno,
            entry.file,
            entry.line,
            message,
            None,
            None,
            func=entry.function or None,
            extra=extra,
        )
        record.created = entry.timestamp.timestamp()
        logger.handle(record)


class MemoryDestination(Destination):
    """Keeps accepted entries in memory; meant for tests.

    All bookkeeping happens under a lock so the destination can be shared by
    threads.
    """

    def __init__(self, minimum_level: LogLevel = LogLevel.DEBUG) -> None:
        self.minimum_level = LogLevel.parse(minimum_level)
        self._lock = threading.Lock()
        self._entries: list[tuple[LogEntry, bool]] = []

    def emit(self, entry: LogEntry, is_production: bool) -> None:
        with self._lock:
            self._entries.append((entry, is_production))

    @property
    def entries(self) -> list[LogEntry]:
        with self._lock:
            return [entry for entry, _ in self._entries]

    @property
    def production_flags(self) -> list[bool]:
        with self._lock:
            return [flag for _, flag in self._entries]

    @property
    def call_count(self) -> int:
        with self._lock:
            return len(self._entries)

    @property
    def last_entry(self) -> LogEntry | None:
        with self._lock:
            return self._entries[-1][0] if self._entries else None

    @property
    def last_level(self) -> LogLevel | None:
        entry = self.last_entry
        return entry.level if entry else None

    @property
    def last_message(self) -> str | None:
        entry = self.last_entry
        return entry.message if entry else None

    def messages(self, level: LogLevel) -> list[str]:
        return [entry.message for entry in self.entries if entry.level == level]

    def rendered(self, is_production: bool | None = None) -> list[str]:
        """Redacted ``key=value`` metadata text of each captured entry.

        Uses the flag each entry was written with unless ``is_production`` is
        given.
        """
        with self._lock:
            captured = list(self._entries)
        return [
            format_metadata(entry.metadata, flag if is_production is None else is_production)
            for entry, flag in captured
        ]

    def reset(self) -> None:
        with self._lock:
            self._entries.clear()


__all__ = [
    "ConsoleDestination",
    "Destination",
    "LogFormat",
    "MemoryDestination",
    "METADATA_RECORD_ATTR",
    "StdlibDestination",
]
