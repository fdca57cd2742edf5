"""
Log severity levels.
"""

from __future__ import annotations

import logging
from enum import IntEnum


class LogLevel(IntEnum):
    """Severity of a log message, ordered from least to most severe.

    Being an ``IntEnum``, levels compare by rank, so ``level >= LogLevel.WARNING``
    is the filtering predicate used by every destination.
    """

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3
    CRITICAL = 4

    def __str__(self) -> str:
        return self.name

    @property
    def glyph(self) -> str:
        """Emoji prefix used by console output."""
        return _GLYPHS[self]

    @property
    def stdlib_level(self) -> int:
        """Equivalent ``logging`` module level number."""
        return _STDLIB_LEVELS[self]

    @classmethod
    def from_stdlib(cls, levelno: int) -> LogLevel:
        """Map a ``logging`` level number onto the closest level at or below it."""
        result = cls.DEBUG
        for level in cls:
            if levelno >= _STDLIB_LEVELS[level]:
                result = level
        return result

    @classmethod
    def parse(cls, value: LogLevel | str | int) -> LogLevel:
        """Parse a level from a member, a case-insensitive name or a rank."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                raise ValueError(f"Unknown log level: {value!r}") from None
        return cls(value)


_GLYPHS = {
    LogLevel.DEBUG: "🔍",
    LogLevel.INFO: "ℹ️",
    LogLevel.WARNING: "⚠️",
    LogLevel.ERROR: "❌",
    LogLevel.CRITICAL: "🔥",
}

_STDLIB_LEVELS = {
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARNING: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
    LogLevel.CRITICAL: logging.CRITICAL,
}
