"""
Log entries and the call-site information attached to them.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Callable, Mapping

from .levels import LogLevel
from .privacy import PrivacyValue, coerce_metadata

Clock = Callable[[], datetime]

_INTERNAL_PREFIX = "arclog"


def system_clock() -> datetime:
    """Current local time, timezone-aware."""
    return datetime.now().astimezone()


def file_name(path: str) -> str:
    """Return the last component of ``path``.

    Both ``/`` and ``\\`` count as separators; a path without a separator is
    returned unchanged.
    """
    index = max(path.rfind("/"), path.rfind("\\"))
    return path[index + 1 :]


def _is_internal(module: str) -> bool:
    return module == _INTERNAL_PREFIX or module.startswith(_INTERNAL_PREFIX + ".")


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Where a log call was made."""

    file: str
    function: str
    line: int

    @property
    def file_name(self) -> str:
        return file_name(self.file)

    @classmethod
    def unknown(cls) -> SourceLocation:
        return cls("", "", 0)

    @classmethod
    def capture(cls, stacklevel: int = 1) -> SourceLocation:
        """Capture the first frame outside this package.

        ``stacklevel`` works as in ``logging.Logger.log``: values above 1 skip
        that many extra frames, for callers that wrap the facade in their own
        helpers.
        """
        frame = inspect.currentframe()
        try:
            while frame is not None and _is_internal(frame.f_globals.get("__name__", "")):
                frame = frame.f_back
            for _ in range(stacklevel - 1):
                if frame is None or frame.f_back is None:
                    break
                frame = frame.f_back
            if frame is None:
                return cls.unknown()
            code = frame.f_code
            return cls(code.co_filename, code.co_name, frame.f_lineno)
        finally:
            del frame


@dataclass(frozen=True, slots=True)
class LogEntry:
    """Immutable record of a single log event."""

    message: str
    level: LogLevel
    timestamp: datetime
    metadata: Mapping[str, PrivacyValue] = field(default_factory=lambda: MappingProxyType({}))
    source: SourceLocation = field(default_factory=SourceLocation.unknown)
    category: str = ""
    subsystem: str = ""

    @property
    def file(self) -> str:
        return self.source.file

    @property
    def function(self) -> str:
        return self.source.function

    @property
    def line(self) -> int:
        return self.source.line

    @property
    def file_name(self) -> str:
        return self.source.file_name


def make_entry(
    message: str,
    level: LogLevel,
    metadata: Mapping[str, PrivacyValue] | None = None,
    source: SourceLocation | None = None,
    clock: Clock | None = None,
    *,
    category: str = "",
    subsystem: str = "",
) -> LogEntry:
    """Build a ``LogEntry``, stamping it with ``clock()`` now.

    The metadata is copied, so later changes to the caller's mapping do not
    reach the entry. Untagged values are treated as private.
    """
    timestamp = (clock or system_clock)()
    return LogEntry(
        message=message,
        level=level,
        timestamp=timestamp,
        metadata=MappingProxyType(coerce_metadata(metadata)),
        source=source if source is not None else SourceLocation.unknown(),
        category=category,
        subsystem=subsystem,
    )


__all__ = ["Clock", "LogEntry", "SourceLocation", "file_name", "make_entry", "system_clock"]
