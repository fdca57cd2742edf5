"""
The logging facade and the shared instance.
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Iterable, Mapping

import structlog

from .entry import Clock, LogEntry, SourceLocation, make_entry
from .levels import LogLevel
from .privacy import PrivacyValue
from .sinks import ConsoleDestination, Destination

if TYPE_CHECKING:
    from .config import LoggingSettings

DIAGNOSTICS_LOGGER = "arclog.diagnostics"

_diagnostics = structlog.get_logger()

Metadata = Mapping[str, PrivacyValue]


class Logger:
    """Privacy-aware logging facade.

    Each call builds one ``LogEntry`` and hands it to every destination in
    order, on the calling thread. A destination that raises is skipped for
    that entry; the error never reaches the caller.

    Args:
        destinations: Where entries go. ``None`` means a single default
            ``ConsoleDestination``; an empty sequence makes a no-op logger.
        is_production: Governs redaction of private values.
        category: Grouping tag copied onto every entry.
        subsystem: Grouping tag copied onto every entry.
        clock: Timestamp source, for deterministic tests.
    """

    def __init__(
        self,
        destinations: Iterable[Destination] | None = None,
        *,
        is_production: bool = False,
        category: str = "Default",
        subsystem: str = "arclog",
        clock: Clock | None = None,
    ) -> None:
        if destinations is None:
            destinations = (ConsoleDestination(),)
        self._destinations: tuple[Destination, ...] = tuple(destinations)
        self._is_production = is_production
        self._category = category
        self._subsystem = subsystem
        self._clock = clock
        self._failures = _FailureCounter()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(destinations={len(self._destinations)}, "
            f"is_production={self._is_production}, category={self._category!r}, "
            f"subsystem={self._subsystem!r})"
        )

    @property
    def destinations(self) -> tuple[Destination, ...]:
        return self._destinations

    @property
    def is_production(self) -> bool:
        return self._is_production

    @property
    def category(self) -> str:
        return self._category

    @property
    def subsystem(self) -> str:
        return self._subsystem

    @property
    def failure_count(self) -> int:
        """Number of destination writes that raised and were skipped."""
        return self._failures.value

    def with_category(self, category: str) -> Logger:
        """A logger with the same destinations and flags under another category."""
        scoped = Logger(
            self._destinations,
            is_production=self._is_production,
            category=category,
            subsystem=self._subsystem,
            clock=self._clock,
        )
        scoped._failures = self._failures
        return scoped

    def log(
        self,
        message: str,
        level: LogLevel,
        metadata: Metadata | None = None,
        source: SourceLocation | None = None,
        *,
        stacklevel: int = 1,
    ) -> None:
        if source is None:
            source = SourceLocation.capture(stacklevel)
        entry = make_entry(
            message,
            level,
            metadata,
            source,
            self._clock,
            category=self._category,
            subsystem=self._subsystem,
        )
        self.dispatch(entry)

    def dispatch(self, entry: LogEntry) -> None:
        """Send an already built entry to every destination."""
        for destination in self._destinations:
            try:
                destination.write(entry, self._is_production)
            except Exception:
                self._failures.increment()
                _report_failure(destination, entry)

    def debug(
        self,
        message: str,
        metadata: Metadata | None = None,
        source: SourceLocation | None = None,
        *,
        stacklevel: int = 1,
    ) -> None:
        self.log(message, LogLevel.DEBUG, metadata, source, stacklevel=stacklevel)

    def info(
        self,
        message: str,
        metadata: Metadata | None = None,
        source: SourceLocation | None = None,
        *,
        stacklevel: int = 1,
    ) -> None:
        self.log(message, LogLevel.INFO, metadata, source, stacklevel=stacklevel)

    def warning(
        self,
        message: str,
        metadata: Metadata | None = None,
        source: SourceLocation | None = None,
        *,
        stacklevel: int = 1,
    ) -> None:
        self.log(message, LogLevel.WARNING, metadata, source, stacklevel=stacklevel)

    def error(
        self,
        message: str,
        metadata: Metadata | None = None,
        source: SourceLocation | None = None,
        *,
        stacklevel: int = 1,
    ) -> None:
        self.log(message, LogLevel.ERROR, metadata, source, stacklevel=stacklevel)

    def critical(
        self,
        message: str,
        metadata: Metadata | None = None,
        source: SourceLocation | None = None,
        *,
        stacklevel: int = 1,
    ) -> None:
        self.log(message, LogLevel.CRITICAL, metadata, source, stacklevel=stacklevel)

    def close(self) -> None:
        for destination in self._destinations:
            destination.close()


def _report_failure(destination: Destination, entry: LogEntry) -> None:
    """Emit a diagnostics event for a failed write; never raises."""
    try:
        _diagnostics.warning(
            "destination_write_failed",
            logger=DIAGNOSTICS_LOGGER,
            destination=type(destination).__name__,
            entry_level=entry.level.name,
            exc_info=True,
        )
    except Exception:
        pass  # Fail silently to avoid breaking the application


class _FailureCounter:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._value = 0

    @property
    def value(self) -> int:
        with self._lock:
            return self._value

    def increment(self) -> None:
        with self._lock:
            self._value += 1


# =============================================================================
# Shared Instance
# =============================================================================

_shared: Logger | None = None
_shared_lock = threading.Lock()


def configure_logging(
    logger: Logger | None = None,
    *,
    settings: LoggingSettings | None = None,
) -> Logger:
    """
    Install the process-wide logger returned by ``get_logger``.

    Args:
        logger: A ready logger to share. Takes precedence over ``settings``.
        settings: Settings to build the logger from; read from the
            environment when both arguments are omitted.
    """
    from .config import LoggingSettings, build_logger

    global _shared

    if logger is None:
        logger = build_logger(settings or LoggingSettings())

    with _shared_lock:
        previous, _shared = _shared, logger

    if previous is not None and previous is not logger:
        previous.close()

    return logger


def get_logger(category: str | None = None) -> Logger:
    """Return the shared logger, configuring it from the environment on first use."""
    shared = _shared
    if shared is None:
        shared = configure_logging()
    if category is not None and category != shared.category:
        return shared.with_category(category)
    return shared


def reset_logging() -> None:
    """Close and forget the shared logger."""
    global _shared

    with _shared_lock:
        previous, _shared = _shared, None
    if previous is not None:
        previous.close()


__all__ = ["DIAGNOSTICS_LOGGER", "Logger", "configure_logging", "get_logger", "reset_logging"]
