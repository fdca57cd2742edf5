"""
Interceptors for routing standard library and structlog calls into a facade.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

import structlog
from structlog.typing import EventDict, WrappedLogger

from .core import Logger
from .entry import SourceLocation
from .levels import LogLevel
from .privacy import Privacy, coerce_metadata
from .sinks import METADATA_RECORD_ATTR

_INTERNAL_PREFIX = "arclog"

_STANDARD_RECORD_ATTRS = frozenset(logging.LogRecord("", 0, "", 0, "", None, None).__dict__) | {
    "message",
    "asctime",
}

# Keys that structlog processors add and that are rendered as entry fields.
_EVENT_FIELDS = {"event", "level", "logger", "pathname", "func_name", "lineno", "timestamp"}


def _is_internal(name: str | None) -> bool:
    return bool(name) and (name == _INTERNAL_PREFIX or name.startswith(_INTERNAL_PREFIX + "."))


class FacadeHandler(logging.Handler):
    """
    Redirect standard library logging records to a facade.

    Extra record attributes become metadata tagged with ``default_privacy``.
    Records of this package's own loggers, and records produced by
    ``StdlibDestination``, are skipped to avoid loops.
    """

    def __init__(
        self,
        logger: Logger,
        level: int = logging.NOTSET,
        *,
        default_privacy: Privacy = Privacy.PRIVATE,
    ) -> None:
        super().__init__(level)
        self._logger = logger
        self._default_privacy = default_privacy

    def emit(self, record: logging.LogRecord) -> None:
        try:
            if _is_internal(record.name) or hasattr(record, METADATA_RECORD_ATTR):
                return

            extras = {
                key: value
                for key, value in record.__dict__.items()
                if key not in _STANDARD_RECORD_ATTRS and not key.startswith("_")
            }
            self._logger.log(
                self.format(record),
                LogLevel.from_stdlib(record.levelno),
                coerce_metadata(extras, self._default_privacy),
                SourceLocation(record.pathname, record.funcName or "", record.lineno),
            )
        except Exception:
            self.handleError(record)


def intercept_stdlib(
    logger: Logger,
    level: int = logging.INFO,
    *,
    default_privacy: Privacy = Privacy.PRIVATE,
) -> FacadeHandler:
    """Replace the root logger's handlers with a ``FacadeHandler``."""
    handler = FacadeHandler(logger, default_privacy=default_privacy)
    root_logger = logging.getLogger()
    root_logger.handlers = []
    root_logger.setLevel(level)
    root_logger.addHandler(handler)
    return handler


# =============================================================================
# Structlog Bridge
# =============================================================================


def facade_renderer(
    logger: Logger,
    *,
    default_privacy: Privacy = Privacy.PRIVATE,
) -> Callable[[WrappedLogger, str, EventDict], str]:
    """Build a final structlog processor that hands events to ``logger``."""

    def render(wrapped: WrappedLogger, method_name: str, event_dict: EventDict) -> str:
        if _is_internal(event_dict.get("logger")):
            return ""

        try:
            level = LogLevel.parse(event_dict.get("level", method_name))
        except ValueError:
            level = LogLevel.INFO

        source = SourceLocation(
            str(event_dict.get("pathname", "")),
            str(event_dict.get("func_name", "")),
            int(event_dict.get("lineno", 0) or 0),
        )
        metadata = {key: value for key, value in event_dict.items() if key not in _EVENT_FIELDS}
        logger.log(
            str(event_dict.get("event", "")),
            level,
            coerce_metadata(metadata, default_privacy),
            source,
        )
        return ""

    return render


class _NopFile:
    def write(self, s: str) -> None:
        pass

    def flush(self) -> None:
        pass


_NOP_FILE = _NopFile()


class SilentPrintLoggerFactory:
    """Logger factory that returns a logger writing to nowhere."""

    def __call__(self, *args: Any) -> structlog.PrintLogger:
        return structlog.PrintLogger(file=_NOP_FILE)


def configure_structlog(
    logger: Logger,
    level: LogLevel | str = LogLevel.DEBUG,
    *,
    default_privacy: Privacy = Privacy.PRIVATE,
) -> None:
    """Configure structlog so every bound logger writes through ``logger``."""
    processors = [
        structlog.stdlib.add_log_level,
        structlog.processors.CallsiteParameterAdder(
            [
                structlog.processors.CallsiteParameter.PATHNAME,
                structlog.processors.CallsiteParameter.FUNC_NAME,
                structlog.processors.CallsiteParameter.LINENO,
            ],
            additional_ignores=[_INTERNAL_PREFIX],
        ),
        structlog.processors.format_exc_info,
        facade_renderer(logger, default_privacy=default_privacy),
    ]
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(LogLevel.parse(level).stdlib_level),
        context_class=dict,
        logger_factory=SilentPrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


__all__ = [
    "FacadeHandler",
    "SilentPrintLoggerFactory",
    "configure_structlog",
    "facade_renderer",
    "intercept_stdlib",
]
