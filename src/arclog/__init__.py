"""
arclog: privacy-aware structured logging.

Leveled messages carry metadata whose values are tagged public, private or
sensitive. A ``Logger`` fans every message out to its destinations (console,
stdlib ``logging``, in-memory), each filtering by level and redacting values
for the environment.

Design Pattern: Strategy Pattern for destination abstraction.
Library: structlog bridge, orjson for JSON lines, pydantic-settings for configuration.

Usage:
    from arclog import ConsoleDestination, Logger, LogLevel, private, public, sensitive

    logger = Logger([ConsoleDestination(LogLevel.INFO)], is_production=True)
    logger.info("User authenticated", {
        "userId": public("12345"),
        "email": private("user@test.com"),
        "token": sensitive("abc123"),
    })
"""

from .config import LoggingSettings, build_logger
from .core import Logger, configure_logging, get_logger, reset_logging
from .entry import LogEntry, SourceLocation, file_name, make_entry, system_clock
from .levels import LogLevel
from .privacy import (
    PRIVATE_PLACEHOLDER,
    SENSITIVE_PLACEHOLDER,
    Privacy,
    PrivacyValue,
    coerce_metadata,
    format_metadata,
    private,
    public,
    redact,
    sensitive,
)
from .sinks import ConsoleDestination, Destination, MemoryDestination, StdlibDestination

__all__ = [
    "PRIVATE_PLACEHOLDER",
    "SENSITIVE_PLACEHOLDER",
    "ConsoleDestination",
    "Destination",
    "LogEntry",
    "LogLevel",
    "Logger",
    "LoggingSettings",
    "MemoryDestination",
    "Privacy",
    "PrivacyValue",
    "SourceLocation",
    "StdlibDestination",
    "build_logger",
    "coerce_metadata",
    "configure_logging",
    "file_name",
    "format_metadata",
    "get_logger",
    "make_entry",
    "private",
    "public",
    "redact",
    "reset_logging",
    "sensitive",
    "system_clock",
]
