"""
Logging Configuration.

Settings are read from ``ARCLOG_*`` environment variables (or a ``.env`` file):

    ARCLOG_ENV=production
    ARCLOG_LEVEL=warning
    ARCLOG_DESTINATIONS=console,stdlib
    ARCLOG_FORMAT=json
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .levels import LogLevel
from .sinks import ConsoleDestination, Destination, LogFormat, MemoryDestination, StdlibDestination

if TYPE_CHECKING:
    from .core import Logger

Environment = Literal["development", "testing", "staging", "production"]


class LoggingSettings(BaseSettings):
    """Logger and destination configuration."""

    model_config = SettingsConfigDict(
        env_prefix="ARCLOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    env: Environment = Field(default="development", description="Current environment")
    level: LogLevel = Field(default=LogLevel.DEBUG, description="Minimum level of the console destination")
    format: LogFormat = Field(default="console", description="Console output format")
    destinations: str = Field(default="console", description="Comma-separated destination names (console, stdlib, memory)")
    use_timestamp: bool = Field(default=True, description="Prefix console lines with a timestamp")
    use_glyph: bool = Field(default=True, description="Include the level emoji")
    use_source_location: bool = Field(default=False, description="Include file:line")
    use_color: bool | None = Field(default=None, description="ANSI colors; auto-detected when unset")
    category: str = Field(default="Default", description="Category tag of the logger")
    subsystem: str = Field(default="arclog", description="Subsystem tag of the logger")
    stdlib_level: LogLevel = Field(default=LogLevel.INFO, description="Minimum level of the stdlib destination")

    @field_validator("level", "stdlib_level", mode="before")
    @classmethod
    def _parse_level(cls, value: object) -> LogLevel:
        if isinstance(value, str) and value.strip().isdigit():
            value = int(value)
        return LogLevel.parse(value)  # type: ignore[arg-type]

    @property
    def is_production(self) -> bool:
        return self.env == "production"

    @property
    def destination_names(self) -> list[str]:
        return [name.strip().lower() for name in self.destinations.split(",") if name.strip()]


def build_destinations(settings: LoggingSettings) -> list[Destination]:
    """Create the destinations named in ``settings.destinations``, in order."""
    destinations: list[Destination] = []
    for name in settings.destination_names:
        if name == "console":
            destinations.append(
                ConsoleDestination(
                    settings.level,
                    use_timestamp=settings.use_timestamp,
                    use_glyph=settings.use_glyph,
                    use_source_location=settings.use_source_location,
                    fmt=settings.format,
                    use_color=settings.use_color,
                )
            )
        elif name == "stdlib":
            destinations.append(StdlibDestination(settings.stdlib_level))
        elif name == "memory":
            destinations.append(MemoryDestination(settings.level))
        else:
            raise ValueError(f"Unknown log destination: {name!r}")
    return destinations


def build_logger(settings: LoggingSettings) -> Logger:
    from .core import Logger

    return Logger(
        build_destinations(settings),
        is_production=settings.is_production,
        category=settings.category,
        subsystem=settings.subsystem,
    )


__all__ = ["Environment", "LoggingSettings", "build_destinations", "build_logger"]
