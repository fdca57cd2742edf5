"""
Settings and logger construction tests.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from arclog.config import LoggingSettings, build_destinations, build_logger
from arclog.formatters import ConsoleFormatter, JsonFormatter
from arclog.levels import LogLevel
from arclog.sinks import ConsoleDestination, MemoryDestination, StdlibDestination


def test_defaults():
    """Development environment with a single console destination."""
    settings = LoggingSettings()
    assert settings.env == "development"
    assert settings.is_production is False
    assert settings.level is LogLevel.DEBUG
    assert settings.destination_names == ["console"]


def test_reads_environment(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("ARCLOG_ENV", "production")
    monkeypatch.setenv("ARCLOG_LEVEL", "warning")
    monkeypatch.setenv("ARCLOG_DESTINATIONS", "console, stdlib")
    monkeypatch.setenv("ARCLOG_FORMAT", "json")
    monkeypatch.setenv("ARCLOG_CATEGORY", "Payments")

    settings = LoggingSettings()

    assert settings.is_production is True
    assert settings.level is LogLevel.WARNING
    assert settings.destination_names == ["console", "stdlib"]
    assert settings.format == "json"
    assert settings.category == "Payments"


def test_numeric_level_from_environment(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("ARCLOG_LEVEL", "3")
    assert LoggingSettings().level is LogLevel.ERROR


def test_invalid_values_are_rejected():
    with pytest.raises(ValidationError):
        LoggingSettings(level="verbose")
    with pytest.raises(ValidationError):
        LoggingSettings(env="qa")


def test_settings_are_frozen():
    settings = LoggingSettings()
    with pytest.raises(ValidationError):
        settings.env = "production"  # type: ignore[misc]


def test_build_destinations():
    settings = LoggingSettings(
        destinations="console,stdlib,memory",
        level="info",
        stdlib_level="error",
        use_glyph=False,
        use_source_location=True,
    )
    console, stdlib, memory = build_destinations(settings)

    assert isinstance(console, ConsoleDestination)
    assert console.minimum_level is LogLevel.INFO
    assert isinstance(console.formatter, ConsoleFormatter)
    assert console.formatter.use_glyph is False
    assert console.formatter.use_source_location is True
    assert isinstance(stdlib, StdlibDestination)
    assert stdlib.minimum_level is LogLevel.ERROR
    assert isinstance(memory, MemoryDestination)
    assert memory.minimum_level is LogLevel.INFO


def test_json_console():
    (console,) = build_destinations(LoggingSettings(format="json"))
    assert isinstance(console.formatter, JsonFormatter)


def test_unknown_destination():
    with pytest.raises(ValueError, match="Unknown log destination"):
        build_destinations(LoggingSettings(destinations="console,kafka"))


def test_empty_destination_list():
    assert build_destinations(LoggingSettings(destinations="")) == []


def test_build_logger():
    logger = build_logger(
        LoggingSettings(env="production", destinations="memory", category="Auth", subsystem="com.example")
    )
    assert logger.is_production is True
    assert logger.category == "Auth"
    assert logger.subsystem == "com.example"
