import io
import logging
import os
from datetime import datetime

import pytest
import structlog

from arclog import core
from arclog.sinks import MemoryDestination

FIXED_TIME = datetime(2025, 1, 31, 12, 30, 45, 123456)


@pytest.fixture
def fixed_clock():
    """Clock that always returns FIXED_TIME (naive, rendered as-is)."""
    return lambda: FIXED_TIME


@pytest.fixture
def memory() -> MemoryDestination:
    return MemoryDestination()


@pytest.fixture
def stream() -> io.StringIO:
    return io.StringIO()


@pytest.fixture(autouse=True)
def isolate_global_logging(monkeypatch):
    """
    Restores process-wide logging state touched by the tests:
    the shared arclog logger, structlog configuration and root logger handlers.
    """
    for key in list(os.environ):
        if key.startswith("ARCLOG_"):
            monkeypatch.delenv(key)

    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level

    yield

    core.reset_logging()
    structlog.reset_defaults()
    root_logger.handlers = handlers
    root_logger.setLevel(level)
