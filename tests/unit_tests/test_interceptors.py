"""
Interceptor tests: stdlib logging and structlog routed into a facade.
"""

from __future__ import annotations

import logging

import structlog

from arclog.core import Logger
from arclog.interceptors import FacadeHandler, configure_structlog, facade_renderer, intercept_stdlib
from arclog.levels import LogLevel
from arclog.privacy import Privacy, private, public, sensitive
from arclog.sinks import MemoryDestination, StdlibDestination


class TestFacadeHandler:
    """stdlib -> facade"""

    def test_record_becomes_entry(self, memory: MemoryDestination) -> None:
        stdlib_logger = logging.getLogger("thirdparty.client")
        stdlib_logger.setLevel(logging.DEBUG)
        handler = FacadeHandler(Logger([memory]))
        stdlib_logger.addHandler(handler)
        try:
            stdlib_logger.warning("retrying %s", "GET /users", extra={"attempt": 2})
        finally:
            stdlib_logger.removeHandler(handler)

        entry = memory.last_entry
        assert entry.message == "retrying GET /users"
        assert entry.level is LogLevel.WARNING
        assert dict(entry.metadata) == {"attempt": private("2")}
        assert entry.function == "test_record_becomes_entry"
        assert entry.file_name == "test_interceptors.py"

    def test_default_privacy_is_configurable(self, memory: MemoryDestination) -> None:
        handler = FacadeHandler(Logger([memory]), default_privacy=Privacy.SENSITIVE)
        record = logging.LogRecord("thirdparty", logging.INFO, "/x/y.py", 3, "msg", None, None)
        record.api_key = "abc"
        handler.handle(record)
        assert dict(memory.last_entry.metadata) == {"api_key": sensitive("abc")}

    def test_skips_own_loggers(self, memory: MemoryDestination) -> None:
        handler = FacadeHandler(Logger([memory]))
        handler.handle(logging.LogRecord("arclog.diagnostics", logging.ERROR, "", 0, "loop", None, None))
        assert memory.call_count == 0

    def test_no_loop_with_stdlib_destination(self, memory: MemoryDestination) -> None:
        logger = Logger([StdlibDestination(LogLevel.DEBUG, logger_name="app.events"), memory])
        intercept_stdlib(logger, logging.DEBUG)

        logger.info("once")

        assert memory.messages(LogLevel.INFO) == ["once"]

    def test_intercept_stdlib_replaces_root_handlers(self, memory: MemoryDestination) -> None:
        handler = intercept_stdlib(Logger([memory]), logging.INFO)
        root_logger = logging.getLogger()
        assert root_logger.handlers == [handler]

        logging.getLogger("somelib").debug("dropped by root level")
        logging.getLogger("somelib").error("kept")

        assert [entry.message for entry in memory.entries] == ["kept"]


class TestStructlogBridge:
    """structlog -> facade"""

    def test_events_reach_facade(self, memory: MemoryDestination) -> None:
        configure_structlog(Logger([memory], is_production=True))
        log = structlog.get_logger()

        log.info("user_login", user="bob", user_id=public("U1"))

        entry = memory.last_entry
        assert entry.message == "user_login"
        assert entry.level is LogLevel.INFO
        assert dict(entry.metadata) == {"user": private("bob"), "user_id": public("U1")}
        assert entry.function == "test_events_reach_facade"
        assert entry.file_name == "test_interceptors.py"
        assert memory.rendered() == ["user=<private>, user_id=U1"]

    def test_level_filter(self, memory: MemoryDestination) -> None:
        configure_structlog(Logger([memory]), "warning")
        log = structlog.get_logger()

        log.debug("hidden")
        log.info("hidden")
        log.error("shown")

        assert [entry.message for entry in memory.entries] == ["shown"]
        assert memory.last_level is LogLevel.ERROR

    def test_internal_events_are_skipped(self, memory: MemoryDestination) -> None:
        render = facade_renderer(Logger([memory]))
        result = render(None, "warning", {"event": "x", "level": "warning", "logger": "arclog.diagnostics"})
        assert result == ""
        assert memory.call_count == 0

    def test_renderer_without_callsite(self, memory: MemoryDestination) -> None:
        render = facade_renderer(Logger([memory]))
        render(None, "critical", {"event": "disk full", "mount": "/var"})
        entry = memory.last_entry
        assert entry.level is LogLevel.CRITICAL
        assert entry.line == 0
        assert dict(entry.metadata) == {"mount": private("/var")}
