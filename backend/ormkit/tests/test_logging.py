"""Tests for structured logging."""

import json
import logging
import sys

from ormkit.core.logging import ConsoleFormatter, JSONFormatter, LoggerAdapter, get_logger


def _record(msg="Test message", level=logging.INFO, exc_info=None) -> logging.LogRecord:
    return logging.LogRecord(
        name="ormkit.test",
        level=level,
        pathname="/ormkit/test.py",
        lineno=42,
        msg=msg,
        args=(),
        exc_info=exc_info,
    )


class TestJSONFormatter:
    def test_basic_log_format(self):
        parsed = json.loads(JSONFormatter().format(_record()))

        assert parsed["level"] == "INFO"
        assert parsed["logger"] == "ormkit.test"
        assert parsed["message"] == "Test message"
        assert parsed["line"] == 42
        assert "timestamp" in parsed
        assert "extra" not in parsed

    def test_extra_fields_are_grouped(self):
        record = _record("Validation failed for Post")
        record.model = "Post"
        record.violations = 2

        parsed = json.loads(JSONFormatter().format(record))

        assert parsed["extra"] == {"model": "Post", "violations": 2}

    def test_extra_can_be_disabled(self):
        record = _record()
        record.model = "Post"

        parsed = json.loads(JSONFormatter(include_extra=False).format(record))

        assert "extra" not in parsed

    def test_non_serializable_extra_is_stringified(self):
        record = _record()
        record.custom_object = object()

        parsed = json.loads(JSONFormatter().format(record))

        assert parsed["extra"]["custom_object"].startswith("<object object")

    def test_exception_info(self):
        try:
            raise ValueError("Test error")
        except ValueError:
            exc_info = sys.exc_info()

        parsed = json.loads(JSONFormatter().format(_record(level=logging.ERROR, exc_info=exc_info)))

        assert parsed["exception"]["type"] == "ValueError"
        assert parsed["exception"]["message"] == "Test error"
        assert isinstance(parsed["exception"]["traceback"], list)


class TestConsoleFormatter:
    def test_contains_level_and_message(self):
        output = ConsoleFormatter().format(_record())

        assert "INFO" in output
        assert "ormkit.test - Test message" in output

    def test_appends_extra_fields(self):
        record = _record("Synced Post.tags")
        record.relationship = "tags"

        assert "relationship=tags" in ConsoleFormatter().format(record)


class TestLoggerAdapter:
    def test_adds_context(self, caplog):
        caplog.set_level(logging.INFO, logger="ormkit.adapter")
        adapter = LoggerAdapter(get_logger("ormkit.adapter"), {"model": "Post"})

        adapter.info("Saved", extra={"record_id": 7})

        assert caplog.records[-1].model == "Post"
        assert caplog.records[-1].record_id == 7


class TestSetupLogging:
    def _run(self, monkeypatch, log_format, environment="development"):
        from ormkit.core import logging as ormkit_logging

        monkeypatch.setattr(ormkit_logging.settings, "log_format", log_format)
        monkeypatch.setattr(ormkit_logging.settings, "environment", environment)
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        try:
            ormkit_logging.setup_logging()
            return [handler.formatter for handler in root.handlers]
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)

    def test_forced_json(self, monkeypatch):
        formatters = self._run(monkeypatch, "json")
        assert len(formatters) == 1
        assert isinstance(formatters[0], JSONFormatter)

    def test_console_in_development(self, monkeypatch):
        formatters = self._run(monkeypatch, None)
        assert isinstance(formatters[0], ConsoleFormatter)

    def test_json_in_production(self, monkeypatch):
        formatters = self._run(monkeypatch, None, environment="production")
        assert isinstance(formatters[0], JSONFormatter)
