# tests/unit/logging/test_logger.py - v1
"""Tests for logging/logger.py: logger factory and formatters."""

from __future__ import annotations

import json
import logging

from louvain_index.config.settings import Settings
from louvain_index.logging.context import clear_context, set_level_context, set_run_context
from louvain_index.logging.logger import (
    JsonFormatter,
    TextFormatter,
    get_logger,
    setup_logging,
    setup_logging_from_settings,
)


def _record(msg: str) -> logging.LogRecord:
    return logging.LogRecord(
        name="test", level=logging.INFO, pathname="", lineno=0,
        msg=msg, args=(), exc_info=None,
    )


class TestJsonFormatter:
    def setup_method(self):
        clear_context()

    def teardown_method(self):
        clear_context()

    def test_format_basic(self):
        parsed = json.loads(JsonFormatter().format(_record("Hello")))
        assert parsed["level"] == "INFO"
        assert parsed["message"] == "Hello"
        assert "timestamp" in parsed
        assert "context" not in parsed

    def test_format_with_context(self):
        set_run_context("run1", "karate")
        set_level_context(2, "zoom_out")
        parsed = json.loads(JsonFormatter().format(_record("test msg")))
        assert parsed["context"] == {
            "run_id": "run1",
            "graph_name": "karate",
            "level": 2,
            "phase": "zoom_out",
        }

    def test_extra_data(self):
        record = _record("with data")
        record.data = {"moves": 3}
        parsed = json.loads(JsonFormatter().format(record))
        assert parsed["data"] == {"moves": 3}


class TestTextFormatter:
    def setup_method(self):
        clear_context()

    def teardown_method(self):
        clear_context()

    def test_format_basic(self):
        output = TextFormatter().format(_record("Hello text"))
        assert "Hello text" in output
        assert "INFO" in output

    def test_format_with_context(self):
        set_run_context("abc123")
        set_level_context(0, "local_moving")
        output = TextFormatter().format(_record("moving"))
        assert "[abc123]" in output
        assert "(level 0)" in output
        assert output.endswith("- moving")


class TestGetLogger:
    def test_returns_logger(self):
        logger = get_logger("test_module")
        assert logger.name == "louvain_index.test_module"


class TestSetupLogging:
    def test_setup_json(self):
        setup_logging(level="DEBUG", log_format="json")
        root = logging.getLogger("louvain_index")
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JsonFormatter)

    def test_setup_text(self):
        setup_logging(level="INFO", log_format="text")
        root = logging.getLogger("louvain_index")
        assert root.level == logging.INFO
        assert isinstance(root.handlers[0].formatter, TextFormatter)

    def test_setup_with_file(self, tmp_path):
        log_file = tmp_path / "logs" / "run.log"
        setup_logging(level="INFO", log_file=log_file)
        root = logging.getLogger("louvain_index")
        assert len(root.handlers) == 2
        assert log_file.parent.exists()
        for handler in root.handlers[1:]:
            handler.close()
        setup_logging()

    def test_from_settings(self):
        setup_logging_from_settings(Settings(_env_file=None, log_level="WARNING"))
        root = logging.getLogger("louvain_index")
        assert root.level == logging.WARNING
        setup_logging()
