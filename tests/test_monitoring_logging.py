"""Tests for logging setup."""

import json
import logging
import sys
from pathlib import Path

from totem_news.monitoring.logging import JSONFormatter, setup_logging


def _record(msg: str, *args: object, exc_info: object = None) -> logging.LogRecord:
    return logging.LogRecord(
        name="totem_news.test",
        level=logging.INFO,
        pathname="test.py",
        lineno=1,
        msg=msg,
        args=args,
        exc_info=exc_info,  # type: ignore[arg-type]
    )


class TestJSONFormatter:
    def test_formats_basic_message(self) -> None:
        data = json.loads(JSONFormatter().format(_record("hello %s", "world")))
        assert data["message"] == "hello world"
        assert data["level"] == "INFO"
        assert data["logger"] == "totem_news.test"
        assert "timestamp" in data

    def test_formats_exception(self) -> None:
        try:
            raise ValueError("test error")
        except ValueError:
            record = _record("boom", exc_info=sys.exc_info())
        data = json.loads(JSONFormatter().format(record))
        assert "ValueError" in data["exception"]

    def test_includes_extra_data(self) -> None:
        record = _record("with data")
        record.extra_data = {"key": "value"}  # type: ignore[attr-defined]
        data = json.loads(JSONFormatter().format(record))
        assert data["data"] == {"key": "value"}

    def test_output_is_single_line(self) -> None:
        output = JSONFormatter().format(_record("line one\nline two"))
        assert "\n" not in output
        assert json.loads(output)["message"] == "line one\nline two"


class TestSetupLogging:
    def test_plain_formatter_by_default(self) -> None:
        setup_logging()
        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert not isinstance(root.handlers[0].formatter, JSONFormatter)
        root.handlers.clear()

    def test_structured_formatter(self) -> None:
        setup_logging(structured=True, level="DEBUG")
        root = logging.getLogger()
        assert isinstance(root.handlers[0].formatter, JSONFormatter)
        assert root.level == logging.DEBUG
        root.handlers.clear()

    def test_adds_file_handler(self, tmp_path: Path) -> None:
        log_file = tmp_path / "subdir" / "totem.log"
        setup_logging(structured=True, log_file=log_file)
        root = logging.getLogger()
        assert len(root.handlers) == 2
        logging.getLogger("test_file_handler").info("file log test")
        for handler in root.handlers:
            handler.flush()
        assert "file log test" in log_file.read_text()
        for handler in root.handlers:
            handler.close()
        root.handlers.clear()

    def test_http_client_loggers_held_at_warning(self) -> None:
        setup_logging(level="INFO")
        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("httpcore").level == logging.WARNING
        logging.getLogger().handlers.clear()

    def test_http_client_loggers_follow_debug(self) -> None:
        setup_logging(level=logging.DEBUG)
        assert logging.getLogger("httpx").level == logging.DEBUG
        logging.getLogger().handlers.clear()
