"""Tests for stock_analyser/utils/logging.py: handler and formatter setup."""

from __future__ import annotations

import json
import logging

import pytest

from stock_analyser.config import LoggingConfig
from stock_analyser.utils.logging import _JsonFormatter, configure_logging


@pytest.fixture(autouse=True)
def _restore_root_logging():
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    yield
    for handler in list(root.handlers):
        if handler not in saved_handlers:
            handler.close()
            root.removeHandler(handler)
    root.setLevel(saved_level)


def test_sets_level():
    configure_logging(LoggingConfig(level="WARNING", log_file=""))
    assert logging.getLogger().level == logging.WARNING


def test_file_handler_created(tmp_path):
    log_file = tmp_path / "logs" / "analyser.log"
    configure_logging(LoggingConfig(level="INFO", log_file=str(log_file)))
    logging.getLogger("stock_analyser.test").info("hello file")
    for handler in logging.getLogger().handlers:
        handler.flush()
    assert "hello file" in log_file.read_text(encoding="utf-8")


def test_json_formatter_fields():
    record = logging.LogRecord(
        "stock_analyser.x", logging.INFO, __file__, 1, "loaded %d", (3,), None
    )
    record.symbol = "AAPL"
    payload = json.loads(_JsonFormatter().format(record))
    assert payload["level"] == "INFO"
    assert payload["logger"] == "stock_analyser.x"
    assert payload["msg"] == "loaded 3"
    assert payload["symbol"] == "AAPL"
    assert "args" not in payload


def test_json_lines_written_to_file(tmp_path):
    log_file = tmp_path / "analyser.jsonl"
    configure_logging(LoggingConfig(level="DEBUG", log_file=str(log_file), json_format=True))
    logging.getLogger("stock_analyser.test").debug("sorted %d", 7, extra={"algorithm": "merge"})
    for handler in logging.getLogger().handlers:
        handler.flush()
    payload = json.loads(log_file.read_text(encoding="utf-8").splitlines()[-1])
    assert payload["msg"] == "sorted 7"
    assert payload["algorithm"] == "merge"


def test_reconfigure_replaces_handlers():
    configure_logging(LoggingConfig(level="INFO"))
    configure_logging(LoggingConfig(level="ERROR"))
    root = logging.getLogger()
    assert len(root.handlers) == 1
    assert root.handlers[0].level == logging.ERROR
