"""Structured Logging — JSON formatter and idempotent setup."""

import json
import logging

from shop.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra):
    record = logging.LogRecord(
        "shop.test", logging.INFO, __file__, 1, "hello %s", ("world",), None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_base_fields():
    log = json.loads(JSONFormatter().format(_record()))
    assert log["level"] == "INFO"
    assert log["logger"] == "shop.test"
    assert log["message"] == "hello world"
    assert "timestamp" in log


def test_json_formatter_surfaces_known_extras():
    log = json.loads(JSONFormatter().format(
        _record(order_id="o-1", amount="9.99", unrelated="skip"),
    ))
    assert log["order_id"] == "o-1"
    assert log["amount"] == "9.99"
    assert "unrelated" not in log


def test_setup_logging_does_not_stack_handlers():
    first = setup_logging("DEBUG", "json")
    second = setup_logging("INFO", "text")
    try:
        assert first not in logging.root.handlers
        assert second in logging.root.handlers
        assert logging.root.level == logging.INFO
        assert not isinstance(second.formatter, JSONFormatter)
    finally:
        logging.root.removeHandler(second)
