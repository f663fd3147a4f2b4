"""Structured Logging — tests for JSONFormatter and setup_logging."""

import json
import logging

from jackut.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra):
    record = logging.LogRecord(
        "jackut.test", logging.WARNING, __file__, 1, "request-friend failed", None, None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_base_fields():
    payload = json.loads(JSONFormatter().format(_record()))
    assert payload["level"] == "WARNING"
    assert payload["logger"] == "jackut.test"
    assert payload["message"] == "request-friend failed"
    assert "timestamp" in payload
    assert "login" not in payload


def test_json_formatter_includes_extra_fields():
    payload = json.loads(JSONFormatter().format(
        _record(operation="request-friend", login="joao", error_code="BLOCKED"),
    ))
    assert payload["operation"] == "request-friend"
    assert payload["login"] == "joao"
    assert payload["error_code"] == "BLOCKED"


def test_json_formatter_keeps_non_ascii():
    record = _record(login="joão")
    assert "joão" in JSONFormatter().format(record)


def test_setup_logging_is_idempotent():
    logger = logging.getLogger("jackut")
    before = list(logger.handlers)
    level = logger.level
    try:
        setup_logging("DEBUG", "json")
        setup_logging("WARNING", "text")
        ours = [h for h in logger.handlers if getattr(h, "_jackut_handler", False)]
        assert len(ours) == 1
        assert not isinstance(ours[0].formatter, JSONFormatter)
        assert logger.level == logging.WARNING
    finally:
        logger.setLevel(level)
        for handler in list(logger.handlers):
            if handler not in before:
                logger.removeHandler(handler)
