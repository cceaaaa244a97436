from __future__ import annotations

import json
import logging

from core.logger import JsonFormatter, LoggerService, StructuredFormatter


def make_record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "tests.logger", logging.INFO, __file__, 1, "Operation %s", ("done",), None
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_masks_credentials(settings) -> None:
    record = make_record(api_key="sk-secret", operation_type="text_generation")

    line = json.loads(JsonFormatter(settings).format(record))

    assert line["message"] == "Operation done"
    assert line["level"] == "INFO"
    assert line["api_key"] == "***"
    assert line["operation_type"] == "text_generation"


def test_non_serializable_extras_are_replaced(settings) -> None:
    record = make_record(client=object())

    line = json.loads(JsonFormatter(settings).format(record))

    assert line["client"] == "<non-serializable: object>"


def test_structured_formatter(settings) -> None:
    output = StructuredFormatter(settings).format(make_record(model="gpt-4o"))

    assert "message=Operation done" in output
    assert "model=gpt-4o" in output


def test_get_logger_attaches_one_handler(settings) -> None:
    service = LoggerService(settings)

    first = service.get_logger("tests.logger.single_handler")
    second = service.get_logger("tests.logger.single_handler")

    assert first is second
    assert len(first.handlers) == 1
