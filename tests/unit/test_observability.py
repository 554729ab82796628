"""
Тесты для structured logging

Проверяет JSON-формат записей и вывод extra-полей движка.
"""

import io
import json
import logging
import sys

import pytest

from src.core.domain.errors import NotOwnerError
from src.core.observability import JSONFormatter, setup_logging
from src.exchange import ExchangeEngine


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="src.exchange.engine",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg="redeem rejected for %s",
        args=("0xalice",),
        exc_info=None,
    )
    record.__dict__.update(extra)
    return record


def test_json_formatter_base_fields():
    payload = json.loads(JSONFormatter().format(_record()))

    assert payload["level"] == "WARNING"
    assert payload["logger"] == "src.exchange.engine"
    assert payload["message"] == "redeem rejected for 0xalice"
    assert "timestamp" in payload
    assert "error_code" not in payload


def test_json_formatter_extra_fields():
    record = _record(operation="redeem", account="0xalice", error_code="insufficient_balance")
    payload = json.loads(JSONFormatter().format(record))

    assert payload["operation"] == "redeem"
    assert payload["account"] == "0xalice"
    assert payload["error_code"] == "insufficient_balance"


def test_json_formatter_exception():
    try:
        raise RuntimeError("listener down")
    except RuntimeError:
        record = _record()
        record.exc_info = sys.exc_info()

    payload = json.loads(JSONFormatter().format(record))
    assert "RuntimeError: listener down" in payload["exception"]


@pytest.fixture
def exchange_logger():
    logger = logging.getLogger("src.exchange")
    previous_level = logger.level
    yield logger
    logger.setLevel(previous_level)


def test_setup_logging_emits_engine_records(exchange_logger):
    """Отклонённая операция пишется одной JSON-строкой с error_code."""
    handler = setup_logging(level="WARNING", logger=exchange_logger)
    stream = io.StringIO()
    handler.setStream(stream)
    try:
        engine = ExchangeEngine(owner="0xowner")
        engine.pawn("0xalice", 5, 70_560_000_000_000)
        with pytest.raises(NotOwnerError):
            engine.update_fee("0xalice", 1, 2, 2)
    finally:
        exchange_logger.removeHandler(handler)

    lines = [json.loads(line) for line in stream.getvalue().splitlines()]
    assert len(lines) == 1
    assert lines[0]["error_code"] == "not_owner"
    assert lines[0]["operation"] == "update_fee"


def test_setup_logging_text_format(exchange_logger):
    handler = setup_logging(level="debug", fmt="text", logger=exchange_logger)
    try:
        assert exchange_logger.level == logging.DEBUG
        assert not isinstance(handler.formatter, JSONFormatter)
    finally:
        exchange_logger.removeHandler(handler)
