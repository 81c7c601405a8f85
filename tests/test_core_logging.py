"""Tests for the logging helpers with correlation ids."""

import json
import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Any, cast

from pythonjsonlogger import jsonlogger

from vicat_keys.core.logging import (
    CorrelationIdFilter,
    LOG_FILE_PATH,
    LOG_SCHEMA_VERSION,
    bind_client_ip,
    bind_correlation_id,
    bind_log_username,
    correlation_id_context,
    get_client_ip,
    get_correlation_id,
    get_log_username,
    get_logger,
    log_username_context,
    reset_client_ip,
    reset_correlation_id,
    reset_log_username,
)


def _record(msg: str = "hello") -> logging.LogRecord:
    return logging.LogRecord(
        name="test",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg=msg,
        args=None,
        exc_info=None,
    )


def test_correlation_filter_attaches_context():
    """Filter should attach the current correlation id onto log records."""
    cid_token = bind_correlation_id("abc123")
    user_token = bind_log_username("alice1")
    ip_token = bind_client_ip("203.0.113.10")
    try:
        record = _record()
        filt = CorrelationIdFilter()
        assert filt.filter(record) is True
        record_any = cast(Any, record)
        assert record_any.__dict__["correlation_id"] == "abc123"
        assert record_any.__dict__["log_username"] == "alice1"
        assert record_any.__dict__["client_ip"] == "203.0.113.10"
    finally:
        reset_client_ip(ip_token)
        reset_log_username(user_token)
        reset_correlation_id(cid_token)


def test_correlation_filter_defaults_to_dash():
    """Unbound context renders as '-' rather than None."""
    record = cast(Any, _record())
    CorrelationIdFilter().filter(record)
    assert record.correlation_id == "-"
    assert record.log_username == "-"
    assert record.client_ip == "-"


def test_correlation_context_manager_restores_state():
    """Nested contexts restore the original correlation id."""
    with (
        correlation_id_context("ctx"),
        correlation_id_context("nested"),
        log_username_context("alice1"),
    ):
        assert get_correlation_id() == "nested"
        assert get_log_username() == "alice1"
    assert get_correlation_id() is None
    assert get_log_username() is None
    assert get_client_ip() is None


def test_get_logger_has_correlation_filter():
    """Handlers registered on the logger include the correlation filter."""
    logger = get_logger("vicat_keys.tests.logging")
    handlers = logger.handlers
    assert any(
        isinstance(h, logging.StreamHandler) and getattr(h, "stream", None) is sys.stdout
        for h in handlers
    )
    assert any(isinstance(h, RotatingFileHandler) for h in handlers)
    assert all(
        any(isinstance(flt, CorrelationIdFilter) for flt in handler.filters) for handler in handlers
    )
    assert all(isinstance(handler.formatter, jsonlogger.JsonFormatter) for handler in handlers)


def test_get_logger_does_not_duplicate_handlers():
    """Calling get_logger repeatedly for one name keeps one handler set."""
    first = get_logger("vicat_keys.tests.logging.repeat")
    second = get_logger("vicat_keys.tests.logging.repeat")

    assert first is second
    rotating = [h for h in second.handlers if isinstance(h, RotatingFileHandler)]
    assert len(rotating) == 1
    assert rotating[0].baseFilename == str(LOG_FILE_PATH.resolve())


def test_formatter_emits_renamed_fields():
    """Rendered entries use short field names and carry the schema version."""
    logger = get_logger("vicat_keys.tests.logging.format")
    handler = next(h for h in logger.handlers if isinstance(h, RotatingFileHandler))
    record = _record("key checked")
    with correlation_id_context("cid-1"), log_username_context("alice1"):
        handler.filters[0].filter(record)
    payload = json.loads(cast(logging.Formatter, handler.formatter).format(record))

    assert payload["message"] == "key checked"
    assert payload["cid"] == "cid-1"
    assert payload["user"] == "alice1"
    assert payload["level"] == "INFO"
    assert payload["schema_version"] == LOG_SCHEMA_VERSION
