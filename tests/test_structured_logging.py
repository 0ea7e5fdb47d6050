"""Tests for structured JSON logging configuration and output."""

from __future__ import annotations

import json
import logging

import pytest

from apnframe.logging_config import HealthCheckFilter, RequestIDFilter, configure_json_logging
from apnframe.utils.request_context import bind_request_id, get_request_id, reset_request_id


@pytest.fixture
def restore_root_logger():
    """Put the root logger back the way it was after each test."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def _last_line(capsys: pytest.CaptureFixture[str]) -> str:
    return capsys.readouterr().out.strip().splitlines()[-1]


def test_json_output(restore_root_logger, capsys: pytest.CaptureFixture[str]) -> None:
    """Logs are emitted as JSON with level, timestamp and extra fields."""
    configure_json_logging(log_level="INFO", use_json=True)

    logging.getLogger("apnframe.test").info("Frame encoded", extra={"frame_size": 120})

    log_data = json.loads(_last_line(capsys))
    assert log_data["message"] == "Frame encoded"
    assert log_data["level"] == "INFO"
    assert log_data["name"] == "apnframe.test"
    assert log_data["frame_size"] == 120
    assert log_data["request_id"] == "no-request-id"
    assert "timestamp" in log_data


def test_json_output_includes_request_id(
    restore_root_logger, capsys: pytest.CaptureFixture[str]
) -> None:
    """The current request ID is attached to every record."""
    configure_json_logging(log_level="INFO", use_json=True)
    token = bind_request_id("req-123")
    try:
        logging.getLogger("apnframe.test").warning("Frame too large")
    finally:
        reset_request_id(token)

    assert json.loads(_last_line(capsys))["request_id"] == "req-123"
    assert get_request_id() is None


def test_text_output(restore_root_logger, capsys: pytest.CaptureFixture[str]) -> None:
    """Text mode uses the plain formatter."""
    configure_json_logging(log_level="DEBUG", use_json=False)

    logging.getLogger("apnframe.test").debug("Plain message")

    line = _last_line(capsys)
    assert "apnframe.test - DEBUG - [no-request-id] - Plain message" in line


def test_level_filtering(restore_root_logger, capsys: pytest.CaptureFixture[str]) -> None:
    """Records below the configured level are dropped."""
    configure_json_logging(log_level="WARNING", use_json=True)

    logging.getLogger("apnframe.test").info("hidden")

    assert capsys.readouterr().out == ""


def test_request_id_filter_sets_default() -> None:
    """Records get a placeholder request ID outside a request."""
    record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)

    assert RequestIDFilter().filter(record) is True
    assert record.request_id == "no-request-id"


@pytest.mark.parametrize(
    ("message", "kept"),
    [
        ('127.0.0.1 - "GET /health HTTP/1.1" 200', False),
        ('127.0.0.1 - "GET /health HTTP/1.1" 503', True),
        ('127.0.0.1 - "POST /frames HTTP/1.1" 200', True),
    ],
)
def test_health_check_filter(message: str, kept: bool) -> None:
    """Only successful health check access logs are suppressed."""
    record = logging.LogRecord("uvicorn.access", logging.INFO, __file__, 1, message, None, None)

    assert HealthCheckFilter().filter(record) is kept


def test_bind_request_id_generates_when_missing() -> None:
    """A missing request ID is replaced by a generated hex ID until reset."""
    token = bind_request_id(None)
    try:
        request_id = get_request_id()
        assert request_id is not None
        assert len(request_id) == 32
        int(request_id, 16)
    finally:
        reset_request_id(token)

    assert get_request_id() is None


def test_nested_bind_restores_outer_request_id() -> None:
    """Resetting an inner binding restores the outer request ID."""
    outer = bind_request_id("outer")
    try:
        inner = bind_request_id("inner")
        assert get_request_id() == "inner"
        reset_request_id(inner)
        assert get_request_id() == "outer"
    finally:
        reset_request_id(outer)
