"""Tests for JSON log formatting and credential masking."""

import json
import logging
from io import StringIO

import pytest

from provider_gateway.logging.config import MASK, JSONFormatter, mask_sensitive


@pytest.fixture
def log_stream() -> StringIO:
    return StringIO()


def make_logger(name: str, stream: StringIO, level: int = logging.INFO) -> logging.Logger:
    handler = logging.StreamHandler(stream)
    handler.setFormatter(JSONFormatter())
    logger = logging.getLogger(name)
    logger.handlers = [handler]
    logger.propagate = False
    logger.setLevel(level)
    return logger


def test_json_formatter_output(log_stream: StringIO) -> None:
    """Test that JSONFormatter produces valid JSON."""
    logger = make_logger("test_json_logger", log_stream)

    logger.info(
        "Calling backend",
        extra={
            "correlation_id": "cid",
            "operation": "Login",
            "context": {"service": "cognito-idp"},
        },
    )

    log_data = json.loads(log_stream.getvalue().strip())
    assert log_data["level"] == "INFO"
    assert log_data["message"] == "Calling backend"
    assert log_data["correlation_id"] == "cid"
    assert log_data["operation"] == "Login"
    assert log_data["service"] == "cognito-idp"
    assert "timestamp" in log_data
    assert "file" not in log_data


def test_context_credentials_are_masked(log_stream: StringIO) -> None:
    logger = make_logger("test_mask_logger", log_stream)

    logger.info(
        "Rendered",
        extra={
            "context": {
                "payload": {
                    "AuthParameters": {"USERNAME": "ann", "PASSWORD": "hunter2"},
                    "Session": "S",
                }
            }
        },
    )

    output = log_stream.getvalue()
    assert "hunter2" not in output
    payload = json.loads(output)["payload"]
    assert payload["AuthParameters"] == {"USERNAME": "ann", "PASSWORD": MASK}
    assert payload["Session"] == MASK


def test_json_formatter_includes_exception_info(log_stream: StringIO) -> None:
    logger = make_logger("test_exception_logger", log_stream, logging.ERROR)

    try:
        raise ValueError("Test exception")
    except ValueError:
        logger.error("Error occurred", exc_info=True)

    log_data = json.loads(log_stream.getvalue().strip())
    assert "ValueError" in log_data["exception"]


def test_json_formatter_debug_includes_location(log_stream: StringIO) -> None:
    logger = make_logger("test_debug_logger", log_stream, logging.DEBUG)

    logger.debug("Debug message")

    log_data = json.loads(log_stream.getvalue().strip())
    assert "file" in log_data
    assert "line" in log_data
    assert "function" in log_data


@pytest.mark.parametrize(
    "key",
    ["password", "PreviousPassword", "NEW_PASSWORD", "AccessToken", "refreshToken", "Session", "Authorization"],
)
def test_mask_sensitive_keys(key: str) -> None:
    assert mask_sensitive({key: "secret"}) == {key: MASK}


def test_mask_sensitive_recurses_into_lists() -> None:
    value = {"items": [{"name": "a", "IdToken": "t"}], "count": 1}
    assert mask_sensitive(value) == {"items": [{"name": "a", "IdToken": MASK}], "count": 1}


def test_mask_sensitive_leaves_input_untouched() -> None:
    value = {"password": "p"}
    mask_sensitive(value)
    assert value == {"password": "p"}
