"""Logging configuration with JSON formatting."""

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any

from provider_gateway.config import settings

# Substrings of keys whose values never reach the logs
SENSITIVE_KEY_MARKERS = ("password", "token", "session", "authorization")

MASK = "***"


def mask_sensitive(value: Any) -> Any:
    """
    Recursively mask credentials inside a JSON-like value.

    Keys containing any of ``SENSITIVE_KEY_MARKERS`` (case-insensitive) have
    their values replaced by ``MASK``. Cognito's ``AuthParameters`` and
    ``ChallengeResponses`` maps use upper-case keys such as ``PASSWORD``,
    which are covered by the same rule.

    Args:
        value: Any JSON-like value (dict, list or scalar)

    Returns:
        A masked copy of the value
    """
    if isinstance(value, dict):
        masked: dict[str, Any] = {}
        for key, item in value.items():
            lowered = str(key).lower()
            if any(marker in lowered for marker in SENSITIVE_KEY_MARKERS):
                masked[key] = MASK
            else:
                masked[key] = mask_sensitive(item)
        return masked
    if isinstance(value, list):
        return [mask_sensitive(item) for item in value]
    return value


class JSONFormatter(logging.Formatter):
    """
    Custom formatter that outputs logs as JSON.

    Each log record is formatted as a JSON object with the following fields:
    - timestamp: ISO 8601 timestamp in UTC
    - level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - logger: Logger name
    - message: Log message
    - correlation_id: Request correlation ID (if present in extra)
    - operation: Routed operation name (if present in extra)
    - Additional fields from the `context` extra, with credentials masked
    """

    def format(self, record: logging.LogRecord) -> str:
        """
        Format the log record as JSON.

        Args:
            record: The log record to format

        Returns:
            JSON string representation of the log record
        """
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if getattr(record, "correlation_id", None):
            log_data["correlation_id"] = record.correlation_id

        if getattr(record, "operation", None):
            log_data["operation"] = record.operation

        if hasattr(record, "context"):
            log_data.update(mask_sensitive(record.context))

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Add file location for debugging (only at DEBUG level)
        if record.levelno == logging.DEBUG:
            log_data["file"] = record.pathname
            log_data["line"] = record.lineno
            log_data["function"] = record.funcName

        return json.dumps(log_data, default=str)


def configure_logging() -> None:
    """
    Configure application logging with JSON formatter.

    Sets up the root logger to output structured JSON logs to stdout.
    Log level is determined by the LOG_LEVEL environment variable.
    botocore is kept at WARNING so request signing chatter stays out of
    DEBUG output.
    """
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(JSONFormatter())
    root_logger.addHandler(console_handler)

    for noisy in ("botocore", "aiobotocore", "urllib3"):
        logging.getLogger(noisy).setLevel(max(log_level, logging.WARNING))

    root_logger.info(
        "Logging configured",
        extra={"context": {"log_level": settings.log_level}},
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance with the specified name.

    Args:
        name: The name of the logger (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
