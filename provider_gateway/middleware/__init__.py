"""Middleware components for request processing."""

from provider_gateway.middleware.logging import LoggingMiddleware
from provider_gateway.middleware.request_validation import RequestSizeValidationMiddleware

__all__ = [
    "LoggingMiddleware",
    "RequestSizeValidationMiddleware",
]
