"""Global exception handlers for consistent error responses."""

from typing import Any

from botocore.exceptions import ConnectTimeoutError, EndpointConnectionError, ReadTimeoutError
from fastapi import Request, status
from fastapi.responses import JSONResponse

from provider_gateway.catalog.standard import CORS_HEADERS
from provider_gateway.exceptions import GatewayError, MethodNotAllowedError
from provider_gateway.logging.config import get_logger

logger = get_logger(__name__)


def create_error_response(
    error_code: str,
    message: str,
    status_code: int,
    details: dict[str, Any] | None = None,
    correlation_id: str | None = None,
) -> JSONResponse:
    """
    Create an error response in the same envelope backend errors use.

    Args:
        error_code: Machine-readable error code
        message: Human-readable error message
        status_code: HTTP status code
        details: Additional error details
        correlation_id: Request correlation ID for tracing

    Returns:
        JSONResponse with error information and the CORS headers
    """
    error: dict[str, Any] = {
        "status": status_code,
        "message": message,
        "code": error_code,
        "details": details or {},
    }

    # Add correlation ID if provided
    if correlation_id:
        error["correlation_id"] = correlation_id

    return JSONResponse(
        status_code=status_code,
        content={"error": error},
        headers=dict(CORS_HEADERS),
    )


async def gateway_exception_handler(
    request: Request, exc: GatewayError
) -> JSONResponse:
    """
    Handle GatewayError and its subclasses.

    Args:
        request: FastAPI request
        exc: GatewayError instance

    Returns:
        JSONResponse with error details
    """
    correlation_id = getattr(request.state, "correlation_id", None)

    if exc.status_code >= 500:
        logger.error(
            f"Gateway error: {exc.error_code}: {exc.message}",
            extra={
                "correlation_id": correlation_id,
                "context": {"details": exc.details, "path": request.url.path},
            },
        )

    response = create_error_response(
        error_code=exc.error_code,
        message=exc.message,
        status_code=exc.status_code,
        details=exc.details,
        correlation_id=correlation_id,
    )

    if isinstance(exc, MethodNotAllowedError):
        response.headers["Allow"] = ", ".join(exc.allowed)

    return response


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle unexpected exceptions.

    Logs full traceback and returns generic error to client. A backend
    that cannot be reached yields 503 instead of 500.

    Args:
        request: FastAPI request
        exc: Any unhandled exception

    Returns:
        JSONResponse with generic error message
    """
    correlation_id = getattr(request.state, "correlation_id", None)

    logger.error(
        f"Unhandled exception: {type(exc).__name__}: {str(exc)}",
        exc_info=exc,
        extra={
            "correlation_id": correlation_id,
            "context": {
                "exception_type": type(exc).__name__,
                "method": request.method,
                "path": request.url.path,
            },
        },
    )

    if isinstance(exc, (EndpointConnectionError, ConnectTimeoutError, ReadTimeoutError)):
        return create_error_response(
            error_code="SERVICE_UNAVAILABLE",
            message="Service temporarily unavailable. Please try again later.",
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            details={"retry_after": 60},
            correlation_id=correlation_id,
        )

    return create_error_response(
        error_code="INTERNAL_ERROR",
        message="An internal error occurred. Please contact support with the correlation ID.",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        details={},
        correlation_id=correlation_id,
    )
