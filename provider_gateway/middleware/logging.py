"""Request logging middleware with correlation ID support."""

import time
import uuid
from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from provider_gateway.logging.config import get_logger

logger = get_logger(__name__)

CORRELATION_HEADER = "X-Request-ID"


def _request_context(request: Request, **extra: object) -> dict[str, object]:
    context: dict[str, object] = {
        "method": request.method,
        "path": request.url.path,
        # Set by the gateway route once the request is routed
        "operation": getattr(request.state, "operation", None),
    }
    context.update(extra)
    return context


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware to log all HTTP requests and responses.

    Features:
    - Propagates X-Request-ID, or generates one, and echoes it back
    - Logs request start, completion (status, latency) and failures
    - Includes the routed operation name once known
    - Never logs headers or bodies, so tokens and passwords stay out of logs
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """
        Process the request and add logging.

        Args:
            request: The incoming request
            call_next: The next middleware/handler in the chain

        Returns:
            The response from the handler
        """
        correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())
        request.state.correlation_id = correlation_id

        logger.info(
            "Request started",
            extra={
                "correlation_id": correlation_id,
                "context": _request_context(
                    request,
                    client_host=request.client.host if request.client else None,
                ),
            },
        )

        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                "Request failed with exception",
                exc_info=exc,
                extra={
                    "correlation_id": correlation_id,
                    "context": _request_context(
                        request,
                        response_time_ms=round((time.perf_counter() - start_time) * 1000, 2),
                    ),
                },
            )
            raise

        logger.info(
            "Request completed",
            extra={
                "correlation_id": correlation_id,
                "context": _request_context(
                    request,
                    status_code=response.status_code,
                    response_time_ms=round((time.perf_counter() - start_time) * 1000, 2),
                ),
            },
        )

        response.headers[CORRELATION_HEADER] = correlation_id
        return response
