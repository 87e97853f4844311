"""Custom exception classes for the Provider Gateway."""

from typing import Any


class GatewayError(Exception):
    """Base exception for the gateway."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: str = "INTERNAL_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize exception.

        Args:
            message: Human-readable error message
            status_code: HTTP status code
            error_code: Machine-readable error code
            details: Additional error details
        """
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details or {}


class UnauthorizedError(GatewayError):
    """Raised when a protected operation has no bearer token (401)."""

    def __init__(
        self,
        message: str = "Unauthorized",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=401,
            error_code="UNAUTHORIZED",
            details=details,
        )


class InvalidRequestBodyError(GatewayError):
    """Raised when the request body is not valid JSON (400)."""

    def __init__(
        self,
        message: str = "Request body must be valid JSON",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=400,
            error_code="INVALID_BODY",
            details=details,
        )


class RouteNotFoundError(GatewayError):
    """Raised when no operation is registered for a path (404)."""

    def __init__(
        self,
        method: str,
        path: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize RouteNotFoundError.

        Args:
            method: HTTP method of the request
            path: Request path that matched no operation
            details: Additional error details
        """
        error_details = details or {}
        error_details.update({"method": method, "path": path})
        super().__init__(
            message=f"No operation registered for {method} {path}",
            status_code=404,
            error_code="NOT_FOUND",
            details=error_details,
        )


class MethodNotAllowedError(GatewayError):
    """Raised when a path exists but not for the requested method (405)."""

    def __init__(
        self,
        method: str,
        path: str,
        allowed: list[str],
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize MethodNotAllowedError.

        Args:
            method: HTTP method of the request
            path: Request path
            allowed: Methods registered for this path
            details: Additional error details
        """
        error_details = details or {}
        error_details.update({"method": method, "path": path, "allowed": allowed})
        super().__init__(
            message=f"Method {method} not allowed for {path}",
            status_code=405,
            error_code="METHOD_NOT_ALLOWED",
            details=error_details,
        )
        self.allowed = allowed


class RequestTooLargeError(GatewayError):
    """Raised when request payload exceeds size limit (413)."""

    def __init__(
        self,
        message: str = "Request payload too large",
        max_size: str = "512KB",
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize RequestTooLargeError.

        Args:
            message: Error message
            max_size: Maximum allowed size
            details: Additional error details
        """
        error_details = details or {}
        error_details["max_size"] = max_size
        super().__init__(
            message=message,
            status_code=413,
            error_code="PAYLOAD_TOO_LARGE",
            details=error_details,
        )


class UnrecognizedBackendSignalError(GatewayError):
    """Raised when a backend status is neither success nor a known error (502)."""

    def __init__(
        self,
        operation: str,
        backend_status: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize UnrecognizedBackendSignalError.

        Args:
            operation: Name of the operation being shaped
            backend_status: The status reported by the backend
            details: Additional error details
        """
        error_details = details or {}
        error_details.update(
            {"operation": operation, "backend_status": backend_status}
        )
        super().__init__(
            message="Unexpected response from backend service",
            status_code=502,
            error_code="BAD_GATEWAY",
            details=error_details,
        )


class MalformedTemplateOutputError(GatewayError):
    """Raised when a rendered template is not valid JSON (500).

    This is a configuration defect: a template and the backend schema it
    reads from have drifted apart.
    """

    def __init__(
        self,
        template: str,
        reason: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        error_details = details or {}
        error_details.update({"template": template, "reason": reason})
        super().__init__(
            message=f"Template {template} rendered invalid JSON",
            status_code=500,
            error_code="TEMPLATE_ERROR",
            details=error_details,
        )
