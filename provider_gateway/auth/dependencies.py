"""Bearer token presence check for protected operations.

Token validation itself happens upstream, in the API Gateway Cognito
authorizer; this layer only refuses requests that carry no token at all.
"""

from provider_gateway.exceptions import UnauthorizedError
from provider_gateway.models.operation import OperationDescriptor


def get_bearer_token(authorization: str | None) -> str:
    """
    Extract the token from an Authorization header.

    Args:
        authorization: Authorization header value

    Returns:
        Token extracted from the Bearer scheme

    Raises:
        UnauthorizedError: If header is missing or malformed
    """
    if not authorization:
        raise UnauthorizedError(
            message="Missing Authorization header",
            details={"hint": "Include 'Authorization: Bearer <id_token>'"},
        )

    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise UnauthorizedError(
            message="Invalid Authorization header format",
            details={"hint": "Use format 'Authorization: Bearer <id_token>'"},
        )

    return parts[1]


def ensure_authorized(
    descriptor: OperationDescriptor, authorization: str | None
) -> None:
    """Raise UnauthorizedError when a protected operation has no bearer token."""
    if descriptor.requires_auth:
        get_bearer_token(authorization)
