"""Templates and headers shared by every operation."""

from types import MappingProxyType

from provider_gateway.catalog.builders import literal, member, obj
from provider_gateway.mapping.nodes import If, IsEmpty, Not, Quote, Ref, Template, Text

EMPTY_OBJECT = "EmptyObject"
BACKEND_ERROR = "BackendError"

CORS_HEADERS = MappingProxyType(
    {
        "Access-Control-Allow-Headers": (
            "Content-Type,X-Amz-Date,Authorization,X-Api-Key,"
            "X-Amz-Security-Token,X-Amz-User-Agent"
        ),
        "Access-Control-Allow-Methods": "OPTIONS,GET,PUT,POST,DELETE,PATCH,HEAD",
        "Access-Control-Allow-Origin": "*",
    }
)


def empty_object() -> Template:
    """``{}`` regardless of the backend payload."""
    return Template(EMPTY_OBJECT, (Text("{}"),))


def backend_error() -> Template:
    """
    ``{"error": {"status": 400, "message": ...}}`` from an AWS error body.

    DynamoDB and Cognito report ``message``; a few AWS errors use
    ``Message`` instead, which is read when the former is absent.
    """
    message = (
        If(
            Not(IsEmpty("body.message")),
            then=(Quote((Ref("body.message"),)),),
            otherwise=(Quote((Ref("body.Message"),)),),
        ),
    )
    return Template(
        BACKEND_ERROR,
        obj(
            member(
                "error",
                obj(member("status", literal(400)), member("message", message)),
            )
        ),
    )
