"""FastAPI application entry point."""

from fastapi import FastAPI

from provider_gateway.config import settings
from provider_gateway.exceptions import GatewayError
from provider_gateway.handlers.exception_handler import (
    gateway_exception_handler,
    generic_exception_handler,
)
from provider_gateway.logging.config import configure_logging
from provider_gateway.middleware.logging import LoggingMiddleware
from provider_gateway.middleware.request_validation import RequestSizeValidationMiddleware
from provider_gateway.routes import gateway, status
from provider_gateway.routing import OPERATIONS

# Configure logging before creating the app
configure_logging()

app = FastAPI(
    title=settings.api_title,
    version=settings.api_version,
    description="""
## Rodolfo Provider API

REST access to providers stored in DynamoDB and to Cognito user pool
authentication. Every operation is a request template, one backend call
and a response template; there is no business logic in between.

### Authentication

`/provider` operations require a Cognito id token:

```
Authorization: Bearer YOUR_ID_TOKEN
```

Tokens are obtained from `POST /auth/login`. A first login with a temporary
password returns a `NEW_PASSWORD_REQUIRED` challenge that is answered with
`POST /auth/set-password`.

### Errors

Backend rejections are returned as status 400:

```
{"error": {"status": 400, "message": "..."}}
```
""",
    docs_url="/docs",
    redoc_url="/redoc",
)

# Register middleware (order matters: last added = outermost layer)
app.add_middleware(RequestSizeValidationMiddleware)
app.add_middleware(LoggingMiddleware)

# Register exception handlers
app.add_exception_handler(GatewayError, gateway_exception_handler)
app.add_exception_handler(Exception, generic_exception_handler)


@app.get("/", tags=["Root"])
async def root() -> dict[str, object]:
    """
    Root endpoint with API information.

    Returns:
        Dict with welcome message, docs link and the operation table
    """
    return {
        "message": f"Welcome to {settings.api_title}",
        "version": settings.api_version,
        "docs": "/docs",
        "health": "/status",
        "operations": [
            {"name": op.name, "method": op.method, "path": op.path}
            for op in OPERATIONS
        ],
    }


# The gateway router catches every path, so it goes last
app.include_router(status.router)
app.include_router(gateway.router)
