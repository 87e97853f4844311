"""Health check and status endpoints."""

import time

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from provider_gateway.config import settings
from provider_gateway.routing import OPERATIONS

# Module-level variable to track application start time
_app_start_time = time.time()

router = APIRouter(tags=["Health"])


@router.get("/status")
async def get_status() -> JSONResponse:
    """
    Health check endpoint for monitoring and load balancers.

    Returns basic API status without authentication and without touching
    any backend.

    Returns:
        JSONResponse with status, version, uptime_seconds and operations
    """
    uptime_seconds = int(time.time() - _app_start_time)

    return JSONResponse(
        status_code=200,
        content={
            "status": "ok",
            "version": settings.api_version,
            "uptime_seconds": uptime_seconds,
            "operations": len(OPERATIONS),
        },
    )
