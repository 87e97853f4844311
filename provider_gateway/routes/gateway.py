"""Catch-all route handing every API request to the gateway service."""

import json
from typing import Any

from fastapi import APIRouter, Depends, Request, Response

from provider_gateway.exceptions import InvalidRequestBodyError
from provider_gateway.services.gateway_service import GatewayService, get_gateway_service

router = APIRouter(tags=["Gateway"])


async def read_json_body(request: Request) -> Any:
    """
    Parse the request body as JSON.

    Returns:
        The parsed body, or None for an empty body

    Raises:
        InvalidRequestBodyError: If the body is not valid JSON
    """
    raw = await request.body()
    if not raw.strip():
        return None
    try:
        return json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise InvalidRequestBodyError(details={"reason": str(exc)}) from exc


@router.api_route(
    "/{full_path:path}",
    methods=["GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS"],
    include_in_schema=False,
)
async def dispatch(
    full_path: str,
    request: Request,
    service: GatewayService = Depends(get_gateway_service),
) -> Response:
    """
    Serve a provider or auth operation.

    The operation is chosen by the router from method and path; the
    response body is the rendered response template, passed through as is.
    OPTIONS on a known path answers the CORS preflight.

    Raises:
        RouteNotFoundError: Unknown path (404)
        MethodNotAllowedError: Known path, other method (405)
        UnauthorizedError: Protected operation without bearer token (401)
        InvalidRequestBodyError: Body is not JSON (400)
    """
    path = f"/{full_path}"

    if request.method == "OPTIONS":
        shaped = service.preflight(path)
        return Response(status_code=shaped.status_code, headers=shaped.headers)

    descriptor, path_params = service.router.resolve(request.method, path)
    # Set before executing so failed requests are logged with their operation
    request.state.operation = descriptor.name

    shaped = await service.execute(
        descriptor,
        path_params,
        body=await read_json_body(request),
        authorization=request.headers.get("Authorization"),
        correlation_id=getattr(request.state, "correlation_id", None),
    )

    return Response(
        content=shaped.body,
        status_code=shaped.status_code,
        headers=shaped.headers,
        media_type="application/json",
    )
