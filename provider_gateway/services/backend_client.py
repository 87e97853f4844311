"""aioboto3 boundary: one DynamoDB or Cognito call per operation."""

import json
from typing import Any

import aioboto3
from botocore import xform_name
from botocore.exceptions import ClientError, ParamValidationError

from provider_gateway.config import settings
from provider_gateway.logging.config import get_logger
from provider_gateway.models.operation import BackendResult

logger = get_logger(__name__)


def get_client_config(service: str) -> dict[str, Any]:
    """
    Build client configuration for a backend service.

    For AWS Lambda with IAM roles, returns minimal config (region only).
    For LocalStack, includes endpoint_url and explicit credentials.

    Args:
        service: ``dynamodb`` or ``cognito-idp``

    Returns:
        Dictionary of client parameters
    """
    config: dict[str, Any] = {"region_name": settings.aws_region}

    endpoint_url = {
        "dynamodb": settings.dynamodb_endpoint_url,
        "cognito-idp": settings.cognito_endpoint_url,
    }.get(service)
    if endpoint_url:
        config["endpoint_url"] = endpoint_url

    # In Lambda the temporary credentials come as a key/secret/token triple
    if settings.aws_access_key_id:
        config["aws_access_key_id"] = settings.aws_access_key_id
    if settings.aws_secret_access_key:
        config["aws_secret_access_key"] = settings.aws_secret_access_key
    if settings.aws_session_token:
        config["aws_session_token"] = settings.aws_session_token

    logger.debug(
        "Backend client config",
        extra={"context": {"service": service, "config_keys": list(config)}},
    )
    return config


def _to_json(response: dict[str, Any]) -> Any:
    """Drop botocore metadata and turn datetimes into strings."""
    payload = {k: v for k, v in response.items() if k != "ResponseMetadata"}
    return json.loads(json.dumps(payload, default=str))


class BackendClient:
    """
    Execute a backend action with a rendered request payload.

    Rejections never raise: a ``ClientError`` becomes a result carrying
    the status AWS reported and ``{"__type": code, "message": message}``,
    the same body the services return on the wire.
    """

    def __init__(self, session: aioboto3.Session | None = None) -> None:
        self.session = session or aioboto3.Session()

    async def invoke(
        self, service: str, action: str, payload: dict[str, Any]
    ) -> BackendResult:
        """
        Call ``action`` on ``service``.

        Args:
            service: ``dynamodb`` or ``cognito-idp``
            action: API action name, e.g. ``GetItem`` or ``InitiateAuth``
            payload: Request parameters rendered by the request template

        Returns:
            BackendResult with status and JSON body
        """
        method_name = xform_name(action)
        async with self.session.client(service, **get_client_config(service)) as client:
            method = getattr(client, method_name)
            try:
                response = await method(**payload)
            except ClientError as exc:
                error = exc.response.get("Error", {})
                status = exc.response.get("ResponseMetadata", {}).get(
                    "HTTPStatusCode", 400
                )
                return BackendResult(
                    status_code=status,
                    body={
                        "__type": error.get("Code", "UnknownError"),
                        "message": error.get("Message", str(exc)),
                    },
                )
            except ParamValidationError as exc:
                # The service would answer the same request with a 400 ValidationException
                return BackendResult(
                    status_code=400,
                    body={"__type": "ValidationException", "message": str(exc)},
                )

        status = response.get("ResponseMetadata", {}).get("HTTPStatusCode", 200)
        return BackendResult(status_code=status, body=_to_json(response))
