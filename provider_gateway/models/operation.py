"""Operation descriptor and the values passed between gateway stages."""

from typing import Any, Dict, Literal

from pydantic import BaseModel, ConfigDict, Field

BackendService = Literal["dynamodb", "cognito-idp"]


class OperationDescriptor(BaseModel):
    """
    Static binding of one HTTP operation to its templates and backend call.

    Attributes:
        name: Operation name (e.g. ListProviders)
        method: HTTP method, upper case
        path: Path pattern, ``{name}`` placeholders capture one segment
        service: Backend service the action belongs to
        action: Backend API action (e.g. Scan, InitiateAuth)
        request_template: Catalog name of the request template
        response_template: Catalog name of the success response template
        error_template: Catalog name of the error response template
        requires_auth: Whether a bearer token must accompany the request
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Operation name")
    method: str = Field(..., description="HTTP method")
    path: str = Field(..., description="Resource path pattern")
    service: BackendService = Field(..., description="Backend service")
    action: str = Field(..., description="Backend API action")
    request_template: str = Field(..., description="Request template name")
    response_template: str = Field(..., description="Success template name")
    error_template: str = Field(..., description="Error template name")
    requires_auth: bool = Field(default=False, description="Bearer token required")


class BackendResult(BaseModel):
    """
    Outcome of one backend call.

    Attributes:
        status_code: HTTP status reported by the AWS service
        body: JSON payload, or the ``{"__type", "message"}`` error shape
    """

    model_config = ConfigDict(frozen=True)

    status_code: int = Field(..., description="Backend HTTP status")
    body: Any = Field(default=None, description="Backend JSON payload")


class ShapedResponse(BaseModel):
    """Client-facing status, JSON text and headers."""

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "status_code": 400,
                "body": '{"error":{"status":400,"message":"Requested resource not found"}}',
                "headers": {"Access-Control-Allow-Origin": "*"},
            }
        },
    )

    status_code: int = Field(..., description="Client HTTP status")
    body: str = Field(..., description="Rendered JSON body")
    headers: Dict[str, str] = Field(default_factory=dict)

