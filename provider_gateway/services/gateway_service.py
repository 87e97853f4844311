"""Gateway service: route, render, call the backend, shape the response."""

from functools import lru_cache
from typing import Any

from provider_gateway.auth.dependencies import ensure_authorized
from provider_gateway.catalog import Catalog, CatalogConfig, build_catalog
from provider_gateway.config import settings
from provider_gateway.logging.config import get_logger, mask_sensitive
from provider_gateway.mapping import Context, evaluate_json
from provider_gateway.models.operation import OperationDescriptor, ShapedResponse
from provider_gateway.routing import OPERATIONS, OperationRouter
from provider_gateway.services.backend_client import BackendClient
from provider_gateway.services.response_shaper import ResponseShaper

logger = get_logger(__name__)


class GatewayService:
    """
    Orchestrates one inbound request.

    inbound request → context → request template → backend call →
    error pattern check → response template → shaped JSON and headers.
    """

    def __init__(
        self,
        catalog: Catalog | None = None,
        router: OperationRouter | None = None,
        backend: BackendClient | None = None,
        shaper: ResponseShaper | None = None,
    ) -> None:
        """
        Initialize GatewayService.

        Args:
            catalog: Template catalog (built from settings if None)
            router: Operation router (default operation table if None)
            backend: BackendClient instance (creates new if None)
            shaper: ResponseShaper instance (built from settings if None)
        """
        self.catalog = catalog or build_catalog(CatalogConfig.from_settings(settings))
        self.router = router or OperationRouter(OPERATIONS, template_names=self.catalog)
        self.backend = backend or BackendClient()
        self.shaper = shaper or ResponseShaper(
            self.catalog,
            error_pattern=settings.error_selection_pattern,
            strict=settings.strict_backend_signals,
        )

    def render_request(
        self, descriptor: OperationDescriptor, body: Any, path_params: dict[str, str]
    ) -> dict[str, Any]:
        """
        Render the backend request for an operation.

        Returns:
            Parsed backend request parameters
        """
        template = self.catalog[descriptor.request_template]
        return evaluate_json(template, Context(body=body, path_params=path_params))

    def preflight(self, path: str) -> ShapedResponse:
        """
        Answer a CORS preflight for a known path.

        Raises:
            RouteNotFoundError: If no operation matches the path (404)
        """
        self.router.allowed_methods(path)
        return ShapedResponse(status_code=200, body="", headers=self.shaper.headers)

    async def handle(
        self,
        method: str,
        path: str,
        body: Any = None,
        authorization: str | None = None,
        correlation_id: str | None = None,
    ) -> tuple[OperationDescriptor, ShapedResponse]:
        """
        Serve one request end to end.

        Args:
            method: HTTP method
            path: Request path relative to the API base path
            body: Parsed JSON request body, None when empty
            authorization: Raw Authorization header
            correlation_id: Request correlation ID for logging

        Returns:
            Tuple of (matched operation, shaped response)

        Raises:
            RouteNotFoundError: If no operation matches the path (404)
            MethodNotAllowedError: If the path exists for other methods (405)
            UnauthorizedError: If a protected operation lacks a bearer token (401)
            UnrecognizedBackendSignalError: On an unknown backend status (502)
        """
        descriptor, path_params = self.router.resolve(method, path)
        return descriptor, await self.execute(
            descriptor, path_params, body, authorization, correlation_id
        )

    async def execute(
        self,
        descriptor: OperationDescriptor,
        path_params: dict[str, str],
        body: Any = None,
        authorization: str | None = None,
        correlation_id: str | None = None,
    ) -> ShapedResponse:
        """
        Run an already routed operation: auth check, request template,
        backend call and response shaping.

        Raises:
            UnauthorizedError: If a protected operation lacks a bearer token (401)
            MalformedTemplateOutputError: If the request template renders invalid JSON
            UnrecognizedBackendSignalError: On an unknown backend status (502)
        """
        if settings.require_bearer_token:
            ensure_authorized(descriptor, authorization)

        payload = self.render_request(descriptor, body, path_params)

        logger.info(
            "Calling backend",
            extra={
                "correlation_id": correlation_id,
                "operation": descriptor.name,
                "context": {
                    "service": descriptor.service,
                    "action": descriptor.action,
                    "path_params": path_params,
                },
            },
        )
        logger.debug(
            "Rendered backend request",
            extra={
                "correlation_id": correlation_id,
                "operation": descriptor.name,
                "context": {"payload": mask_sensitive(payload)},
            },
        )

        result = await self.backend.invoke(
            descriptor.service, descriptor.action, payload
        )

        logger.info(
            "Backend responded",
            extra={
                "correlation_id": correlation_id,
                "operation": descriptor.name,
                "context": {"backend_status": result.status_code},
            },
        )

        return self.shaper.shape(descriptor, result.status_code, result.body)


@lru_cache(maxsize=1)
def get_gateway_service() -> GatewayService:
    """Process-wide service; the catalog and router are built once."""
    return GatewayService()
