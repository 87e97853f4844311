"""Backend result → client response."""

import re
from collections.abc import Mapping

from provider_gateway.catalog import Catalog
from provider_gateway.catalog.standard import CORS_HEADERS
from provider_gateway.exceptions import UnrecognizedBackendSignalError
from provider_gateway.logging.config import get_logger
from provider_gateway.mapping import Context, evaluate
from provider_gateway.mapping.json_path import JSONValue
from provider_gateway.models.operation import OperationDescriptor, ShapedResponse

logger = get_logger(__name__)


class ResponseShaper:
    """
    Apply the success or error response template to a backend payload.

    A backend status matching ``error_pattern`` selects the operation's
    error template and client status 400. A 2xx status selects the success
    template and client status 200. Anything else is rejected when
    ``strict`` is on, and treated as success otherwise.
    """

    def __init__(
        self,
        catalog: Catalog,
        error_pattern: str = "400",
        strict: bool = True,
        headers: Mapping[str, str] = CORS_HEADERS,
    ) -> None:
        self.catalog = catalog
        self.error_pattern = re.compile(error_pattern)
        self.strict = strict
        self.headers = dict(headers)

    def is_error(self, backend_status: int | str) -> bool:
        return self.error_pattern.search(str(backend_status)) is not None

    @staticmethod
    def is_success(backend_status: int | str) -> bool:
        text = str(backend_status)
        return text.isdigit() and 200 <= int(text) < 300

    def shape(
        self,
        descriptor: OperationDescriptor,
        backend_status: int | str,
        backend_body: JSONValue,
    ) -> ShapedResponse:
        """
        Build the client response for one backend result.

        Args:
            descriptor: Operation that produced the backend call
            backend_status: Status reported by the backend
            backend_body: Backend JSON payload

        Returns:
            ShapedResponse with status, rendered body and CORS headers

        Raises:
            UnrecognizedBackendSignalError: In strict mode, when the status
                is neither an error match nor 2xx
        """
        context = Context(body=backend_body)

        if self.is_error(backend_status):
            logger.info(
                "Backend rejected request",
                extra={
                    "operation": descriptor.name,
                    "context": {"backend_status": str(backend_status)},
                },
            )
            template = self.catalog[descriptor.error_template]
            return ShapedResponse(
                status_code=400,
                body=evaluate(template, context),
                headers=self.headers,
            )

        if not self.is_success(backend_status):
            if self.strict:
                raise UnrecognizedBackendSignalError(
                    operation=descriptor.name, backend_status=str(backend_status)
                )
            logger.warning(
                "Unrecognized backend status treated as success",
                extra={
                    "operation": descriptor.name,
                    "context": {"backend_status": str(backend_status)},
                },
            )

        template = self.catalog[descriptor.response_template]
        return ShapedResponse(
            status_code=200,
            body=evaluate(template, context),
            headers=self.headers,
        )
