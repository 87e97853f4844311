"""Static (method, path) → operation lookup."""

from collections.abc import Iterable, Mapping
from types import MappingProxyType

from provider_gateway.exceptions import MethodNotAllowedError, RouteNotFoundError
from provider_gateway.models.operation import OperationDescriptor


def _segments(path: str) -> tuple[str, ...]:
    return tuple(segment for segment in path.strip("/").split("/") if segment)


def _is_placeholder(segment: str) -> bool:
    return segment.startswith("{") and segment.endswith("}") and len(segment) > 2


class OperationRouter:
    """
    Resolve an inbound request to exactly one operation descriptor.

    The table is fixed at construction: duplicate (method, path) pairs are
    rejected and no operation can be added afterwards. Literal segments win
    over placeholders when two patterns could both match a path.
    """

    def __init__(
        self,
        operations: Iterable[OperationDescriptor],
        template_names: Iterable[str] | None = None,
    ) -> None:
        """
        Build the routing table.

        Args:
            operations: Operation descriptors to register
            template_names: When given, every template a descriptor names
                must be among them

        Raises:
            ValueError: On a duplicate route or an unknown template name
        """
        known_templates = set(template_names) if template_names is not None else None
        table: dict[tuple[str, ...], dict[str, OperationDescriptor]] = {}

        for operation in operations:
            if known_templates is not None:
                for name in (
                    operation.request_template,
                    operation.response_template,
                    operation.error_template,
                ):
                    if name not in known_templates:
                        raise ValueError(
                            f"Operation {operation.name} references unknown template {name}"
                        )

            by_method = table.setdefault(_segments(operation.path), {})
            method = operation.method.upper()
            if method in by_method:
                raise ValueError(f"Duplicate route: {method} {operation.path}")
            by_method[method] = operation

        # Most literal patterns first so /provider/{id} never shadows a literal route
        ordered = sorted(
            table.items(),
            key=lambda entry: sum(1 for s in entry[0] if _is_placeholder(s)),
        )
        self._routes: tuple[tuple[tuple[str, ...], Mapping[str, OperationDescriptor]], ...] = tuple(
            (pattern, MappingProxyType(methods)) for pattern, methods in ordered
        )

    @property
    def operations(self) -> list[OperationDescriptor]:
        return [op for _, methods in self._routes for op in methods.values()]

    def resolve(
        self, method: str, path: str
    ) -> tuple[OperationDescriptor, dict[str, str]]:
        """
        Find the operation for a request and capture its path parameters.

        Args:
            method: HTTP method (any case)
            path: Request path, with or without a trailing slash

        Returns:
            Tuple of (descriptor, path parameters)

        Raises:
            RouteNotFoundError: If no pattern matches the path
            MethodNotAllowedError: If the path matches but not the method
        """
        methods, params = self._find(method, path)
        operation = methods.get(method.upper())
        if operation is None:
            raise MethodNotAllowedError(
                method=method.upper(), path=path, allowed=sorted(methods)
            )
        return operation, params

    def route(self, method: str, path: str) -> OperationDescriptor:
        """Return the descriptor for (method, path)."""
        operation, _ = self.resolve(method, path)
        return operation

    def allowed_methods(self, path: str) -> list[str]:
        """
        Methods registered for a path.

        Raises:
            RouteNotFoundError: If no pattern matches the path
        """
        methods, _ = self._find("OPTIONS", path)
        return sorted(methods)

    def _find(
        self, method: str, path: str
    ) -> tuple[Mapping[str, OperationDescriptor], dict[str, str]]:
        requested = _segments(path)
        for pattern, methods in self._routes:
            params = _match(pattern, requested)
            if params is not None:
                return methods, params
        raise RouteNotFoundError(method=method.upper(), path=path)


def _match(pattern: tuple[str, ...], requested: tuple[str, ...]) -> dict[str, str] | None:
    if len(pattern) != len(requested):
        return None
    params: dict[str, str] = {}
    for expected, actual in zip(pattern, requested):
        if _is_placeholder(expected):
            params[expected[1:-1]] = actual
        elif expected != actual:
            return None
    return params
