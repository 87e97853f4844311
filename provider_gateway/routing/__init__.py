"""Operation routing."""

from provider_gateway.routing.operations import OPERATIONS
from provider_gateway.routing.router import OperationRouter

__all__ = ["OPERATIONS", "OperationRouter"]
