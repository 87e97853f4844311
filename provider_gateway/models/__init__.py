"""Data models for the Provider Gateway."""

from provider_gateway.models.operation import (
    BackendResult,
    OperationDescriptor,
    ShapedResponse,
)

__all__ = ["BackendResult", "OperationDescriptor", "ShapedResponse"]
