"""Mapping engine: context model, template nodes and evaluator."""

from provider_gateway.mapping.context import Context
from provider_gateway.mapping.evaluator import evaluate, evaluate_json
from provider_gateway.mapping.nodes import Template

__all__ = ["Context", "Template", "evaluate", "evaluate_json"]
