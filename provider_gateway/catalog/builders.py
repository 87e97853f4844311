"""Small helpers for assembling JSON-shaped node trees.

Static keys and configuration values are JSON-encoded once, here, when the
catalog is built. Request and backend data only ever enter the output
through ``Quote`` nodes.
"""

import json
from typing import Union

from provider_gateway.mapping.nodes import Node, Quote, Text

Nodes = tuple[Node, ...]
Part = Union[str, Node]


def literal(value: object) -> Nodes:
    """A static JSON value (string, number, bool, list, ...)."""
    return (Text(json.dumps(value, separators=(",", ":"))),)


def string(*parts: Part) -> Nodes:
    """A JSON string concatenated from literal text and nodes."""
    return (
        Quote(tuple(Text(part) if isinstance(part, str) else part for part in parts)),
    )


def member(key: str, value: Nodes) -> Nodes:
    """An object member ``"key": value``."""
    return (Text(json.dumps(key) + ":"), *value)


def fields(*members: Nodes) -> Nodes:
    """Object members joined by commas, without the braces."""
    nodes: list[Node] = []
    for index, entry in enumerate(members):
        if index:
            nodes.append(Text(","))
        nodes.extend(entry)
    return tuple(nodes)


def obj(*members: Nodes) -> Nodes:
    return (Text("{"), *fields(*members), Text("}"))


def array(*elements: Nodes) -> Nodes:
    return (Text("["), *fields(*elements), Text("]"))
