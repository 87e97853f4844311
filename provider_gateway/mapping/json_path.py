"""Safe dot-path lookup over JSON values."""

import json
from typing import Any, Union

JSONValue = Union[dict[str, Any], list[Any], str, int, float, bool, None]


def split_path(path: str) -> tuple[str, ...]:
    """
    Split a dot path into its segments.

    Empty segments (``a..b``, leading or trailing dots) are dropped.

    Args:
        path: Dot-separated path such as ``body.contact.email``

    Returns:
        Tuple of path segments
    """
    return tuple(segment for segment in path.split(".") if segment)


def lookup(value: JSONValue, segments: tuple[str, ...]) -> JSONValue:
    """
    Walk ``segments`` through ``value``.

    Each segment is an object key, or a decimal index when the current value
    is a list. Anything that cannot be resolved (missing key, index out of
    range, stepping into a scalar) yields ``None`` instead of raising.

    Args:
        value: Root JSON value
        segments: Path segments to follow

    Returns:
        The resolved value, or None when the path does not resolve
    """
    current = value
    for segment in segments:
        if isinstance(current, dict):
            if segment not in current:
                return None
            current = current[segment]
        elif isinstance(current, list):
            if not segment.isdigit():
                return None
            index = int(segment)
            if index >= len(current):
                return None
            current = current[index]
        else:
            return None
    return current


def is_empty(value: JSONValue) -> bool:
    """Return True for undefined/null values and for empty objects, arrays and strings."""
    if value is None:
        return True
    if isinstance(value, (dict, list, str)):
        return len(value) == 0
    return False


def to_text(value: JSONValue) -> str:
    """
    Render a JSON value as template text.

    Undefined renders as the empty string, strings render verbatim,
    booleans as ``true``/``false`` and containers as compact JSON.
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return json.dumps(value)
    return json.dumps(value, separators=(",", ":"), default=str)
