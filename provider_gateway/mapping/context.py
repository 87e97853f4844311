"""Evaluation context and variable scope."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from provider_gateway.mapping.json_path import JSONValue, lookup, split_path

BODY_ROOT = "body"
PARAMS_ROOT = "params"


@dataclass(frozen=True)
class Context:
    """
    Data available to one template evaluation.

    Attributes:
        body: Parsed request body (request side) or backend payload
            (response side); any JSON value, None when absent
        path_params: Path parameters captured by the matched route
    """

    body: JSONValue = None
    path_params: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Freeze the params so templates cannot observe later changes
        object.__setattr__(
            self, "path_params", MappingProxyType(dict(self.path_params))
        )


class Scope:
    """
    Name bindings visible while a template renders.

    The root scope exposes ``body`` and ``params``. ``ForEach`` and ``Let``
    create child scopes with extra bindings; the parent is never modified.
    """

    def __init__(
        self, bindings: Mapping[str, Any], parent: "Scope | None" = None
    ) -> None:
        self._bindings = dict(bindings)
        self._parent = parent

    @classmethod
    def from_context(cls, context: Context) -> "Scope":
        return cls(
            {BODY_ROOT: context.body, PARAMS_ROOT: dict(context.path_params)}
        )

    def child(self, **bindings: Any) -> "Scope":
        return Scope(bindings, parent=self)

    def _get(self, name: str) -> tuple[bool, Any]:
        scope: Scope | None = self
        while scope is not None:
            if name in scope._bindings:
                return True, scope._bindings[name]
            scope = scope._parent
        return False, None

    def resolve(self, path: str) -> JSONValue:
        """
        Dereference a dot path such as ``item.contact.M.email.S``.

        Unknown root names and unresolvable segments yield None.
        """
        segments = split_path(path)
        if not segments:
            return None
        found, root = self._get(segments[0])
        if not found:
            return None
        return lookup(root, segments[1:])
