"""Template node types.

A template is an immutable tree built once at startup. Nodes carry data
only; rendering lives in :mod:`provider_gateway.mapping.evaluator`.

Text nodes emit their value verbatim. Everything that comes from the
context reaches the output either through ``Quote`` (JSON-escaped string
literal) or, for the rare unquoted value, through a bare ``Ref``.
"""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Text:
    """Literal output text."""

    value: str


@dataclass(frozen=True)
class Ref:
    """Raw text of the value at a dot path (``params.id``, ``item.name.S``)."""

    path: str


@dataclass(frozen=True)
class Rewrite:
    """Raw text of a path value after ordered substring replacements."""

    path: str
    replacements: tuple[tuple[str, str], ...]


@dataclass(frozen=True)
class Quote:
    """Concatenate the text of ``parts`` and emit it as one JSON string."""

    parts: tuple["Node", ...]


@dataclass(frozen=True)
class Equals:
    """True when the value at ``path`` equals ``literal``."""

    path: str
    literal: object


@dataclass(frozen=True)
class IsEmpty:
    """True when the value at ``path`` is undefined, null or has no entries."""

    path: str


@dataclass(frozen=True)
class Not:
    predicate: "Predicate"


@dataclass(frozen=True)
class If:
    """Render ``then`` when the predicate holds, ``otherwise`` if it does not."""

    predicate: "Predicate"
    then: tuple["Node", ...]
    otherwise: tuple["Node", ...] = ()


@dataclass(frozen=True)
class ForEach:
    """
    Render ``body`` once per element of the list at ``source``.

    Inside the body ``var`` is bound to the element and ``foreach`` to
    ``{"index": i, "count": n, "hasNext": bool}``. ``separator`` is emitted
    between elements, never after the last one.

    The catalog templates only need ``separator``. The ``foreach`` binding
    is for templates that render by position or treat the last element
    differently, e.g. ``If(Equals("foreach.hasNext", False), ...)``.
    """

    source: str
    var: str
    body: tuple["Node", ...]
    separator: str = ","


@dataclass(frozen=True)
class Let:
    """Bind ``name`` to the value at ``source`` while rendering ``body``."""

    name: str
    source: str
    body: tuple["Node", ...]


Predicate = Union[Equals, IsEmpty, Not]
Node = Union[Text, Ref, Rewrite, Quote, If, ForEach, Let]


@dataclass(frozen=True)
class Template:
    """A named, immutable root of a node tree."""

    name: str
    nodes: tuple[Node, ...]
