"""Template evaluator.

``evaluate`` is a pure projection from (template, context) to text: it
never mutates the context, never raises on a failed dereference and gives
the same output for the same inputs.
"""

import json
from typing import Any

from provider_gateway.exceptions import MalformedTemplateOutputError
from provider_gateway.mapping.context import Context, Scope
from provider_gateway.mapping.json_path import is_empty, to_text
from provider_gateway.mapping.nodes import (
    Equals,
    ForEach,
    If,
    IsEmpty,
    Let,
    Node,
    Not,
    Predicate,
    Quote,
    Ref,
    Rewrite,
    Template,
    Text,
)


def evaluate(template: Template, context: Context) -> str:
    """
    Render a template against a context.

    Args:
        template: Template to render
        context: Request or backend-response data

    Returns:
        The rendered text (a JSON document for well-formed templates)
    """
    return _render_all(template.nodes, Scope.from_context(context))


def evaluate_json(template: Template, context: Context) -> Any:
    """
    Render a template and parse the result as JSON.

    Raises:
        MalformedTemplateOutputError: If the rendered text is not JSON
    """
    rendered = evaluate(template, context)
    try:
        return json.loads(rendered)
    except json.JSONDecodeError as exc:
        raise MalformedTemplateOutputError(
            template=template.name, reason=exc.msg
        ) from exc


def _render_all(nodes: tuple[Node, ...], scope: Scope) -> str:
    return "".join(_render(node, scope) for node in nodes)


def _render(node: Node, scope: Scope) -> str:
    if isinstance(node, Text):
        return node.value
    if isinstance(node, Ref):
        return to_text(scope.resolve(node.path))
    if isinstance(node, Rewrite):
        text = to_text(scope.resolve(node.path))
        for old, new in node.replacements:
            text = text.replace(old, new)
        return text
    if isinstance(node, Quote):
        return json.dumps(_render_all(node.parts, scope))
    if isinstance(node, If):
        branch = node.then if _test(node.predicate, scope) else node.otherwise
        return _render_all(branch, scope)
    if isinstance(node, ForEach):
        return _render_each(node, scope)
    if isinstance(node, Let):
        inner = scope.child(**{node.name: scope.resolve(node.source)})
        return _render_all(node.body, inner)
    raise TypeError(f"Unknown template node: {type(node).__name__}")


def _render_each(node: ForEach, scope: Scope) -> str:
    items = scope.resolve(node.source)
    if not isinstance(items, list):
        return ""

    count = len(items)
    chunks = []
    for index, item in enumerate(items):
        has_next = index < count - 1
        inner = scope.child(
            **{
                node.var: item,
                "foreach": {"index": index, "count": count, "hasNext": has_next},
            }
        )
        chunks.append(_render_all(node.body, inner))
        if has_next:
            chunks.append(node.separator)
    return "".join(chunks)


def _test(predicate: Predicate, scope: Scope) -> bool:
    if isinstance(predicate, Equals):
        return scope.resolve(predicate.path) == predicate.literal
    if isinstance(predicate, IsEmpty):
        return is_empty(scope.resolve(predicate.path))
    if isinstance(predicate, Not):
        return not _test(predicate.predicate, scope)
    raise TypeError(f"Unknown predicate: {type(predicate).__name__}")
