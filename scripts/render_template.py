#!/usr/bin/env python3
"""
CLI for offline template checks.

Lists the catalog and renders a template against a sample body, so a
template can be verified against a real backend payload before deploying.
"""

import argparse
import json
import sys
from typing import Any, Dict, List, Optional

from provider_gateway.catalog import Catalog, CatalogConfig, build_catalog
from provider_gateway.config import settings
from provider_gateway.exceptions import MalformedTemplateOutputError
from provider_gateway.mapping import Context, evaluate, evaluate_json
from provider_gateway.routing import OPERATIONS


def parse_params(pairs: Optional[List[str]]) -> Dict[str, str]:
    """
    Parse ``name=value`` path parameters.

    Args:
        pairs: Raw ``--param`` values

    Returns:
        Mapping of parameter name to value

    Raises:
        ValueError: If a pair has no ``=``
    """
    params: Dict[str, str] = {}
    for pair in pairs or []:
        name, sep, value = pair.partition("=")
        if not sep or not name:
            raise ValueError(f"Invalid parameter '{pair}', expected name=value")
        params[name] = value
    return params


def load_body(source: Optional[str]) -> Any:
    """Read a JSON body from a file path, ``-`` for stdin, or None."""
    if source is None:
        return None
    if source == "-":
        return json.load(sys.stdin)
    with open(source, encoding="utf-8") as handle:
        return json.load(handle)


def cmd_list(catalog: Catalog) -> None:
    """Print every operation with its templates, then any unbound template."""
    bound = set()
    for op in OPERATIONS:
        print(f"{op.name:<20} {op.method:<7} {op.path}")
        print(f"    request:  {op.request_template}")
        print(f"    response: {op.response_template}")
        print(f"    error:    {op.error_template}")
        bound.update((op.request_template, op.response_template, op.error_template))

    unbound = sorted(set(catalog) - bound)
    if unbound:
        print(f"\nUnbound templates: {', '.join(unbound)}")


def cmd_render(
    catalog: Catalog,
    name: str,
    body: Any,
    params: Dict[str, str],
    raw: bool = False,
) -> int:
    """
    Render one template and print the result.

    Args:
        catalog: Template catalog
        name: Template name
        body: Context body
        params: Path parameters
        raw: Print the rendered text without parsing it

    Returns:
        Process exit code (0 on success)
    """
    if name not in catalog:
        print(f"✗ Unknown template: {name}", file=sys.stderr)
        return 2

    template = catalog[name]
    context = Context(body=body, path_params=params)

    if raw:
        print(evaluate(template, context))
        return 0

    try:
        rendered = evaluate_json(template, context)
    except MalformedTemplateOutputError as exc:
        print(f"✗ {exc.message}: {exc.details['reason']}", file=sys.stderr)
        print(evaluate(template, context), file=sys.stderr)
        return 1

    print(json.dumps(rendered, indent=2))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Inspect and render Provider Gateway templates",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--table-name", default=settings.dynamodb_table_name, help="DynamoDB table"
    )
    parser.add_argument(
        "--user-pool-id", default=settings.cognito_user_pool_id, help="Cognito pool id"
    )
    parser.add_argument(
        "--client-id",
        default=settings.cognito_user_pool_client_id,
        help="Cognito user pool client id",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command")

    subparsers.add_parser("list", help="List operations and templates")

    render_parser = subparsers.add_parser("render", help="Render a template")
    render_parser.add_argument("template", type=str, help="Template name")
    render_parser.add_argument(
        "--body", type=str, help="JSON file with the context body ('-' for stdin)"
    )
    render_parser.add_argument(
        "--param",
        type=str,
        action="append",
        help="Path parameter as name=value (repeatable)",
    )
    render_parser.add_argument(
        "--raw", action="store_true", help="Print the rendered text as is"
    )

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    catalog = build_catalog(
        CatalogConfig(
            table_name=args.table_name,
            user_pool_id=args.user_pool_id,
            user_pool_client_id=args.client_id,
        )
    )

    if args.command == "list":
        cmd_list(catalog)
        return 0

    try:
        params = parse_params(args.param)
    except ValueError as exc:
        parser.error(str(exc))
    return cmd_render(catalog, args.template, load_body(args.body), params, args.raw)


if __name__ == "__main__":
    sys.exit(main())
