"""Templates for the provider resource stored in DynamoDB.

Providers live in a single-entity table: ``pk`` and ``sk`` are both
``PROVIDER#<id>`` and every attribute uses the typed wire shape
(``{"S": ...}`` for strings, ``{"M": ...}`` for the contact map).
"""

from provider_gateway.catalog.builders import Nodes, fields, literal, member, obj, string
from provider_gateway.mapping.nodes import (
    ForEach,
    If,
    IsEmpty,
    Let,
    Not,
    Ref,
    Template,
    Text,
)

PROVIDER_KEY_PREFIX = "PROVIDER#"

LIST_PROVIDERS_REQUEST = "ListProvidersRequest"
LIST_PROVIDERS_RESPONSE = "ListProvidersResponse"
CREATE_PROVIDER_REQUEST = "CreateProviderRequest"
PROVIDER_KEY_REQUEST = "ProviderKeyRequest"
FETCH_PROVIDER_RESPONSE = "FetchProviderResponse"
UPDATE_PROVIDER_REQUEST = "UpdateProviderRequest"


def _typed_string(path: str) -> Nodes:
    return obj(member("S", string(Ref(path))))


def _composite_key(id_path: str) -> Nodes:
    key = obj(member("S", string(PROVIDER_KEY_PREFIX, Ref(id_path))))
    return fields(member("pk", key), member("sk", key))


def _provider_item(id_path: str) -> Nodes:
    contact = obj(
        member(
            "M",
            obj(
                member("name", _typed_string("body.contact.name")),
                member("email", _typed_string("body.contact.email")),
            ),
        )
    )
    return (
        Text("{"),
        *_composite_key(id_path),
        Text(","),
        *fields(
            member("id", _typed_string(id_path)),
            member("name", _typed_string("body.name")),
            member("contact", contact),
        ),
        Text("}"),
    )


def provider_fields(var: str) -> Nodes:
    """Client-facing provider members projected from a typed item bound to ``var``."""
    return fields(
        member("id", string(Ref(f"{var}.id.S"))),
        member("name", string(Ref(f"{var}.name.S"))),
        member(
            "contact",
            obj(
                member("name", string(Ref(f"{var}.contact.M.name.S"))),
                member("email", string(Ref(f"{var}.contact.M.email.S"))),
            ),
        ),
    )


def list_providers_request(table_name: str) -> Template:
    return Template(
        LIST_PROVIDERS_REQUEST, obj(member("TableName", literal(table_name)))
    )


def list_providers_response() -> Template:
    return Template(
        LIST_PROVIDERS_RESPONSE,
        (
            Text("["),
            ForEach(
                source="body.Items",
                var="item",
                body=(Text("{"), *provider_fields("item"), Text("}")),
            ),
            Text("]"),
        ),
    )


def create_provider_request(table_name: str) -> Template:
    return Template(
        CREATE_PROVIDER_REQUEST,
        obj(
            member("TableName", literal(table_name)),
            member("Item", _provider_item("body.id")),
        ),
    )


def provider_key_request(table_name: str) -> Template:
    """GetItem / DeleteItem request keyed by the ``id`` path parameter."""
    return Template(
        PROVIDER_KEY_REQUEST,
        obj(
            member("TableName", literal(table_name)),
            member("Key", (Text("{"), *_composite_key("params.id"), Text("}"))),
        ),
    )


def fetch_provider_response() -> Template:
    return Template(
        FETCH_PROVIDER_RESPONSE,
        (
            Let(
                name="item",
                source="body.Item",
                body=(
                    Text("{"),
                    If(Not(IsEmpty("item")), then=provider_fields("item")),
                    Text("}"),
                ),
            ),
        ),
    )


def update_provider_request(table_name: str) -> Template:
    return Template(
        UPDATE_PROVIDER_REQUEST,
        obj(
            member("TableName", literal(table_name)),
            member("Item", _provider_item("params.id")),
        ),
    )
