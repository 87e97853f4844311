"""Transformation catalog: every request and response template, built once."""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from provider_gateway.catalog import auth_templates, provider_templates, standard
from provider_gateway.config import Settings
from provider_gateway.mapping.nodes import Template


@dataclass(frozen=True)
class CatalogConfig:
    """Backend identifiers baked into the request templates."""

    table_name: str
    user_pool_id: str
    user_pool_client_id: str

    @classmethod
    def from_settings(cls, settings: Settings) -> "CatalogConfig":
        return cls(
            table_name=settings.dynamodb_table_name,
            user_pool_id=settings.cognito_user_pool_id,
            user_pool_client_id=settings.cognito_user_pool_client_id,
        )


class Catalog(Mapping[str, Template]):
    """Read-only mapping of template name to template."""

    def __init__(self, templates: list[Template]) -> None:
        by_name: dict[str, Template] = {}
        for template in templates:
            if template.name in by_name:
                raise ValueError(f"Duplicate template name: {template.name}")
            by_name[template.name] = template
        self._templates = MappingProxyType(by_name)

    def __getitem__(self, name: str) -> Template:
        return self._templates[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._templates)

    def __len__(self) -> int:
        return len(self._templates)


def build_catalog(config: CatalogConfig) -> Catalog:
    """
    Build every template with the given backend identifiers.

    Args:
        config: Table name, user pool id and user pool client id

    Returns:
        Immutable catalog keyed by template name
    """
    return Catalog(
        [
            # Shared
            standard.empty_object(),
            standard.backend_error(),
            # Providers (DynamoDB)
            provider_templates.list_providers_request(config.table_name),
            provider_templates.list_providers_response(),
            provider_templates.create_provider_request(config.table_name),
            provider_templates.provider_key_request(config.table_name),
            provider_templates.fetch_provider_response(),
            provider_templates.update_provider_request(config.table_name),
            # Auth (Cognito)
            auth_templates.signup_user_request(config.user_pool_id),
            auth_templates.set_password_request(config.user_pool_client_id),
            auth_templates.token_response(),
            auth_templates.login_request(config.user_pool_client_id),
            auth_templates.login_response(),
            auth_templates.refresh_access_token_request(config.user_pool_client_id),
            auth_templates.refresh_access_token_response(),
            auth_templates.fetch_user_request(),
            auth_templates.fetch_user_response(),
            auth_templates.change_password_request(),
        ]
    )


__all__ = ["Catalog", "CatalogConfig", "build_catalog"]
