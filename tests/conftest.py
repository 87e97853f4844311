"""Shared fixtures: catalog, fake backend and HTTP client."""

from typing import Any, AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from provider_gateway.catalog import Catalog, CatalogConfig, build_catalog
from provider_gateway.main import app
from provider_gateway.models.operation import BackendResult
from provider_gateway.services.gateway_service import GatewayService, get_gateway_service

TEST_TABLE = "test-table"
TEST_POOL_ID = "eu-central-1_TESTPOOL"
TEST_CLIENT_ID = "test-client-id"


class FakeBackend:
    """
    Stand-in for BackendClient.

    Returns queued results in order (or a default) and records every call
    as (service, action, payload).
    """

    def __init__(self, default: BackendResult | None = None) -> None:
        self.calls: list[tuple[str, str, dict[str, Any]]] = []
        self.results: list[BackendResult] = []
        self.default = default or BackendResult(status_code=200, body={})

    def respond(self, status_code: int, body: Any) -> None:
        self.results.append(BackendResult(status_code=status_code, body=body))

    async def invoke(
        self, service: str, action: str, payload: dict[str, Any]
    ) -> BackendResult:
        self.calls.append((service, action, payload))
        if self.results:
            return self.results.pop(0)
        return self.default


@pytest.fixture
def catalog_config() -> CatalogConfig:
    return CatalogConfig(
        table_name=TEST_TABLE,
        user_pool_id=TEST_POOL_ID,
        user_pool_client_id=TEST_CLIENT_ID,
    )


@pytest.fixture
def catalog(catalog_config: CatalogConfig) -> Catalog:
    return build_catalog(catalog_config)


@pytest.fixture
def fake_backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def gateway_service(catalog: Catalog, fake_backend: FakeBackend) -> GatewayService:
    return GatewayService(catalog=catalog, backend=fake_backend)


@pytest.fixture
async def api_client(
    gateway_service: GatewayService,
) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client whose gateway service talks to the fake backend."""
    app.dependency_overrides[get_gateway_service] = lambda: gateway_service
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://test"
        ) as client:
            yield client
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"Authorization": "Bearer test-id-token"}
