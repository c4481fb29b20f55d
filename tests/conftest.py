"""Shared fixtures for Product Catalog tests."""

import pytest
from fastapi.testclient import TestClient

from product_catalog.catalog.models import Product
from product_catalog.catalog.repository import SqlProductStore
from product_catalog.catalog.service import CatalogService
from product_catalog.catalog.store import InMemoryProductStore, ProductStore
from product_catalog.infrastructure.config import Settings
from product_catalog.main import create_app


SAMPLE_PRODUCTS = [
    {
        "sku": f"sku-{i}",
        "title": f"title-{i}",
        "description": f"description-{i}",
        "qty": i * 10,
    }
    for i in range(1, 11)
]


@pytest.fixture
def sample_products() -> list[dict]:
    """Ten product payloads in insertion order."""
    return [dict(p) for p in SAMPLE_PRODUCTS]


@pytest.fixture
def product() -> Product:
    """A single sample product."""
    return Product(sku="sku-1", title="title-1", description="description-1", qty=10)


@pytest.fixture
def memory_store() -> InMemoryProductStore:
    """Create a fresh in-memory store."""
    return InMemoryProductStore()


@pytest.fixture
def sql_store():
    """Create a SQL store over in-memory SQLite."""
    store = SqlProductStore.from_url("sqlite://")
    yield store
    store.close()


@pytest.fixture(params=["memory", "sql"])
def store(request) -> ProductStore:
    """Run a test against every store implementation."""
    return request.getfixturevalue(f"{request.param}_store")


@pytest.fixture
def service(memory_store: InMemoryProductStore) -> CatalogService:
    """Create catalog service over a fresh in-memory store."""
    return CatalogService(memory_store)


@pytest.fixture
def test_settings() -> Settings:
    """Settings for tests (in-memory store, console logs)."""
    return Settings(database_url="", log_json=False, log_level="WARNING")


@pytest.fixture
def client(test_settings: Settings) -> TestClient:
    """Create test client for an app with its own empty store."""
    app = create_app(settings=test_settings, store=InMemoryProductStore())
    with TestClient(app) as client:
        yield client


@pytest.fixture
def seeded_client(client: TestClient, sample_products: list[dict]) -> TestClient:
    """Test client whose store holds the ten sample products."""
    for payload in sample_products:
        response = client.post("/products", json=payload)
        assert response.status_code == 201
    return client
