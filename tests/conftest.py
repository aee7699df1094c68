"""
Pytest configuration and fixtures for the storefront API tests
"""

import os

# Settings are read at import time by app.database / app.main
os.environ.setdefault("STRIPE_SECRET_KEY", "sk_test_dummy")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("CATALOG_WARM_ON_STARTUP", "false")

from typing import Any, Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from app.database import get_session
from app.main import app
from app.models import cart as _cart_models  # noqa: F401
from app.services.catalog_cache import CatalogCache, get_catalog_cache
from app.services.catalog_service import fetch_catalog


class FakeProvider:
    """In-memory stand-in for StripeCatalogProvider"""

    def __init__(self, records: list[dict[str, Any]]):
        self.records = records
        self.calls = 0

    def list_products(self):
        self.calls += 1
        return iter(self.records)


def _raw_product(
    product_id: str,
    name: str = "Camiseta",
    unit_amount: int | None = 7999,
    images: list[str] | None = None,
    price_id: str | None = None,
) -> dict[str, Any]:
    return {
        "id": product_id,
        "object": "product",
        "name": name,
        "images": images if images is not None else [f"https://files.stripe.com/{product_id}.png"],
        "default_price": {
            "id": price_id or f"price_{product_id}",
            "object": "price",
            "currency": "brl",
            "unit_amount": unit_amount,
        },
    }


@pytest.fixture
def make_raw_product():
    """Factory for raw Stripe product records (default price expanded)"""
    return _raw_product


@pytest.fixture
def raw_products() -> list[dict[str, Any]]:
    return [
        _raw_product("prod_1", name="Camiseta Beyond the Limits", unit_amount=7999),
        _raw_product("prod_2", name="Camiseta Explorer", unit_amount=12990),
        _raw_product("prod_3", name="Camiseta Maratona", unit_amount=5000),
    ]


@pytest.fixture
def provider(raw_products) -> FakeProvider:
    return FakeProvider(raw_products)


@pytest.fixture
def catalog(provider) -> CatalogCache:
    return CatalogCache(lambda: fetch_catalog(provider), revalidate_seconds=7200)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture
def session(engine) -> Generator[Session, None, None]:
    with Session(engine) as s:
        yield s


@pytest.fixture
def client(engine, catalog) -> Generator[TestClient, None, None]:
    """TestClient with the DB session and catalog cache overridden"""

    def override_session():
        with Session(engine) as s:
            yield s

    app.dependency_overrides[get_session] = override_session
    app.dependency_overrides[get_catalog_cache] = lambda: catalog
    yield TestClient(app)
    app.dependency_overrides.clear()
