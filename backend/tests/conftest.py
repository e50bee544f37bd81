"""Shared fixtures: in-memory SQLite database, gateway, service and client."""

from collections.abc import Mapping
from typing import Any

import pytest
from fastapi.testclient import TestClient

from product_api.core.config import Settings
from product_api.db.models.product import Product
from product_api.db.session import Database
from product_api.main import create_app
from product_api.services.product_service import ProductService
from product_api.storage.product_gateway import ProductGateway, SqlProductGateway


class FailingGateway(ProductGateway):
    """Gateway whose every call raises the configured exception."""

    def __init__(self, exc: Exception) -> None:
        self.exc = exc
        self.calls: list[str] = []

    def _fail(self, name: str) -> Any:
        self.calls.append(name)
        raise self.exc

    def find_all(self) -> list[Product]:
        return self._fail("find_all")

    def find_by_id(self, product_id: str) -> Product | None:
        return self._fail("find_by_id")

    def insert(self, fields: Mapping[str, Any]) -> Product:
        return self._fail("insert")

    def update_by_id(self, product_id: str, fields: Mapping[str, Any]) -> Product | None:
        return self._fail("update_by_id")

    def delete_by_id(self, product_id: str) -> Product | None:
        return self._fail("delete_by_id")


@pytest.fixture
def settings() -> Settings:
    return Settings(database_url="sqlite://", database_required=False, port=4000)


@pytest.fixture
def database():
    """Fresh in-memory database with the schema created."""
    db = Database("sqlite://")
    db.connect()
    yield db
    db.dispose()


@pytest.fixture
def gateway(database: Database) -> SqlProductGateway:
    return SqlProductGateway(database)


@pytest.fixture
def service(gateway: SqlProductGateway) -> ProductService:
    return ProductService(gateway)


@pytest.fixture(name="client")
def client_fixture(settings: Settings, database: Database):
    """Test client bound to the in-memory database."""
    app = create_app(settings=settings, database=database)
    with TestClient(app) as client:
        yield client


@pytest.fixture
def failing_service():
    """Factory building a service over a gateway that raises ``exc``."""

    def factory(exc: Exception) -> tuple[ProductService, FailingGateway]:
        failing = FailingGateway(exc)
        return ProductService(failing), failing

    return factory
