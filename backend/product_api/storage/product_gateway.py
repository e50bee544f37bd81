"""Storage gateway for product records."""

from __future__ import annotations

import abc
import logging
import uuid
from collections.abc import Callable, Mapping
from typing import Any, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from product_api.core.exceptions import StorageError
from product_api.db.models.product import Product, utcnow
from product_api.db.session import Database

logger = logging.getLogger(__name__)

T = TypeVar("T")

WRITABLE_FIELDS = ("name", "quantity", "price", "img")


class ProductGateway(abc.ABC):
    """Persist and retrieve products. Holds no business rules."""

    @abc.abstractmethod
    def find_all(self) -> list[Product]:
        ...

    @abc.abstractmethod
    def find_by_id(self, product_id: str) -> Product | None:
        ...

    @abc.abstractmethod
    def insert(self, fields: Mapping[str, Any]) -> Product:
        ...

    @abc.abstractmethod
    def update_by_id(
        self, product_id: str, fields: Mapping[str, Any]
    ) -> Product | None:
        ...

    @abc.abstractmethod
    def delete_by_id(self, product_id: str) -> Product | None:
        ...


def parse_product_id(product_id: str) -> str:
    """Normalize a product id, raising StorageError when it is not a UUID."""
    try:
        return str(uuid.UUID(str(product_id)))
    except (ValueError, TypeError, AttributeError) as exc:
        raise StorageError(f"Malformed product id: {product_id!r}") from exc


class SqlProductGateway(ProductGateway):
    """SQLAlchemy-backed gateway; one short transaction per call.

    Returned products are detached from their session, so callers may read
    them freely after the call returns.
    """

    def __init__(self, database: Database) -> None:
        self._database = database

    def _run(self, action: str, work: Callable[[Session], T]) -> T:
        try:
            with self._database.session() as db:
                return work(db)
        except StorageError:
            raise
        except SQLAlchemyError as e:
            logger.error(f"Database error while {action}: {e}", exc_info=True)
            raise StorageError(str(e)) from e

    def find_all(self) -> list[Product]:
        def work(db: Session) -> list[Product]:
            query = select(Product).order_by(Product.created_at, Product.id)
            return list(db.scalars(query).all())

        return self._run("listing products", work)

    def find_by_id(self, product_id: str) -> Product | None:
        key = parse_product_id(product_id)
        return self._run(f"fetching product {key}", lambda db: db.get(Product, key))

    def insert(self, fields: Mapping[str, Any]) -> Product:
        def work(db: Session) -> Product:
            now = utcnow()
            product = Product(
                **{k: v for k, v in fields.items() if k in WRITABLE_FIELDS},
                created_at=now,
                updated_at=now,
            )
            if product.quantity is None:
                product.quantity = 0
            db.add(product)
            db.flush()
            db.refresh(product)
            return product

        return self._run("creating product", work)

    def update_by_id(
        self, product_id: str, fields: Mapping[str, Any]
    ) -> Product | None:
        key = parse_product_id(product_id)

        def work(db: Session) -> Product | None:
            product = db.get(Product, key)
            if product is None:
                return None
            for name, value in fields.items():
                if name in WRITABLE_FIELDS:
                    setattr(product, name, value)
            product.updated_at = utcnow()
            db.flush()
            db.refresh(product)
            return product

        return self._run(f"updating product {key}", work)

    def delete_by_id(self, product_id: str) -> Product | None:
        key = parse_product_id(product_id)

        def work(db: Session) -> Product | None:
            product = db.get(Product, key)
            if product is None:
                return None
            db.delete(product)
            db.flush()
            return product

        return self._run(f"deleting product {key}", work)
