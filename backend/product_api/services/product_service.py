"""Product resource service: storage orchestration and status mapping."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
import logging
from typing import Any, TypeVar

from fastapi import status
from starlette.concurrency import run_in_threadpool

from product_api.api.schemas.product import ProductRead
from product_api.core.exceptions import ProductValidationError, error_message
from product_api.db.models.product import Product
from product_api.services.product_validation import validate_create, validate_update
from product_api.storage.product_gateway import ProductGateway

logger = logging.getLogger(__name__)

T = TypeVar("T")

PRODUCT_NOT_FOUND = "Product not found"


@dataclass(frozen=True)
class ServiceResult:
    """Status code plus JSON-ready payload for one operation."""

    status_code: int
    payload: Any


def serialize_product(product: Product) -> dict[str, Any]:
    return ProductRead.model_validate(product).model_dump(mode="json", by_alias=True)


def _not_found() -> ServiceResult:
    return ServiceResult(status.HTTP_404_NOT_FOUND, {"message": PRODUCT_NOT_FOUND})


def _failure(exc: BaseException) -> ServiceResult:
    return ServiceResult(
        status.HTTP_500_INTERNAL_SERVER_ERROR, {"message": error_message(exc)}
    )


def _invalid(exc: ProductValidationError) -> ServiceResult:
    return ServiceResult(
        status.HTTP_400_BAD_REQUEST, {"message": exc.message, "errors": exc.errors}
    )


class ProductService:
    """Stateless orchestration of one gateway call per operation.

    Every failure is caught here and turned into a result; nothing raised by
    the gateway reaches the transport layer.
    """

    def __init__(self, gateway: ProductGateway) -> None:
        self._gateway = gateway

    async def _call(self, fn: Callable[..., T], *args: Any) -> T:
        return await run_in_threadpool(fn, *args)

    async def list_products(self) -> ServiceResult:
        try:
            products = await self._call(self._gateway.find_all)
            return ServiceResult(
                status.HTTP_200_OK, [serialize_product(p) for p in products]
            )
        except Exception as e:
            logger.error(f"Error listing products: {e}", exc_info=True)
            return _failure(e)

    async def get_product(self, product_id: str) -> ServiceResult:
        try:
            product = await self._call(self._gateway.find_by_id, product_id)
            if product is None:
                return _not_found()
            return ServiceResult(status.HTTP_200_OK, serialize_product(product))
        except Exception as e:
            logger.error(f"Error fetching product {product_id}: {e}", exc_info=True)
            return _failure(e)

    async def create_product(self, payload: Mapping[str, Any]) -> ServiceResult:
        try:
            fields = validate_create(payload)
            product = await self._call(self._gateway.insert, fields)
            logger.info(f"Created product {product.id}")
            return ServiceResult(status.HTTP_201_CREATED, serialize_product(product))
        except ProductValidationError as e:
            logger.info(f"Rejected product creation: {e.errors}")
            return _invalid(e)
        except Exception as e:
            logger.error(f"Error creating product: {e}", exc_info=True)
            return _failure(e)

    async def update_product(
        self, product_id: str, payload: Mapping[str, Any]
    ) -> ServiceResult:
        try:
            fields = validate_update(payload)
            product = await self._call(self._gateway.update_by_id, product_id, fields)
            if product is None:
                return _not_found()
            logger.info(f"Updated product {product_id}")
            return ServiceResult(status.HTTP_200_OK, serialize_product(product))
        except ProductValidationError as e:
            logger.info(f"Rejected update of product {product_id}: {e.errors}")
            return _invalid(e)
        except Exception as e:
            logger.error(f"Error updating product {product_id}: {e}", exc_info=True)
            return _failure(e)

    async def delete_product(self, product_id: str) -> ServiceResult:
        try:
            product = await self._call(self._gateway.delete_by_id, product_id)
            if product is None:
                return _not_found()
            logger.info(f"Deleted product {product_id}")
            return ServiceResult(status.HTTP_200_OK, serialize_product(product))
        except Exception as e:
            logger.error(f"Error deleting product {product_id}: {e}", exc_info=True)
            return _failure(e)
