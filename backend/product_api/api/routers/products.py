"""CRUD endpoints for the product catalog."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from product_api.api.dependencies.body import read_payload
from product_api.api.dependencies.services import get_product_service
from product_api.api.schemas.product import (
    MessageResponse,
    ProductRead,
    ValidationErrorResponse,
)
from product_api.services.product_service import ProductService, ServiceResult


router = APIRouter()

NOT_FOUND_RESPONSE: dict[int | str, dict[str, Any]] = {
    status.HTTP_404_NOT_FOUND: {"model": MessageResponse}
}
ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": MessageResponse}
}
INVALID_RESPONSE: dict[int | str, dict[str, Any]] = {
    status.HTTP_400_BAD_REQUEST: {"model": ValidationErrorResponse}
}


def to_response(result: ServiceResult) -> JSONResponse:
    return JSONResponse(status_code=result.status_code, content=result.payload)


@router.get(
    "",
    summary="List all products",
    response_model=list[ProductRead],
    responses=ERROR_RESPONSES,
)
async def list_products(
    service: ProductService = Depends(get_product_service),
) -> JSONResponse:
    """Return every product; an empty catalog yields an empty array."""
    return to_response(await service.list_products())


@router.get(
    "/{product_id}",
    summary="Fetch a single product",
    response_model=ProductRead,
    responses={**NOT_FOUND_RESPONSE, **ERROR_RESPONSES},
)
async def get_product(
    product_id: str,
    service: ProductService = Depends(get_product_service),
) -> JSONResponse:
    return to_response(await service.get_product(product_id))


@router.post(
    "",
    summary="Create a product",
    status_code=status.HTTP_201_CREATED,
    response_model=ProductRead,
    responses={**INVALID_RESPONSE, **ERROR_RESPONSES},
)
async def create_product(
    request: Request,
    service: ProductService = Depends(get_product_service),
) -> JSONResponse:
    """Persist a product from a JSON or form body.

    ``name`` and ``price`` are required; ``quantity`` defaults to 0.
    """
    payload = await read_payload(request)
    return to_response(await service.create_product(payload))


@router.put(
    "/{product_id}",
    summary="Update an existing product",
    response_model=ProductRead,
    responses={**INVALID_RESPONSE, **NOT_FOUND_RESPONSE, **ERROR_RESPONSES},
)
async def update_product(
    product_id: str,
    request: Request,
    service: ProductService = Depends(get_product_service),
) -> JSONResponse:
    """Apply a partial update; only fields present in the body change."""
    payload = await read_payload(request)
    return to_response(await service.update_product(product_id, payload))


@router.delete(
    "/{product_id}",
    summary="Delete a product",
    response_model=ProductRead,
    responses={**NOT_FOUND_RESPONSE, **ERROR_RESPONSES},
)
async def delete_product(
    product_id: str,
    service: ProductService = Depends(get_product_service),
) -> JSONResponse:
    """Hard delete; the removed record is echoed back for confirmation."""
    return to_response(await service.delete_product(product_id))
