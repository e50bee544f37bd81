"""Explicit validation of product payloads before they reach storage."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from product_api.api.schemas.product import ProductCreate, ProductUpdate
from product_api.core.exceptions import ProductValidationError

# Fields that may be omitted on update but never cleared
NON_NULLABLE_FIELDS = ("name", "quantity", "price")


def _field_errors(exc: ValidationError) -> list[dict[str, Any]]:
    errors = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ())) or "body"
        errors.append({"field": field, "message": error.get("msg", "Invalid value")})
    return errors


def validate_create(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Return storage-ready fields for a new product.

    Raises ProductValidationError when name or price is missing, the name is
    blank, the quantity is negative or a value cannot be coerced.
    """
    try:
        product = ProductCreate.model_validate(dict(payload))
    except ValidationError as exc:
        raise ProductValidationError(_field_errors(exc)) from exc
    return product.model_dump()


def validate_update(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Return only the fields the client supplied, validated and coerced."""
    try:
        changes = ProductUpdate.model_validate(dict(payload))
    except ValidationError as exc:
        raise ProductValidationError(_field_errors(exc)) from exc

    fields = changes.model_dump(exclude_unset=True)
    errors = [
        {"field": name, "message": f"Product {name} cannot be null"}
        for name in NON_NULLABLE_FIELDS
        if name in fields and fields[name] is None
    ]
    if errors:
        raise ProductValidationError(errors)
    return fields
