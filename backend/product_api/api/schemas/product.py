"""Pydantic models describing Product payloads."""

from datetime import datetime, timezone
from typing import Annotated, Any

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    StringConstraints,
    field_serializer,
)
from pydantic.alias_generators import to_camel

ProductName = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)
]


def reject_bool(value: Any) -> Any:
    """Booleans are not numbers here, even though pydantic would cast them."""
    if isinstance(value, bool):
        raise ValueError("Input should be a number, not a boolean")
    return value


Quantity = Annotated[int, BeforeValidator(reject_bool), Field(ge=0)]
Price = Annotated[float, BeforeValidator(reject_bool), Field(allow_inf_nan=False)]


class ProductBase(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: ProductName = Field(..., description="Product name is required")
    quantity: Quantity = Field(0, description="Units in stock")
    price: Price = Field(..., description="Unit price")
    img: str | None = Field(None, description="Image reference or URL")


class ProductCreate(ProductBase):
    """Schema for product creation bodies."""


class ProductUpdate(BaseModel):
    """Partial update; only fields present in the body are applied."""

    model_config = ConfigDict(extra="ignore")

    name: ProductName | None = None
    quantity: Quantity | None = None
    price: Price | None = None
    img: str | None = None


class ProductRead(BaseModel):
    id: str
    name: str
    quantity: int
    price: float
    img: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    @field_serializer("created_at", "updated_at")
    def serialize_timestamp(self, value: datetime) -> str:
        """Emit UTC ISO timestamps; backends without tz support return naive values."""
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc).isoformat()


class FieldError(BaseModel):
    field: str
    message: str


class MessageResponse(BaseModel):
    message: str


class ValidationErrorResponse(MessageResponse):
    errors: list[FieldError]
