"""Request/response schemas for orders."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class OrderBase(BaseModel):
    """Editable order fields."""

    order_number: str = Field(..., min_length=1, max_length=64, description="Order number")
    product_name: str = Field(..., min_length=1, max_length=255, description="Product name")
    price: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2, description="Unit price")
    quantity: int = Field(..., ge=0, description="Quantity ordered")


class OrderCreate(OrderBase):
    """New order. A client-sent id is accepted but never used."""

    id: int | None = Field(default=None, description="Ignored; the database assigns ids")


class OrderUpdate(OrderBase):
    """Replacement values for an existing order."""


class OrderRead(OrderBase):
    """Order as stored."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    created_by: int | None = None


class OrdersListResponse(BaseModel):
    """Response for GET /orders."""

    orders: list[OrderRead]
