"""Pydantic request/response schemas for the Storefront API.

Request bodies are validated here before anything is turned into a command;
responses flatten aggregate dictionaries into typed payloads.
"""

import json
from datetime import datetime

from pydantic import BaseModel, Field, field_validator


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class RegisterUserRequest(BaseModel):
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    email: str = Field(min_length=3, max_length=254)


class StockProductRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    price: float = Field(gt=0)
    stock: int = Field(ge=0, default=0)
    category: str | None = None


class CreateCartRequest(BaseModel):
    user_id: str

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "user_id": "3f1c8f8e-6d0a-4b8f-9a3e-2f0b4d9c1a77",
                }
            ]
        }
    }


class AddProductToCartRequest(BaseModel):
    quantity: int = 1

    @field_validator("quantity", mode="before")
    @classmethod
    def at_least_one_unit(cls, value):
        """A missing or sub-unit quantity means one unit."""
        if value is None:
            return 1
        if isinstance(value, (int, float)) and not isinstance(value, bool) and value < 1:
            return 1
        return value


class CreateOrderRequest(BaseModel):
    cart_id: str
    discount: int = 0


class UpdateOrderRequest(BaseModel):
    cart_id: str
    discount: int | None = None


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class IdResponse(BaseModel):
    id: str


class MessageResponse(BaseModel):
    msg: str


class UserResponse(BaseModel):
    id: str
    first_name: str
    last_name: str
    email: str
    is_validated: bool
    created_at: datetime | None = None


class ProductResponse(BaseModel):
    id: str
    name: str
    category: str | None = None
    price: float
    stock: int
    low_stock: bool
    created_at: datetime | None = None


class CartItemResponse(BaseModel):
    id: str
    product_id: str
    quantity: int


class CartResponse(BaseModel):
    id: str
    user_id: str
    subtotal: float
    tax: float
    total: float
    place_order: bool
    items: list[CartItemResponse] = []
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CartCreatedResponse(BaseModel):
    msg: str
    cart: CartResponse


class CartUpdatedResponse(BaseModel):
    msg: str
    updated_cart: CartResponse


class OrderLineResponse(BaseModel):
    name: str
    quantity: int


class OrderResponse(BaseModel):
    id: str
    cart_id: str | None = None
    user_id: str
    discount: int
    final_price: float
    items_in_order: list[OrderLineResponse] = []
    status: str
    created_at: datetime | None = None
    paid_by: str | None = None
    paid_at: datetime | None = None

    @field_validator("items_in_order", mode="before")
    @classmethod
    def decode_snapshot(cls, value):
        if isinstance(value, str):
            return json.loads(value) if value else []
        return value or []


class OrderCreatedResponse(BaseModel):
    order: OrderResponse
    user_id: str


class OrderUpdatedResponse(BaseModel):
    updated_order: OrderResponse


class OrderPaidResponse(BaseModel):
    msg: str
    paid_order: OrderResponse


class _Page(BaseModel):
    current_page: int
    limit: int
    prev: str | None = None
    next: str


class CartListResponse(_Page):
    total_carts: int
    carts: list[CartResponse]


class OrderListResponse(_Page):
    total_orders: int
    orders: list[OrderResponse]
