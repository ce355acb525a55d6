"""Pydantic request/response schemas for the cart and order APIs."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

# --- Request Schemas ---


class AddToCartRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"product_id": "b2c3d4e5-f6a7-8901", "quantity": 2}]}}

    product_id: str
    quantity: int = Field(1, ge=1)


class UpdateCartItemRequest(BaseModel):
    quantity: int


class PlaceOrderRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "street": "123 Elm Street",
                    "city": "Springfield",
                    "postal_code": "62701",
                    "country": "US",
                }
            ]
        }
    }

    street: str = Field(..., max_length=200)
    city: str = Field(..., max_length=100)
    postal_code: str = Field(..., max_length=20)
    country: str = Field(..., max_length=100)


class UpdateOrderStatusRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"status": "Shipped"}]}}

    status: str


# --- Response Schemas ---


class CartItemResponse(BaseModel):
    product_id: str
    product_name: str
    unit_price: float
    currency: str
    quantity: int
    subtotal: float


class CartResponse(BaseModel):
    id: str
    user_id: str
    items: list[CartItemResponse]
    total: float
    currency: str
    item_count: int

    @classmethod
    def from_cart(cls, cart) -> CartResponse:
        total = cart.total()
        return cls(
            id=str(cart.id),
            user_id=str(cart.user_id),
            items=[
                CartItemResponse(
                    product_id=str(i.product_id),
                    product_name=i.product_name,
                    unit_price=i.unit_price,
                    currency=i.currency,
                    quantity=i.quantity,
                    subtotal=i.subtotal().amount,
                )
                for i in cart.items
            ],
            total=total.amount,
            currency=total.currency,
            item_count=cart.total_item_count(),
        )


class OrderItemResponse(BaseModel):
    product_id: str
    product_name: str
    unit_price: float
    currency: str
    quantity: int
    subtotal: float


class ShippingAddressResponse(BaseModel):
    street: str
    city: str
    postal_code: str
    country: str


class OrderResponse(BaseModel):
    id: str
    user_id: str
    status: str
    total: float
    currency: str
    items: list[OrderItemResponse]
    shipping_address: ShippingAddressResponse
    placed_at: datetime | None = None
    shipped_at: datetime | None = None
    delivered_at: datetime | None = None
    cancelled_at: datetime | None = None

    @classmethod
    def from_order(cls, order) -> OrderResponse:
        address = order.shipping_address
        return cls(
            id=str(order.id),
            user_id=str(order.user_id),
            status=order.status,
            total=order.total.amount,
            currency=order.total.currency,
            items=[
                OrderItemResponse(
                    product_id=str(i.product_id),
                    product_name=i.product_name,
                    unit_price=i.unit_price,
                    currency=i.currency,
                    quantity=i.quantity,
                    subtotal=i.subtotal().amount,
                )
                for i in order.items
            ],
            shipping_address=ShippingAddressResponse(
                street=address.street,
                city=address.city,
                postal_code=address.postal_code,
                country=address.country,
            ),
            placed_at=order.placed_at,
            shipped_at=order.shipped_at,
            delivered_at=order.delivered_at,
            cancelled_at=order.cancelled_at,
        )


class OrderPageResponse(BaseModel):
    items: list[OrderResponse]
    total: int
    page: int
    page_size: int
    total_pages: int
    has_next: bool
    has_previous: bool

    @classmethod
    def from_page(cls, page) -> OrderPageResponse:
        return cls(
            items=[OrderResponse.from_order(o) for o in page.items],
            total=page.total,
            page=page.page,
            page_size=page.page_size,
            total_pages=page.total_pages,
            has_next=page.has_next,
            has_previous=page.has_previous,
        )


class OrderIdResponse(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"order_id": "d4e5f6a7-b8c9-0123-def0-234567890123"}]}}

    order_id: str
