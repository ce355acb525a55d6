"""Pydantic request/response schemas for the Catalogue API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

# --- Request Schemas ---


class CreateProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Wireless Headphones",
                    "description": "Over-ear headphones with active noise cancellation.",
                    "price": 199.99,
                    "currency": "USD",
                    "stock": 25,
                    "category": "Electronics",
                    "image_urls": ["https://cdn.example.com/headphones.jpg"],
                }
            ]
        }
    }

    name: str = Field(..., max_length=200)
    description: str = Field(..., max_length=2000)
    price: float
    currency: str = Field("USD", max_length=3)
    stock: int = 0
    category: str = Field(..., max_length=50)
    image_urls: list[str] = []


class UpdateProductRequest(BaseModel):
    name: str = Field(..., max_length=200)
    description: str = Field(..., max_length=2000)
    price: float
    currency: str | None = Field(None, max_length=3)
    category: str = Field(..., max_length=50)
    image_urls: list[str] = []


class UpdateStockRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"stock": 40}]}}

    stock: int


# --- Response Schemas ---


class ProductResponse(BaseModel):
    id: str
    name: str
    description: str
    price: float
    currency: str
    stock: int
    in_stock: bool
    category: str
    image_urls: list[str] = []
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_product(cls, product) -> ProductResponse:
        return cls(
            id=str(product.id),
            name=product.name,
            description=product.description,
            price=product.price.amount,
            currency=product.price.currency,
            stock=product.stock,
            in_stock=product.stock > 0,
            category=product.category,
            image_urls=product.image_urls,
            created_at=product.created_at,
            updated_at=product.updated_at,
        )


class ProductPageResponse(BaseModel):
    items: list[ProductResponse]
    total: int
    page: int
    page_size: int
    total_pages: int
    has_next: bool
    has_previous: bool

    @classmethod
    def from_page(cls, page) -> ProductPageResponse:
        return cls(
            items=[ProductResponse.from_product(p) for p in page.items],
            total=page.total,
            page=page.page,
            page_size=page.page_size,
            total_pages=page.total_pages,
            has_next=page.has_next,
            has_previous=page.has_previous,
        )


class StockCheckResponse(BaseModel):
    product_id: str
    requested: int
    available: bool


class ProductIdResponse(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"product_id": "b2c3d4e5-f6a7-8901-bcde-f12345678901"}]}}

    product_id: str


class StockResponse(BaseModel):
    product_id: str
    previous_stock: int
    stock: int


class StatusResponse(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"status": "ok"}]}}

    status: str = "ok"
