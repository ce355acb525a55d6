"""FastAPI endpoints for the product catalogue.

Reads are public. Writes require an admin token.
"""

import json

from fastapi import APIRouter, Depends, Query
from protean.utils.globals import current_domain

from storefront.catalogue.api.schemas import (
    CreateProductRequest,
    ProductIdResponse,
    ProductPageResponse,
    ProductResponse,
    StatusResponse,
    StockCheckResponse,
    StockResponse,
    UpdateProductRequest,
    UpdateStockRequest,
)
from storefront.catalogue.creation import CreateProduct
from storefront.catalogue.management import DeleteProduct, UpdateProduct, UpdateStock
from storefront.catalogue.queries import (
    ProductQuery,
    check_stock,
    get_product,
    list_products,
    products_in_category,
    search_products,
)
from storefront.identity.api.dependencies import CurrentUser, require_admin

product_router = APIRouter(prefix="/api/products", tags=["products"])


# ---------------------------------------------------------------------------
# Public reads
# ---------------------------------------------------------------------------
@product_router.get("", response_model=ProductPageResponse)
async def list_catalogue(
    keyword: str | None = None,
    category: str | None = None,
    min_price: float | None = None,
    max_price: float | None = None,
    min_stock: int | None = None,
    max_stock: int | None = None,
    page: int = 1,
    page_size: int = 10,
    sort_by: str = "name",
    sort_descending: bool = False,
) -> ProductPageResponse:
    query = ProductQuery(
        keyword=keyword,
        category=category,
        min_price=min_price,
        max_price=max_price,
        min_stock=min_stock,
        max_stock=max_stock,
        page=page,
        page_size=page_size,
        sort_by=sort_by,
        sort_descending=sort_descending,
    )
    return ProductPageResponse.from_page(list_products(query))


@product_router.get("/search", response_model=list[ProductResponse])
async def search(keyword: str = Query("", max_length=100)) -> list[ProductResponse]:
    return [ProductResponse.from_product(p) for p in search_products(keyword)]


@product_router.get("/category/{category}", response_model=list[ProductResponse])
async def by_category(category: str) -> list[ProductResponse]:
    return [ProductResponse.from_product(p) for p in products_in_category(category)]


@product_router.get("/{product_id}", response_model=ProductResponse)
async def product_detail(product_id: str) -> ProductResponse:
    return ProductResponse.from_product(get_product(product_id))


@product_router.get("/{product_id}/stock", response_model=StockCheckResponse)
async def stock_check(product_id: str, quantity: int = Query(1, ge=1)) -> StockCheckResponse:
    return StockCheckResponse(
        product_id=product_id,
        requested=quantity,
        available=check_stock(product_id, quantity),
    )


# ---------------------------------------------------------------------------
# Admin writes
# ---------------------------------------------------------------------------
@product_router.post("", status_code=201, response_model=ProductIdResponse)
async def create_product(
    body: CreateProductRequest,
    _admin: CurrentUser = Depends(require_admin),
) -> ProductIdResponse:
    command = CreateProduct(
        name=body.name,
        description=body.description,
        price=body.price,
        currency=body.currency,
        stock=body.stock,
        category=body.category,
        image_urls=json.dumps(body.image_urls),
    )
    result = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=result)


@product_router.put("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: str,
    body: UpdateProductRequest,
    _admin: CurrentUser = Depends(require_admin),
) -> ProductResponse:
    command = UpdateProduct(
        product_id=product_id,
        name=body.name,
        description=body.description,
        price=body.price,
        currency=body.currency,
        category=body.category,
        image_urls=json.dumps(body.image_urls),
    )
    current_domain.process(command, asynchronous=False)
    return ProductResponse.from_product(get_product(product_id))


@product_router.delete("/{product_id}", response_model=StatusResponse)
async def delete_product(product_id: str, _admin: CurrentUser = Depends(require_admin)) -> StatusResponse:
    current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)
    return StatusResponse()


@product_router.patch("/{product_id}/stock", response_model=StockResponse)
async def update_stock(
    product_id: str,
    body: UpdateStockRequest,
    _admin: CurrentUser = Depends(require_admin),
) -> StockResponse:
    previous = current_domain.process(UpdateStock(product_id=product_id, stock=body.stock), asynchronous=False)
    return StockResponse(product_id=product_id, previous_stock=previous, stock=body.stock)
