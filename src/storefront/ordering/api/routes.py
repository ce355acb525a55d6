"""FastAPI endpoints for the caller's cart and orders."""

from datetime import datetime

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from storefront.cart.items import (
    AddToCart,
    ClearCart,
    RemoveFromCart,
    UpdateCartItem,
    get_or_create_cart,
)
from storefront.identity.api.dependencies import CurrentUser, get_current_user, require_admin
from storefront.order.cancellation import CancelOrder
from storefront.order.placement import PlaceOrder
from storefront.order.queries import (
    AdminOrderQuery,
    OrderQuery,
    all_orders,
    get_order,
    order_history,
)
from storefront.order.status import UpdateOrderStatus
from storefront.ordering.api.schemas import (
    AddToCartRequest,
    CartResponse,
    OrderIdResponse,
    OrderPageResponse,
    OrderResponse,
    PlaceOrderRequest,
    UpdateCartItemRequest,
    UpdateOrderStatusRequest,
)

# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/api/cart", tags=["cart"])


@cart_router.get("", response_model=CartResponse)
async def view_cart(current_user: CurrentUser = Depends(get_current_user)) -> CartResponse:
    return CartResponse.from_cart(get_or_create_cart(current_user.user_id))


@cart_router.post("/items", status_code=201, response_model=CartResponse)
async def add_to_cart(
    body: AddToCartRequest,
    current_user: CurrentUser = Depends(get_current_user),
) -> CartResponse:
    command = AddToCart(
        user_id=current_user.user_id,
        product_id=body.product_id,
        quantity=body.quantity,
    )
    current_domain.process(command, asynchronous=False)
    return CartResponse.from_cart(get_or_create_cart(current_user.user_id))


@cart_router.put("/items/{product_id}", response_model=CartResponse)
async def update_cart_item(
    product_id: str,
    body: UpdateCartItemRequest,
    current_user: CurrentUser = Depends(get_current_user),
) -> CartResponse:
    command = UpdateCartItem(
        user_id=current_user.user_id,
        product_id=product_id,
        quantity=body.quantity,
    )
    current_domain.process(command, asynchronous=False)
    return CartResponse.from_cart(get_or_create_cart(current_user.user_id))


@cart_router.delete("/items/{product_id}", response_model=CartResponse)
async def remove_from_cart(
    product_id: str,
    current_user: CurrentUser = Depends(get_current_user),
) -> CartResponse:
    command = RemoveFromCart(user_id=current_user.user_id, product_id=product_id)
    current_domain.process(command, asynchronous=False)
    return CartResponse.from_cart(get_or_create_cart(current_user.user_id))


@cart_router.delete("", response_model=CartResponse)
async def clear_cart(current_user: CurrentUser = Depends(get_current_user)) -> CartResponse:
    current_domain.process(ClearCart(user_id=current_user.user_id), asynchronous=False)
    return CartResponse.from_cart(get_or_create_cart(current_user.user_id))


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/api/orders", tags=["orders"])


@order_router.get("", response_model=OrderPageResponse)
async def list_my_orders(
    status: str | None = None,
    from_date: datetime | None = None,
    to_date: datetime | None = None,
    page: int = 1,
    page_size: int = 10,
    sort_by: str = "placed_at",
    sort_descending: bool = True,
    current_user: CurrentUser = Depends(get_current_user),
) -> OrderPageResponse:
    query = OrderQuery(
        status=status,
        from_date=from_date,
        to_date=to_date,
        page=page,
        page_size=page_size,
        sort_by=sort_by,
        sort_descending=sort_descending,
    )
    return OrderPageResponse.from_page(order_history(current_user.user_id, query))


@order_router.get("/all", response_model=OrderPageResponse)
async def list_all_orders(
    status: str | None = None,
    from_date: datetime | None = None,
    to_date: datetime | None = None,
    user_id: str | None = None,
    min_total: float | None = None,
    max_total: float | None = None,
    page: int = 1,
    page_size: int = 10,
    sort_by: str = "placed_at",
    sort_descending: bool = True,
    _admin: CurrentUser = Depends(require_admin),
) -> OrderPageResponse:
    query = AdminOrderQuery(
        status=status,
        from_date=from_date,
        to_date=to_date,
        user_id=user_id,
        min_total=min_total,
        max_total=max_total,
        page=page,
        page_size=page_size,
        sort_by=sort_by,
        sort_descending=sort_descending,
    )
    return OrderPageResponse.from_page(all_orders(query))


@order_router.post("", status_code=201, response_model=OrderIdResponse)
async def place_order(
    body: PlaceOrderRequest,
    current_user: CurrentUser = Depends(get_current_user),
) -> OrderIdResponse:
    command = PlaceOrder(
        user_id=current_user.user_id,
        street=body.street,
        city=body.city,
        postal_code=body.postal_code,
        country=body.country,
    )
    result = current_domain.process(command, asynchronous=False)
    return OrderIdResponse(order_id=result)


@order_router.get("/{order_id}", response_model=OrderResponse)
async def order_detail(order_id: str, current_user: CurrentUser = Depends(get_current_user)) -> OrderResponse:
    owner = None if current_user.is_admin else current_user.user_id
    return OrderResponse.from_order(get_order(order_id, owner))


@order_router.post("/{order_id}/cancel", response_model=OrderResponse)
async def cancel_order(order_id: str, current_user: CurrentUser = Depends(get_current_user)) -> OrderResponse:
    command = CancelOrder(
        order_id=order_id,
        user_id=current_user.user_id,
        is_admin=current_user.is_admin,
    )
    current_domain.process(command, asynchronous=False)
    return OrderResponse.from_order(get_order(order_id))


@order_router.patch("/{order_id}/status", response_model=OrderResponse)
async def update_order_status(
    order_id: str,
    body: UpdateOrderStatusRequest,
    _admin: CurrentUser = Depends(require_admin),
) -> OrderResponse:
    current_domain.process(UpdateOrderStatus(order_id=order_id, status=body.status), asynchronous=False)
    return OrderResponse.from_order(get_order(order_id))
