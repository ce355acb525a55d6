"""Read side of ordering: order history for customers, full listing for admins."""

from dataclasses import dataclass
from datetime import UTC, datetime

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from storefront.order.order import Order, OrderStatus
from storefront.shared.paging import DEFAULT_PAGE_SIZE, Page, PageRequest, paginate


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC so they compare with stored timestamps."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


_SORT_KEYS = {
    "placed_at": lambda o: as_utc(o.placed_at),
    "total": lambda o: o.total.amount,
}


@dataclass(frozen=True)
class OrderQuery:
    status: str | None = None
    from_date: datetime | None = None
    to_date: datetime | None = None
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    sort_by: str = "placed_at"
    sort_descending: bool = True

    def __post_init__(self):
        if self.status and self.status not in {s.value for s in OrderStatus}:
            raise ValidationError({"status": [f"Unknown order status '{self.status}'"]})

    def matches(self, order: Order) -> bool:
        if self.status and order.status != self.status:
            return False
        if self.from_date and as_utc(order.placed_at) < as_utc(self.from_date):
            return False
        if self.to_date and as_utc(order.placed_at) > as_utc(self.to_date):
            return False
        return True


@dataclass(frozen=True)
class AdminOrderQuery(OrderQuery):
    user_id: str | None = None
    min_total: float | None = None
    max_total: float | None = None

    def matches(self, order: Order) -> bool:
        if not super().matches(order):
            return False
        if self.user_id and str(order.user_id) != str(self.user_id):
            return False
        if self.min_total is not None and order.total.amount < self.min_total:
            return False
        if self.max_total is not None and order.total.amount > self.max_total:
            return False
        return True


def _repo():
    return current_domain.repository_for(Order)


def _page(orders: list[Order], query: OrderQuery) -> Page:
    sort_key = _SORT_KEYS.get((query.sort_by or "placed_at").lower())
    if sort_key is None:
        raise ValidationError({"sort_by": [f"Cannot sort orders by '{query.sort_by}'"]})

    matching = [o for o in orders if query.matches(o)]
    matching.sort(key=sort_key, reverse=query.sort_descending)
    return paginate(matching, PageRequest(query.page, query.page_size))


def order_history(user_id: str, query: OrderQuery | None = None) -> Page:
    return _page(_repo().for_user(user_id), query or OrderQuery())


def get_order(order_id: str, user_id: str | None = None) -> Order:
    """Fetch an order.

    When ``user_id`` is given, an order placed by someone else is reported as
    missing rather than forbidden.
    """
    order = _repo().get(order_id)
    if user_id is not None and not order.is_owned_by(user_id):
        raise ObjectNotFoundError(f"`Order` object with identifier {order_id} does not exist.")
    return order


def all_orders(query: AdminOrderQuery | None = None) -> Page:
    return _page(_repo().all_orders(), query or AdminOrderQuery())
