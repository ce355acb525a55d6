"""Back-office reporting: dashboard, sales and inventory reports, bulk stock edits.

Reports are computed on read from the Order and Product aggregates.
"""

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import UTC, date, datetime

import structlog
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from storefront.catalogue.cache import invalidate_catalogue_cache
from storefront.catalogue.product import Product, StockChangeReason
from storefront.config import get_settings
from storefront.order.order import Order, OrderStatus
from storefront.order.queries import as_utc

logger = structlog.get_logger(__name__)

RECENT_ORDER_COUNT = 5
DASHBOARD_LOW_STOCK_ITEMS = 10
TOP_PRODUCT_COUNT = 10


# ---------------------------------------------------------------------------
# Report shapes
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class LowStockItem:
    product_id: str
    name: str
    category: str
    stock: int
    recommended_reorder: int = 0


@dataclass(frozen=True)
class Dashboard:
    total_orders: int
    pending_orders: int
    low_stock_product_count: int
    recent_orders: list
    low_stock_items: list[LowStockItem]


@dataclass(frozen=True)
class DailySales:
    day: date
    order_count: int
    revenue: float


@dataclass(frozen=True)
class TopProduct:
    product_id: str
    product_name: str
    quantity_sold: int
    revenue: float


@dataclass(frozen=True)
class SalesReport:
    start: datetime
    end: datetime
    total_revenue: float
    order_count: int
    average_order_value: float
    daily_sales: list[DailySales]
    top_products: list[TopProduct]


@dataclass(frozen=True)
class CategoryStock:
    category: str
    product_count: int
    total_stock: int
    stock_value: float


@dataclass(frozen=True)
class InventoryReport:
    threshold: int
    total_products: int
    out_of_stock_count: int
    total_stock_value: float
    low_stock_items: list[LowStockItem]
    categories: list[CategoryStock]


@dataclass(frozen=True)
class StockUpdateResult:
    product_id: str
    success: bool
    old_stock: int | None = None
    new_stock: int | None = None
    error: str | None = None


@dataclass
class BulkStockUpdateReport:
    results: list[StockUpdateResult] = field(default_factory=list)

    @property
    def succeeded(self) -> int:
        return sum(1 for r in self.results if r.success)

    @property
    def failed(self) -> int:
        return len(self.results) - self.succeeded


# ---------------------------------------------------------------------------
# Reports
# ---------------------------------------------------------------------------
def _orders():
    return current_domain.repository_for(Order).all_orders()


def _products():
    return current_domain.repository_for(Product).all_products()


def recommended_reorder(threshold: int) -> int:
    return max(2 * threshold, 10)


def dashboard() -> Dashboard:
    threshold = get_settings().low_stock_threshold
    orders = _orders()
    low_stock = current_domain.repository_for(Product).low_stock(threshold)

    recent = sorted(orders, key=lambda o: as_utc(o.placed_at), reverse=True)[:RECENT_ORDER_COUNT]
    return Dashboard(
        total_orders=len(orders),
        pending_orders=sum(1 for o in orders if o.status == OrderStatus.PENDING.value),
        low_stock_product_count=len(low_stock),
        recent_orders=recent,
        low_stock_items=[
            LowStockItem(product_id=str(p.id), name=p.name, category=p.category, stock=p.stock)
            for p in low_stock[:DASHBOARD_LOW_STOCK_ITEMS]
        ],
    )


def sales_report(start: datetime, end: datetime) -> SalesReport:
    """Revenue from delivered orders placed between ``start`` and ``end``."""
    start, end = as_utc(start), as_utc(end)
    if start > end:
        raise ValidationError({"start": ["Start date must not be after end date"]})
    if end > datetime.now(UTC):
        raise ValidationError({"end": ["End date cannot be in the future"]})

    delivered = [
        o
        for o in _orders()
        if o.status == OrderStatus.DELIVERED.value and start <= as_utc(o.placed_at) <= end
    ]

    daily = defaultdict(lambda: [0, 0.0])
    products = {}
    for order in delivered:
        bucket = daily[as_utc(order.placed_at).date()]
        bucket[0] += 1
        bucket[1] += order.total.amount

        for item in order.items:
            key = str(item.product_id)
            name, quantity, revenue = products.get(key, (item.product_name, 0, 0.0))
            products[key] = (name, quantity + item.quantity, revenue + item.subtotal().amount)

    total_revenue = round(sum(o.total.amount for o in delivered), 2)
    order_count = len(delivered)
    top = sorted(products.items(), key=lambda kv: kv[1][1], reverse=True)[:TOP_PRODUCT_COUNT]

    return SalesReport(
        start=start,
        end=end,
        total_revenue=total_revenue,
        order_count=order_count,
        average_order_value=round(total_revenue / order_count, 2) if order_count else 0.0,
        daily_sales=[
            DailySales(day=day, order_count=count, revenue=round(revenue, 2))
            for day, (count, revenue) in sorted(daily.items())
        ],
        top_products=[
            TopProduct(product_id=pid, product_name=name, quantity_sold=qty, revenue=round(revenue, 2))
            for pid, (name, qty, revenue) in top
        ],
    )


def inventory_report(threshold: int | None = None) -> InventoryReport:
    if threshold is None:
        threshold = get_settings().low_stock_threshold
    if threshold < 0:
        raise ValidationError({"threshold": ["Threshold cannot be negative"]})

    products = _products()
    reorder = recommended_reorder(threshold)

    categories = defaultdict(lambda: [0, 0, 0.0])
    for product in products:
        bucket = categories[product.category]
        bucket[0] += 1
        bucket[1] += product.stock
        bucket[2] += product.stock * product.price.amount

    low_stock = sorted((p for p in products if p.stock <= threshold), key=lambda p: p.stock)
    breakdown = [
        CategoryStock(category=name, product_count=count, total_stock=stock, stock_value=round(value, 2))
        for name, (count, stock, value) in categories.items()
    ]
    breakdown.sort(key=lambda c: c.stock_value, reverse=True)

    return InventoryReport(
        threshold=threshold,
        total_products=len(products),
        out_of_stock_count=sum(1 for p in products if p.stock == 0),
        total_stock_value=round(sum(c.stock_value for c in breakdown), 2),
        low_stock_items=[
            LowStockItem(
                product_id=str(p.id),
                name=p.name,
                category=p.category,
                stock=p.stock,
                recommended_reorder=reorder,
            )
            for p in low_stock
        ],
        categories=breakdown,
    )


def bulk_update_stock(updates) -> BulkStockUpdateReport:
    """Apply ``(product_id, new_stock)`` pairs one at a time.

    A bad entry is reported and skipped; the rest of the batch still applies.
    """
    repo = current_domain.repository_for(Product)
    report = BulkStockUpdateReport()

    for product_id, new_stock in updates:
        if new_stock is None or new_stock < 0:
            report.results.append(
                StockUpdateResult(product_id=str(product_id), success=False, error="Stock cannot be negative")
            )
            continue

        try:
            product = repo.get(product_id)
        except ObjectNotFoundError:
            report.results.append(
                StockUpdateResult(product_id=str(product_id), success=False, error="Product not found")
            )
            continue

        old_stock = product.stock
        product.update_stock(new_stock, reason=StockChangeReason.ADJUSTMENT)
        repo.add(product)
        report.results.append(
            StockUpdateResult(product_id=str(product_id), success=True, old_stock=old_stock, new_stock=new_stock)
        )

    invalidate_catalogue_cache()
    logger.info("Bulk stock update applied", succeeded=report.succeeded, failed=report.failed)
    return report
