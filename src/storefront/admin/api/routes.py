"""FastAPI endpoints for the back office. Every route requires an admin token."""

from datetime import datetime

from fastapi import APIRouter, Depends, Query
from protean.utils.globals import current_domain

from storefront.admin.api.schemas import (
    BulkStockUpdateRequest,
    BulkStockUpdateResponse,
    DashboardResponse,
    InventoryReportResponse,
    SalesReportResponse,
)
from storefront.admin.reports import bulk_update_stock, dashboard, inventory_report, sales_report
from storefront.identity.api.dependencies import require_admin
from storefront.ordering.api.schemas import OrderPageResponse, OrderResponse, UpdateOrderStatusRequest
from storefront.order.queries import AdminOrderQuery, all_orders, get_order
from storefront.order.status import UpdateOrderStatus

admin_router = APIRouter(prefix="/api/admin", tags=["admin"], dependencies=[Depends(require_admin)])


@admin_router.get("/dashboard", response_model=DashboardResponse)
async def admin_dashboard() -> DashboardResponse:
    return DashboardResponse.from_dashboard(dashboard())


@admin_router.get("/orders", response_model=OrderPageResponse)
async def admin_orders(
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


@admin_router.patch("/orders/{order_id}/status", response_model=OrderResponse)
async def admin_update_order_status(order_id: str, body: UpdateOrderStatusRequest) -> OrderResponse:
    current_domain.process(UpdateOrderStatus(order_id=order_id, status=body.status), asynchronous=False)
    return OrderResponse.from_order(get_order(order_id))


@admin_router.get("/reports/sales", response_model=SalesReportResponse)
async def admin_sales_report(start: datetime, end: datetime) -> SalesReportResponse:
    return SalesReportResponse.from_report(sales_report(start, end))


@admin_router.get("/reports/inventory", response_model=InventoryReportResponse)
async def admin_inventory_report(threshold: int | None = Query(None, ge=0)) -> InventoryReportResponse:
    return InventoryReportResponse.from_report(inventory_report(threshold))


@admin_router.patch("/inventory/bulk-update", response_model=BulkStockUpdateResponse)
async def admin_bulk_update(body: BulkStockUpdateRequest) -> BulkStockUpdateResponse:
    report = bulk_update_stock([(u.product_id, u.stock) for u in body.updates])
    return BulkStockUpdateResponse.from_report(report)
