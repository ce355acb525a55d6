"""Pydantic request/response schemas for the Admin API."""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel

from storefront.ordering.api.schemas import OrderResponse

# --- Request Schemas ---


class StockUpdateItem(BaseModel):
    product_id: str
    stock: int


class BulkStockUpdateRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [{"updates": [{"product_id": "b2c3d4e5-f6a7-8901", "stock": 50}]}]
        }
    }

    updates: list[StockUpdateItem]


# --- Response Schemas ---


class LowStockItemResponse(BaseModel):
    product_id: str
    name: str
    category: str
    stock: int
    recommended_reorder: int = 0


class DashboardResponse(BaseModel):
    total_orders: int
    pending_orders: int
    low_stock_product_count: int
    recent_orders: list[OrderResponse]
    low_stock_items: list[LowStockItemResponse]

    @classmethod
    def from_dashboard(cls, dashboard) -> DashboardResponse:
        return cls(
            total_orders=dashboard.total_orders,
            pending_orders=dashboard.pending_orders,
            low_stock_product_count=dashboard.low_stock_product_count,
            recent_orders=[OrderResponse.from_order(o) for o in dashboard.recent_orders],
            low_stock_items=[LowStockItemResponse(**vars(i)) for i in dashboard.low_stock_items],
        )


class DailySalesResponse(BaseModel):
    day: date
    order_count: int
    revenue: float


class TopProductResponse(BaseModel):
    product_id: str
    product_name: str
    quantity_sold: int
    revenue: float


class SalesReportResponse(BaseModel):
    start: datetime
    end: datetime
    total_revenue: float
    order_count: int
    average_order_value: float
    daily_sales: list[DailySalesResponse]
    top_products: list[TopProductResponse]

    @classmethod
    def from_report(cls, report) -> SalesReportResponse:
        return cls(
            start=report.start,
            end=report.end,
            total_revenue=report.total_revenue,
            order_count=report.order_count,
            average_order_value=report.average_order_value,
            daily_sales=[DailySalesResponse(**vars(d)) for d in report.daily_sales],
            top_products=[TopProductResponse(**vars(p)) for p in report.top_products],
        )


class CategoryStockResponse(BaseModel):
    category: str
    product_count: int
    total_stock: int
    stock_value: float


class InventoryReportResponse(BaseModel):
    threshold: int
    total_products: int
    out_of_stock_count: int
    total_stock_value: float
    low_stock_items: list[LowStockItemResponse]
    categories: list[CategoryStockResponse]

    @classmethod
    def from_report(cls, report) -> InventoryReportResponse:
        return cls(
            threshold=report.threshold,
            total_products=report.total_products,
            out_of_stock_count=report.out_of_stock_count,
            total_stock_value=report.total_stock_value,
            low_stock_items=[LowStockItemResponse(**vars(i)) for i in report.low_stock_items],
            categories=[CategoryStockResponse(**vars(c)) for c in report.categories],
        )


class StockUpdateResultResponse(BaseModel):
    product_id: str
    success: bool
    old_stock: int | None = None
    new_stock: int | None = None
    error: str | None = None


class BulkStockUpdateResponse(BaseModel):
    succeeded: int
    failed: int
    results: list[StockUpdateResultResponse]

    @classmethod
    def from_report(cls, report) -> BulkStockUpdateResponse:
        return cls(
            succeeded=report.succeeded,
            failed=report.failed,
            results=[StockUpdateResultResponse(**vars(r)) for r in report.results],
        )
