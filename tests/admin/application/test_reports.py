"""Tests for the dashboard, sales and inventory reports and bulk stock updates."""

from datetime import UTC, datetime, timedelta

import pytest
from protean import current_domain
from protean.exceptions import ValidationError

from storefront.admin.reports import (
    bulk_update_stock,
    dashboard,
    inventory_report,
    recommended_reorder,
    sales_report,
)
from storefront.catalogue.product import Product
from storefront.catalogue.queries import get_product
from storefront.order.status import UpdateOrderStatus


def _deliver(order_id):
    for status in ("Confirmed", "Processing", "Shipped", "Delivered"):
        current_domain.process(UpdateOrderStatus(order_id=order_id, status=status), asynchronous=False)


class TestDashboard:
    def test_counts(self, customer_id, create_product, place_order):
        plenty = create_product(name="USB Cable", stock=100)
        create_product(name="Desk Lamp", stock=2)
        first = place_order(customer_id, [(plenty, 1)])
        place_order(customer_id, [(plenty, 1)])
        current_domain.process(UpdateOrderStatus(order_id=first, status="Confirmed"), asynchronous=False)

        board = dashboard()

        assert board.total_orders == 2
        assert board.pending_orders == 1
        assert board.low_stock_product_count == 1
        assert [i.name for i in board.low_stock_items] == ["Desk Lamp"]

    def test_recent_orders_capped_at_five(self, customer_id, create_product, place_order):
        product_id = create_product(stock=100)
        for _ in range(6):
            place_order(customer_id, [(product_id, 1)])
        assert len(dashboard().recent_orders) == 5

    def test_empty_store(self):
        board = dashboard()
        assert board.total_orders == 0
        assert board.recent_orders == []


class TestSalesReport:
    def test_only_delivered_orders_count(self, customer_id, create_product, place_order):
        mouse = create_product(name="Wireless Mouse", price=25.0, stock=100)
        cable = create_product(name="USB Cable", price=5.0, stock=100)
        start = datetime.now(UTC) - timedelta(hours=1)

        delivered_one = place_order(customer_id, [(mouse, 2), (cable, 1)])
        delivered_two = place_order(customer_id, [(cable, 4)])
        place_order(customer_id, [(mouse, 10)])
        _deliver(delivered_one)
        _deliver(delivered_two)

        report = sales_report(start, datetime.now(UTC))

        assert report.order_count == 2
        assert report.total_revenue == 75.0
        assert report.average_order_value == 37.5
        assert [(p.product_name, p.quantity_sold) for p in report.top_products] == [
            ("USB Cable", 5),
            ("Wireless Mouse", 2),
        ]
        assert len(report.daily_sales) == 1
        assert report.daily_sales[0].order_count == 2

    def test_no_sales(self):
        now = datetime.now(UTC)
        report = sales_report(now - timedelta(days=1), now)
        assert report.order_count == 0
        assert report.average_order_value == 0.0
        assert report.top_products == []

    def test_start_after_end_rejected(self):
        now = datetime.now(UTC)
        with pytest.raises(ValidationError) as exc:
            sales_report(now, now - timedelta(days=1))
        assert "start" in exc.value.messages

    def test_future_end_rejected(self):
        now = datetime.now(UTC)
        with pytest.raises(ValidationError) as exc:
            sales_report(now - timedelta(days=1), now + timedelta(days=1))
        assert "end" in exc.value.messages


class TestInventoryReport:
    def test_report(self, create_product):
        create_product(name="USB Cable", price=5.0, stock=0, category="Electronics")
        create_product(name="Wireless Mouse", price=25.0, stock=4, category="Electronics")
        create_product(name="Standing Desk", price=400.0, stock=20, category="Furniture")

        report = inventory_report(threshold=5)

        assert report.total_products == 3
        assert report.out_of_stock_count == 1
        assert report.total_stock_value == 8100.0
        assert [i.name for i in report.low_stock_items] == ["USB Cable", "Wireless Mouse"]
        assert report.low_stock_items[0].recommended_reorder == 10
        assert [c.category for c in report.categories] == ["Furniture", "Electronics"]
        assert report.categories[1].total_stock == 4

    def test_default_threshold(self, create_product):
        create_product(stock=10)
        report = inventory_report()
        assert report.threshold == 10
        assert len(report.low_stock_items) == 1

    def test_negative_threshold_rejected(self):
        with pytest.raises(ValidationError):
            inventory_report(threshold=-1)

    @pytest.mark.parametrize("threshold,expected", [(0, 10), (5, 10), (6, 12), (25, 50)])
    def test_recommended_reorder(self, threshold, expected):
        assert recommended_reorder(threshold) == expected


class TestBulkStockUpdate:
    def test_partial_success(self, create_product):
        mouse = create_product(stock=10)
        lamp = create_product(name="Desk Lamp", stock=3)

        report = bulk_update_stock([(mouse, 25), (lamp, -1), ("missing", 5)])

        assert report.succeeded == 1
        assert report.failed == 2
        assert report.results[0].old_stock == 10
        assert report.results[0].new_stock == 25
        assert report.results[1].error == "Stock cannot be negative"
        assert report.results[2].error == "Product not found"

        repo = current_domain.repository_for(Product)
        assert repo.get(mouse).stock == 25
        assert repo.get(lamp).stock == 3

    def test_cache_invalidated(self, create_product):
        mouse = create_product(stock=10)
        assert get_product(mouse).stock == 10

        bulk_update_stock([(mouse, 2)])

        assert get_product(mouse).stock == 2
