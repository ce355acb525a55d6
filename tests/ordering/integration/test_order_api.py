"""Integration tests for the order API via TestClient."""

import pytest
from protean import current_domain

from storefront.catalogue.product import Product

ADDRESS = {"street": "123 Elm Street", "city": "Springfield", "postal_code": "62701", "country": "US"}


@pytest.fixture()
def headers(customer_id, auth_headers):
    return auth_headers()


@pytest.fixture()
def admin_headers(admin_id, auth_headers):
    return auth_headers(email="admin@example.com")


def _checkout(client, headers, product_id, quantity=1):
    client.post("/api/cart/items", json={"product_id": product_id, "quantity": quantity}, headers=headers)
    response = client.post("/api/orders", json=ADDRESS, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["order_id"]


class TestPlaceOrderEndpoint:
    def test_place_order(self, client, headers, create_product):
        product_id = create_product(price=20.0, stock=5)
        order_id = _checkout(client, headers, product_id, quantity=2)

        response = client.get(f"/api/orders/{order_id}", headers=headers)
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "Pending"
        assert data["total"] == 40.0
        assert data["shipping_address"]["city"] == "Springfield"
        assert current_domain.repository_for(Product).get(product_id).stock == 3

    def test_empty_cart_returns_400(self, client, headers):
        response = client.post("/api/orders", json=ADDRESS, headers=headers)
        assert response.status_code == 400

    def test_missing_address_fields_return_422(self, client, headers):
        response = client.post("/api/orders", json={"street": "123 Elm Street"}, headers=headers)
        assert response.status_code == 422


class TestOrderHistoryEndpoint:
    def test_lists_own_orders(self, client, headers, create_product):
        first = _checkout(client, headers, create_product())
        second = _checkout(client, headers, create_product(name="USB Cable"))

        response = client.get("/api/orders", headers=headers)
        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 2
        assert {o["id"] for o in data["items"]} == {first, second}

    def test_status_filter(self, client, headers, create_product):
        _checkout(client, headers, create_product())
        response = client.get("/api/orders", params={"status": "Delivered"}, headers=headers)
        assert response.json()["total"] == 0

    def test_unknown_status_filter_returns_400(self, client, headers):
        response = client.get("/api/orders", params={"status": "Lost"}, headers=headers)
        assert response.status_code == 400

    def test_other_users_order_returns_404(self, client, headers, register_user, auth_headers, create_product):
        order_id = _checkout(client, headers, create_product())
        register_user(email="stranger@example.com")
        stranger = auth_headers(email="stranger@example.com")

        assert client.get(f"/api/orders/{order_id}", headers=stranger).status_code == 404

    def test_admin_can_read_any_order(self, client, headers, admin_headers, create_product):
        order_id = _checkout(client, headers, create_product())
        assert client.get(f"/api/orders/{order_id}", headers=admin_headers).status_code == 200

    def test_all_orders_requires_admin(self, client, headers, admin_headers, create_product):
        _checkout(client, headers, create_product())
        assert client.get("/api/orders/all", headers=headers).status_code == 403

        response = client.get("/api/orders/all", headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["total"] == 1


class TestCancelAndStatusEndpoints:
    def test_cancel(self, client, headers, create_product):
        product_id = create_product(stock=5)
        order_id = _checkout(client, headers, product_id, quantity=2)

        response = client.post(f"/api/orders/{order_id}/cancel", headers=headers)

        assert response.status_code == 200
        assert response.json()["status"] == "Cancelled"
        assert current_domain.repository_for(Product).get(product_id).stock == 5

    def test_cancel_twice_returns_400(self, client, headers, create_product):
        order_id = _checkout(client, headers, create_product())
        client.post(f"/api/orders/{order_id}/cancel", headers=headers)
        assert client.post(f"/api/orders/{order_id}/cancel", headers=headers).status_code == 400

    def test_status_update_requires_admin(self, client, headers, create_product):
        order_id = _checkout(client, headers, create_product())
        response = client.patch(f"/api/orders/{order_id}/status", json={"status": "Confirmed"}, headers=headers)
        assert response.status_code == 403

    def test_admin_ships_order(self, client, headers, admin_headers, create_product):
        order_id = _checkout(client, headers, create_product())
        for status in ("Confirmed", "Processing", "Shipped"):
            response = client.patch(
                f"/api/orders/{order_id}/status", json={"status": status}, headers=admin_headers
            )
            assert response.status_code == 200

        data = response.json()
        assert data["status"] == "Shipped"
        assert data["shipped_at"] is not None

        assert client.post(f"/api/orders/{order_id}/cancel", headers=headers).status_code == 400

    def test_invalid_transition_returns_400(self, client, headers, admin_headers, create_product):
        order_id = _checkout(client, headers, create_product())
        response = client.patch(f"/api/orders/{order_id}/status", json={"status": "Delivered"}, headers=admin_headers)
        assert response.status_code == 400
