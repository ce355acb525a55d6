"""Integration tests for the payment API via TestClient."""

import pytest

from storefront.payments.gateway import set_gateway
from storefront.payments.gateway.fake_adapter import FakeGateway


@pytest.fixture()
def gateway():
    fake = FakeGateway()
    set_gateway(fake)
    return fake


@pytest.fixture()
def headers(customer_id, auth_headers):
    return auth_headers()


@pytest.fixture()
def admin_headers(admin_id, auth_headers):
    return auth_headers(email="admin@example.com")


@pytest.fixture()
def order_id(customer_id, create_product, place_order):
    return place_order(customer_id, [(create_product(price=30.0), 1)])


def _pay(client, headers, order_id, token="tok_visa", method="Credit Card"):
    return client.post(
        "/api/payment/process",
        json={"order_id": order_id, "payment_method": method, "payment_token": token},
        headers=headers,
    )


class TestProcessPaymentEndpoint:
    def test_requires_token(self, client, order_id):
        response = client.post(
            "/api/payment/process",
            json={"order_id": order_id, "payment_method": "Credit Card", "payment_token": "tok_visa"},
        )
        assert response.status_code == 401

    def test_successful_payment(self, client, headers, gateway, order_id):
        response = _pay(client, headers, order_id)
        assert response.status_code == 200
        data = response.json()
        assert data["is_successful"] is True
        assert data["status"] == "Completed"
        assert data["amount"] == 30.0

        order = client.get(f"/api/orders/{order_id}", headers=headers).json()
        assert order["status"] == "Confirmed"

    def test_declined_payment_returns_result(self, client, headers, gateway, order_id):
        gateway.configure(should_succeed=False)
        response = _pay(client, headers, order_id)
        assert response.status_code == 200
        assert response.json()["is_successful"] is False
        assert response.json()["error_message"] == "Card declined"

    def test_duplicate_returns_400(self, client, headers, gateway, order_id):
        _pay(client, headers, order_id)
        response = _pay(client, headers, order_id)
        assert response.status_code == 400

    def test_invalid_method_returns_400(self, client, headers, gateway, order_id):
        assert _pay(client, headers, order_id, method="Bitcoin").status_code == 400

    def test_duplicate_check(self, client, headers, gateway, order_id):
        params = {"order_id": order_id, "payment_token": "tok_visa"}
        assert client.get("/api/payment/duplicate-check", params=params, headers=headers).json()["is_duplicate"] is False

        _pay(client, headers, order_id)

        assert client.get("/api/payment/duplicate-check", params=params, headers=headers).json()["is_duplicate"] is True


class TestPaymentLookupEndpoints:
    def test_payment_for_order(self, client, headers, gateway, order_id):
        payment_id = _pay(client, headers, order_id).json()["payment_id"]

        response = client.get(f"/api/payment/order/{order_id}", headers=headers)
        assert response.status_code == 200
        assert response.json()["id"] == payment_id
        assert response.json()["method"] == "Credit Card"

    def test_no_payment_returns_404(self, client, headers, order_id):
        assert client.get(f"/api/payment/order/{order_id}", headers=headers).status_code == 404

    def test_payment_detail(self, client, headers, gateway, order_id):
        payment_id = _pay(client, headers, order_id).json()["payment_id"]
        response = client.get(f"/api/payment/{payment_id}", headers=headers)
        assert response.status_code == 200
        assert response.json()["status"] == "Completed"

    def test_other_users_payment_returns_404(self, client, headers, gateway, register_user, auth_headers, order_id):
        payment_id = _pay(client, headers, order_id).json()["payment_id"]
        register_user(email="stranger@example.com")
        stranger = auth_headers(email="stranger@example.com")

        assert client.get(f"/api/payment/{payment_id}", headers=stranger).status_code == 404
        assert client.get(f"/api/payment/order/{order_id}", headers=stranger).status_code == 404


class TestRefundEndpoint:
    def test_refund_requires_admin(self, client, headers, gateway, order_id):
        payment_id = _pay(client, headers, order_id).json()["payment_id"]
        response = client.post(f"/api/payment/{payment_id}/refund", json={"amount": 10.0}, headers=headers)
        assert response.status_code == 403

    def test_partial_refund(self, client, headers, admin_headers, gateway, order_id):
        payment_id = _pay(client, headers, order_id).json()["payment_id"]

        response = client.post(
            f"/api/payment/{payment_id}/refund",
            json={"amount": 10.0, "reason": "Damaged item"},
            headers=admin_headers,
        )

        assert response.status_code == 200
        assert response.json()["status"] == "Refunded"
        payment = client.get(f"/api/payment/{payment_id}", headers=admin_headers).json()
        assert payment["refund_amount"] == 10.0

    def test_over_refund_returns_400(self, client, headers, admin_headers, gateway, order_id):
        payment_id = _pay(client, headers, order_id).json()["payment_id"]
        response = client.post(f"/api/payment/{payment_id}/refund", json={"amount": 31.0}, headers=admin_headers)
        assert response.status_code == 400
