"""Integration tests for the account API via TestClient."""

from protean import current_domain

from storefront.identity.user import User


def _register(client, email="jane.doe@example.com", password="correct-horse-battery", full_name="Jane Doe"):
    response = client.post(
        "/api/auth/register",
        json={"email": email, "password": password, "full_name": full_name},
    )
    assert response.status_code == 201, response.text
    return response.json()["user_id"]


class TestRegisterEndpoint:
    def test_register_returns_201(self, client):
        user_id = _register(client)
        user = current_domain.repository_for(User).get(user_id)
        assert user.email == "jane.doe@example.com"

    def test_duplicate_email_returns_400(self, client):
        _register(client)
        response = client.post(
            "/api/auth/register",
            json={"email": "Jane.Doe@example.com", "password": "another-password", "full_name": "Jane Two"},
        )
        assert response.status_code == 400

    def test_weak_password_returns_400(self, client):
        response = client.post(
            "/api/auth/register",
            json={"email": "jane.doe@example.com", "password": "short", "full_name": "Jane Doe"},
        )
        assert response.status_code == 400

    def test_long_password_registers_and_logs_in(self, client):
        password = "p" * 100
        response = client.post(
            "/api/auth/register",
            json={"email": "jane.doe@example.com", "password": password, "full_name": "Jane Doe"},
        )
        assert response.status_code == 201

        login = client.post("/api/auth/login", json={"email": "jane.doe@example.com", "password": password})
        assert login.status_code == 200


class TestLoginEndpoint:
    def test_login_returns_token_and_user(self, client):
        user_id = _register(client)
        response = client.post(
            "/api/auth/login",
            json={"email": "jane.doe@example.com", "password": "correct-horse-battery"},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["token_type"] == "bearer"
        assert data["access_token"]
        assert data["user"]["id"] == user_id
        assert data["user"]["role"] == "Customer"

    def test_bad_credentials_return_401(self, client):
        _register(client)
        response = client.post(
            "/api/auth/login",
            json={"email": "jane.doe@example.com", "password": "wrong-password"},
        )
        assert response.status_code == 401
        assert response.json()["error"] == "Invalid email or password"


class TestProfileEndpoints:
    def test_profile_requires_token(self, client):
        response = client.get("/api/auth/profile")
        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_invalid_token_returns_401(self, client):
        response = client.get("/api/auth/profile", headers={"Authorization": "Bearer not-a-token"})
        assert response.status_code == 401

    def test_get_profile(self, client, auth_headers):
        _register(client)
        response = client.get("/api/auth/profile", headers=auth_headers())
        assert response.status_code == 200
        assert response.json()["full_name"] == "Jane Doe"

    def test_update_profile(self, client, auth_headers):
        _register(client)
        response = client.put("/api/auth/profile", json={"full_name": "Jane Smith"}, headers=auth_headers())
        assert response.status_code == 200
        assert response.json()["full_name"] == "Jane Smith"

    def test_change_password_then_login_with_new_password(self, client, auth_headers):
        _register(client)
        response = client.put(
            "/api/auth/password",
            json={"current_password": "correct-horse-battery", "new_password": "new-secret-passphrase"},
            headers=auth_headers(),
        )
        assert response.status_code == 200
        assert response.json()["status"] == "ok"

        auth_headers(password="new-secret-passphrase")

    def test_change_password_with_wrong_current_returns_401(self, client, auth_headers):
        _register(client)
        response = client.put(
            "/api/auth/password",
            json={"current_password": "not-my-password", "new_password": "new-secret-passphrase"},
            headers=auth_headers(),
        )
        assert response.status_code == 401


class TestAddressEndpoints:
    def test_add_and_remove_address(self, client, auth_headers):
        _register(client)
        headers = auth_headers()
        response = client.post(
            "/api/auth/addresses",
            json={"street": "1 Main St", "city": "Springfield", "postal_code": "62701", "country": "US"},
            headers=headers,
        )
        assert response.status_code == 201
        address_id = response.json()["address_id"]

        profile = client.get("/api/auth/profile", headers=headers).json()
        assert [a["id"] for a in profile["addresses"]] == [address_id]

        response = client.delete(f"/api/auth/addresses/{address_id}", headers=headers)
        assert response.status_code == 200
        assert client.get("/api/auth/profile", headers=headers).json()["addresses"] == []
