import os
from pathlib import Path

import pytest
from protean.integrations.pytest import DomainFixture

# Lowest bcrypt cost factor
os.environ.setdefault("STOREFRONT_BCRYPT_ROUNDS", "4")

PASSWORD = "correct-horse-battery"
SHIPPING_ADDRESS = {
    "street": "123 Elm Street",
    "city": "Springfield",
    "postal_code": "62701",
    "country": "US",
}


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    os.environ["PROTEAN_ENV"] = session.config.option.env


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path or "/bdd/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session")
def storefront_bed():
    from storefront.domain import storefront

    bed = DomainFixture(storefront)
    bed.setup()
    yield bed
    bed.teardown()


def _reset_infrastructure():
    from protean import current_domain

    from storefront.catalogue.cache import invalidate_catalogue_cache
    from storefront.payments.duplicates import forget_payment_tokens
    from storefront.payments.gateway import reset_gateway

    for _, provider in current_domain.providers.items():
        provider._data_reset()
    current_domain.event_store.store._data_reset()

    invalidate_catalogue_cache()
    forget_payment_tokens()
    reset_gateway()


@pytest.fixture(autouse=True)
def _ctx(storefront_bed):
    with storefront_bed.domain_context():
        yield
        _reset_infrastructure()


# ---------------------------------------------------------------------------
# Domain setup helpers
# ---------------------------------------------------------------------------
@pytest.fixture()
def register_user():
    from protean import current_domain

    from storefront.identity.registration import RegisterUser

    def _register(email="jane.doe@example.com", password=PASSWORD, full_name="Jane Doe"):
        return current_domain.process(
            RegisterUser(email=email, password=password, full_name=full_name),
            asynchronous=False,
        )

    return _register


@pytest.fixture()
def customer_id(register_user):
    return register_user()


@pytest.fixture()
def admin_id(register_user):
    from protean import current_domain

    from storefront.identity.profile import PromoteUser

    user_id = register_user(email="admin@example.com", full_name="Site Admin")
    current_domain.process(PromoteUser(user_id=user_id), asynchronous=False)
    return user_id


@pytest.fixture()
def create_product():
    from protean import current_domain

    from storefront.catalogue.creation import CreateProduct

    def _create(**overrides):
        fields = {
            "name": "Wireless Mouse",
            "description": "Ergonomic wireless mouse with silent buttons",
            "price": 25.0,
            "currency": "USD",
            "stock": 10,
            "category": "Electronics",
        }
        fields.update(overrides)
        return current_domain.process(CreateProduct(**fields), asynchronous=False)

    return _create


@pytest.fixture()
def place_order():
    """Fill the user's cart with ``(product_id, quantity)`` lines and check out."""
    from protean import current_domain

    from storefront.cart.items import AddToCart
    from storefront.order.placement import PlaceOrder

    def _place(user_id, lines):
        for product_id, quantity in lines:
            current_domain.process(
                AddToCart(user_id=user_id, product_id=product_id, quantity=quantity),
                asynchronous=False,
            )
        return current_domain.process(PlaceOrder(user_id=user_id, **SHIPPING_ADDRESS), asynchronous=False)

    return _place


# ---------------------------------------------------------------------------
# HTTP helpers
# ---------------------------------------------------------------------------
@pytest.fixture()
def client():
    from fastapi.testclient import TestClient

    from storefront.api import create_app

    return TestClient(create_app())


@pytest.fixture()
def auth_headers(client):
    """Log in and return an Authorization header for the account."""

    def _login(email="jane.doe@example.com", password=PASSWORD):
        response = client.post("/api/auth/login", json={"email": email, "password": password})
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    return _login
