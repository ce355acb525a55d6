"""Application tests for user registration."""

import pytest
from protean import current_domain
from protean.exceptions import ValidationError

from storefront.cart.cart import Cart
from storefront.identity.passwords import get_password_hasher
from storefront.identity.registration import RegisterUser
from storefront.identity.user import User


def _register(email="jane.doe@example.com", password="correct-horse-battery", full_name="Jane Doe"):
    return current_domain.process(
        RegisterUser(email=email, password=password, full_name=full_name),
        asynchronous=False,
    )


class TestRegisterUserCommand:
    def test_register_persists_user(self):
        user_id = _register()
        user = current_domain.repository_for(User).get(user_id)
        assert user.email == "jane.doe@example.com"
        assert user.full_name == "Jane Doe"

    def test_password_stored_as_hash(self):
        user_id = _register()
        user = current_domain.repository_for(User).get(user_id)
        assert user.password_hash != "correct-horse-battery"
        assert get_password_hasher().verify("correct-horse-battery", user.password_hash)

    def test_register_creates_empty_cart(self):
        user_id = _register()
        cart = current_domain.repository_for(Cart).for_user(user_id)
        assert cart is not None
        assert cart.is_empty()

    def test_duplicate_email_rejected_ignoring_case(self):
        _register()
        with pytest.raises(ValidationError) as exc:
            _register(email="  JANE.DOE@example.com")
        assert "email" in exc.value.messages

    def test_short_password_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _register(password="short")
        assert "password" in exc.value.messages

    def test_invalid_email_rejected(self):
        with pytest.raises(ValidationError):
            _register(email="jane.doe")

    def test_failed_registration_leaves_no_user(self):
        with pytest.raises(ValidationError):
            _register(password="short")
        assert current_domain.repository_for(User).find_by_email("jane.doe@example.com") is None

    @pytest.mark.parametrize("length", [72, 73, 100, 128])
    def test_long_passwords_accepted(self, length):
        password = "p" * length
        user_id = _register(password=password)
        user = current_domain.repository_for(User).get(user_id)
        assert get_password_hasher().verify(password, user.password_hash)

    def test_password_over_128_characters_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _register(password="p" * 129)
        assert "password" in exc.value.messages
