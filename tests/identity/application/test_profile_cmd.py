"""Application tests for profile, password, address book and role commands."""

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError

from storefront.identity.errors import AuthenticationError
from storefront.identity.passwords import get_password_hasher
from storefront.identity.profile import AddAddress, ChangePassword, PromoteUser, RemoveAddress, UpdateProfile
from storefront.identity.user import User


def _user(user_id):
    return current_domain.repository_for(User).get(user_id)


def _add_address(user_id, street="1 Main St"):
    return current_domain.process(
        AddAddress(user_id=user_id, street=street, city="Springfield", postal_code="62701", country="US"),
        asynchronous=False,
    )


class TestUpdateProfileCommand:
    def test_update_profile(self, customer_id):
        current_domain.process(UpdateProfile(user_id=customer_id, full_name="Jane Smith"), asynchronous=False)
        assert _user(customer_id).full_name == "Jane Smith"

    def test_unknown_user(self):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(UpdateProfile(user_id="missing", full_name="Jane Smith"), asynchronous=False)


class TestChangePasswordCommand:
    def test_change_password(self, customer_id):
        current_domain.process(
            ChangePassword(
                user_id=customer_id,
                current_password="correct-horse-battery",
                new_password="new-secret-passphrase",
            ),
            asynchronous=False,
        )
        assert get_password_hasher().verify("new-secret-passphrase", _user(customer_id).password_hash)

    def test_wrong_current_password(self, customer_id):
        with pytest.raises(AuthenticationError):
            current_domain.process(
                ChangePassword(
                    user_id=customer_id,
                    current_password="not-my-password",
                    new_password="new-secret-passphrase",
                ),
                asynchronous=False,
            )

    def test_new_password_too_short(self, customer_id):
        with pytest.raises(ValidationError) as exc:
            current_domain.process(
                ChangePassword(
                    user_id=customer_id,
                    current_password="correct-horse-battery",
                    new_password="short",
                ),
                asynchronous=False,
            )
        assert "new_password" in exc.value.messages


class TestAddressBookCommands:
    def test_add_address_returns_id(self, customer_id):
        address_id = _add_address(customer_id)
        addresses = _user(customer_id).addresses
        assert [str(a.id) for a in addresses] == [address_id]

    def test_duplicate_address_rejected(self, customer_id):
        _add_address(customer_id)
        with pytest.raises(ValidationError):
            _add_address(customer_id, street="1 MAIN ST")

    def test_remove_address(self, customer_id):
        keep = _add_address(customer_id, street="1 Main St")
        drop = _add_address(customer_id, street="2 Side St")

        current_domain.process(RemoveAddress(user_id=customer_id, address_id=drop), asynchronous=False)

        assert [str(a.id) for a in _user(customer_id).addresses] == [keep]


class TestPromoteUserCommand:
    def test_promote(self, customer_id):
        current_domain.process(PromoteUser(user_id=customer_id), asynchronous=False)
        assert _user(customer_id).is_admin
