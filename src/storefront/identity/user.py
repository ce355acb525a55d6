"""User aggregate root with UserAddress entity."""

import re
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, String

from storefront.domain import storefront

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
MAX_EMAIL_LENGTH = 254
MIN_PASSWORD_HASH_LENGTH = 60


class Role(Enum):
    """Enumeration of user roles."""

    CUSTOMER = "Customer"
    ADMIN = "Admin"


def normalize_email(email):
    return (email or "").strip().lower()


@storefront.entity(part_of="User")
class UserAddress:
    """An entry in a user's address book."""

    street: String(required=True, max_length=200)
    city: String(required=True, max_length=100)
    postal_code: String(required=True, max_length=20)
    country: String(required=True, max_length=100)

    def matches(self, street, city, postal_code, country):
        return (
            self.street.lower() == street.lower()
            and self.city.lower() == city.lower()
            and self.postal_code.lower() == postal_code.lower()
            and self.country.lower() == country.lower()
        )


@storefront.aggregate
class User:
    """A registered account on the storefront.

    Email addresses are stored lower-cased and trimmed and are unique across
    users. Only a bcrypt hash of the password is ever kept.
    """

    email: String(required=True, max_length=MAX_EMAIL_LENGTH, unique=True)
    password_hash: String(required=True, max_length=255)
    full_name: String(required=True, max_length=100)
    role: String(choices=Role, default=Role.CUSTOMER.value)
    addresses: HasMany(UserAddress)
    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def email_must_be_well_formed(self):
        if not EMAIL_PATTERN.match(self.email or ""):
            raise ValidationError({"email": [f"Invalid email address: {self.email!r}"]})

    @invariant.post
    def password_hash_must_look_like_bcrypt(self):
        if len(self.password_hash or "") < MIN_PASSWORD_HASH_LENGTH:
            raise ValidationError({"password_hash": ["Password hash is not a valid bcrypt hash"]})

    @invariant.post
    def full_name_must_have_minimum_length(self):
        if len((self.full_name or "").strip()) < 2:
            raise ValidationError({"full_name": ["Full name must be at least 2 characters"]})

    @classmethod
    def register(cls, email, password_hash, full_name):
        from storefront.identity.events import UserRegistered

        now = datetime.now(UTC)
        user = cls(
            email=normalize_email(email),
            password_hash=password_hash,
            full_name=(full_name or "").strip(),
            role=Role.CUSTOMER.value,
            created_at=now,
            updated_at=now,
        )
        user.raise_(
            UserRegistered(
                user_id=user.id,
                email=user.email,
                full_name=user.full_name,
                registered_at=now,
            )
        )
        return user

    @property
    def is_admin(self):
        return self.role == Role.ADMIN.value

    def update_profile(self, full_name):
        from storefront.identity.events import UserProfileUpdated

        self.full_name = (full_name or "").strip()
        self.updated_at = datetime.now(UTC)
        self.raise_(UserProfileUpdated(user_id=self.id, full_name=self.full_name))

    def change_password(self, new_password_hash):
        from storefront.identity.events import UserPasswordChanged

        now = datetime.now(UTC)
        self.password_hash = new_password_hash
        self.updated_at = now
        self.raise_(UserPasswordChanged(user_id=self.id, changed_at=now))

    def add_address(self, street, city, postal_code, country):
        street, city, postal_code, country = (v.strip() for v in (street, city, postal_code, country))
        if any(a.matches(street, city, postal_code, country) for a in self.addresses):
            raise ValidationError({"addresses": ["Address already exists in the address book"]})

        address = UserAddress(street=street, city=city, postal_code=postal_code, country=country)
        self.add_addresses(address)
        self.updated_at = datetime.now(UTC)
        return address

    def remove_address(self, address_id):
        address = next((a for a in self.addresses if str(a.id) == str(address_id)), None)
        if address is None:
            raise ValidationError({"addresses": [f"Address {address_id} not found"]})

        self.remove_addresses(address)
        self.updated_at = datetime.now(UTC)

    def promote_to_admin(self):
        from storefront.identity.events import UserPromoted

        if self.is_admin:
            raise ValidationError({"role": ["User is already an admin"]})

        self.role = Role.ADMIN.value
        self.updated_at = datetime.now(UTC)
        self.raise_(UserPromoted(user_id=self.id, role=self.role))
