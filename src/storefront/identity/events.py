"""Domain events for the User aggregate."""

from protean.fields import DateTime, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="User")
class UserRegistered:
    """A new account was created."""

    __version__ = 1

    user_id: Identifier(required=True)
    email: String(required=True)
    full_name: String(required=True)
    registered_at: DateTime(required=True)


@storefront.event(part_of="User")
class UserProfileUpdated:
    __version__ = 1

    user_id: Identifier(required=True)
    full_name: String(required=True)


@storefront.event(part_of="User")
class UserPasswordChanged:
    __version__ = 1

    user_id: Identifier(required=True)
    changed_at: DateTime(required=True)


@storefront.event(part_of="User")
class UserPromoted:
    """A user was granted a new role."""

    __version__ = 1

    user_id: Identifier(required=True)
    role: String(required=True)
