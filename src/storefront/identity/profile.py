"""Profile, password, address book and role management — commands and handler."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.identity.errors import AuthenticationError
from storefront.identity.passwords import MAX_PASSWORD_LENGTH, get_password_hasher
from storefront.identity.registration import validate_password
from storefront.identity.user import User


@storefront.command(part_of="User")
class UpdateProfile:
    user_id: Identifier(required=True)
    full_name: String(required=True, max_length=100)


@storefront.command(part_of="User")
class ChangePassword:
    """Replace the password after re-checking the current one."""

    user_id: Identifier(required=True)
    current_password: String(required=True, max_length=MAX_PASSWORD_LENGTH)
    new_password: String(required=True, max_length=MAX_PASSWORD_LENGTH)


@storefront.command(part_of="User")
class AddAddress:
    user_id: Identifier(required=True)
    street: String(required=True, max_length=200)
    city: String(required=True, max_length=100)
    postal_code: String(required=True, max_length=20)
    country: String(required=True, max_length=100)


@storefront.command(part_of="User")
class RemoveAddress:
    user_id: Identifier(required=True)
    address_id: Identifier(required=True)


@storefront.command(part_of="User")
class PromoteUser:
    """Grant the Admin role to an existing user."""

    user_id: Identifier(required=True)


@storefront.command_handler(part_of=User)
class ManageUserHandler:
    @handle(UpdateProfile)
    def update_profile(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.update_profile(full_name=command.full_name)
        repo.add(user)

    @handle(ChangePassword)
    def change_password(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)

        hasher = get_password_hasher()
        if not hasher.verify(command.current_password, user.password_hash):
            raise AuthenticationError("Current password is incorrect")

        validate_password(command.new_password, field="new_password")
        user.change_password(hasher.hash(command.new_password))
        repo.add(user)

    @handle(AddAddress)
    def add_address(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        address = user.add_address(
            street=command.street,
            city=command.city,
            postal_code=command.postal_code,
            country=command.country,
        )
        repo.add(user)
        return str(address.id)

    @handle(RemoveAddress)
    def remove_address(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.remove_address(command.address_id)
        repo.add(user)

    @handle(PromoteUser)
    def promote_user(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.promote_to_admin()
        repo.add(user)
