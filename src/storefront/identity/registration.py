"""User registration — command and handler."""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.domain import storefront
from storefront.identity.passwords import MAX_PASSWORD_LENGTH, MIN_PASSWORD_LENGTH, get_password_hasher
from storefront.identity.user import User

logger = structlog.get_logger(__name__)


def validate_password(password, field="password"):
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError({field: [f"Password must be at least {MIN_PASSWORD_LENGTH} characters"]})
    if len(password) > MAX_PASSWORD_LENGTH:
        raise ValidationError({field: [f"Password cannot exceed {MAX_PASSWORD_LENGTH} characters"]})


@storefront.command(part_of="User")
class RegisterUser:
    """Create a new account with an empty shopping cart."""

    email: String(required=True, max_length=254)
    password: String(required=True, max_length=MAX_PASSWORD_LENGTH)
    full_name: String(required=True, max_length=100)


@storefront.command_handler(part_of=User)
class RegisterUserHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        repo = current_domain.repository_for(User)
        if repo.email_exists(command.email):
            raise ValidationError({"email": [f"User with email '{command.email.strip().lower()}' already exists"]})

        validate_password(command.password)

        user = User.register(
            email=command.email,
            password_hash=get_password_hasher().hash(command.password),
            full_name=command.full_name,
        )
        repo.add(user)
        current_domain.repository_for(Cart).add(Cart.create(user_id=user.id))

        logger.info("User registered", user_id=str(user.id))
        return str(user.id)
