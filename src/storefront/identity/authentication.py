"""Credential checks and token issue for login."""

from dataclasses import dataclass
from datetime import datetime

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.identity.errors import AuthenticationError
from storefront.identity.passwords import get_password_hasher
from storefront.identity.tokens import get_token_service
from storefront.identity.user import User

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class AuthToken:
    token: str
    expires_at: datetime
    user: User


def authenticate(email: str, password: str) -> AuthToken:
    """Verify credentials and issue an access token.

    Unknown emails and wrong passwords fail with the same message so callers
    cannot tell which accounts exist.
    """
    user = current_domain.repository_for(User).find_by_email(email)
    if user is None or not get_password_hasher().verify(password, user.password_hash):
        logger.warning("Login rejected", email=(email or "").strip().lower())
        raise AuthenticationError("Invalid email or password")

    token, expires_at = get_token_service().generate(
        user_id=user.id,
        email=user.email,
        full_name=user.full_name,
        role=user.role,
    )
    logger.info("User logged in", user_id=str(user.id))
    return AuthToken(token=token, expires_at=expires_at, user=user)


def user_from_token(token: str) -> User:
    """Resolve the user an access token was issued to."""
    claims = get_token_service().decode(token)
    try:
        return current_domain.repository_for(User).get(claims["sub"])
    except ObjectNotFoundError as exc:
        raise AuthenticationError("Invalid or expired token") from exc
