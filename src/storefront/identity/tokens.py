"""JWT access tokens (PyJWT, HMAC-SHA256)."""

from datetime import UTC, datetime, timedelta
from uuid import uuid4

import jwt
from jwt.exceptions import InvalidTokenError

from storefront.config import get_settings
from storefront.identity.errors import AuthenticationError


class JWTService:
    """Issue and validate signed access tokens.

    Tokens carry the user id as ``sub`` along with email, display name and
    role, and are bound to the configured issuer and audience. Validation
    checks signature, issuer, audience and expiry with no clock skew.
    """

    algorithm = "HS256"

    def __init__(self, secret_key: str, issuer: str, audience: str, expiration_hours: int = 24) -> None:
        if len(secret_key) < 32:
            raise ValueError("JWT secret key must be at least 32 bytes (256 bits)")

        self._secret_key = secret_key
        self._issuer = issuer
        self._audience = audience
        self._expiration = timedelta(hours=expiration_hours)

    def expires_at(self, issued_at: datetime | None = None) -> datetime:
        return (issued_at or datetime.now(UTC)) + self._expiration

    def generate(self, user_id: str, email: str, full_name: str, role: str) -> tuple[str, datetime]:
        """Return a signed token and its expiry."""
        now = datetime.now(UTC)
        expires_at = self.expires_at(now)
        payload = {
            "sub": str(user_id),
            "email": email,
            "name": full_name,
            "role": role,
            "iss": self._issuer,
            "aud": self._audience,
            "iat": int(now.timestamp()),
            "exp": int(expires_at.timestamp()),
            "jti": uuid4().hex,
        }
        token: str = jwt.encode(payload, self._secret_key, algorithm=self.algorithm)
        return token, expires_at

    def decode(self, token: str) -> dict:
        try:
            return jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.algorithm],
                issuer=self._issuer,
                audience=self._audience,
                options={"require": ["exp", "sub"]},
            )
        except InvalidTokenError as exc:
            raise AuthenticationError("Invalid or expired token") from exc


def get_token_service() -> JWTService:
    settings = get_settings()
    return JWTService(
        secret_key=settings.jwt_secret_key,
        issuer=settings.jwt_issuer,
        audience=settings.jwt_audience,
        expiration_hours=settings.jwt_expiration_hours,
    )
