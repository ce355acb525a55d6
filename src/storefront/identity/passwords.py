"""Bcrypt password hashing."""

import bcrypt

from storefront.config import get_settings

MIN_PASSWORD_LENGTH = 8
MAX_PASSWORD_LENGTH = 128

# bcrypt reads at most 72 bytes of input
BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


class BcryptPasswordHasher:
    """Hash and verify passwords with bcrypt.

    Hashes are always 60 characters (``$2b$<cost>$<salt><hash>``) and embed
    their own salt, so two hashes of the same password never match.

    Passwords longer than 72 UTF-8 bytes are truncated before hashing and
    before verification, so a long password still round-trips.
    """

    def __init__(self, rounds: int = 12) -> None:
        self._rounds = rounds

    def hash(self, password: str) -> str:
        if not password or not password.strip():
            raise ValueError("Password cannot be empty")

        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Return True when ``password`` matches ``password_hash``.

        Never raises: empty input and malformed hashes simply fail verification.
        """
        if not password or not password_hash:
            return False

        try:
            return bcrypt.checkpw(_password_bytes(password), password_hash.encode("utf-8"))
        except (ValueError, AttributeError):
            return False


def get_password_hasher() -> BcryptPasswordHasher:
    return BcryptPasswordHasher(rounds=get_settings().bcrypt_rounds)
