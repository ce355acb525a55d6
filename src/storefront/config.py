"""Application settings loaded from the environment.

Protean's ``domain.toml`` covers databases, brokers and event processing.
Everything else the storefront needs at runtime (token signing, hashing cost,
payment gateway selection, report thresholds) lives here and is read from
``STOREFRONT_*`` environment variables.

Usage:
    from storefront.config import get_settings

    settings = get_settings()
    settings.jwt_expiration_hours
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Flat storefront settings."""

    jwt_secret_key: str = Field(
        default="storefront-development-secret-key-change-me",
        description="HMAC secret used to sign access tokens (at least 32 characters)",
    )
    jwt_issuer: str = Field(default="storefront")
    jwt_audience: str = Field(default="storefront-clients")
    jwt_expiration_hours: int = Field(default=24, ge=1)

    bcrypt_rounds: int = Field(
        default=12,
        description="bcrypt cost factor for password hashing",
    )

    payment_gateway: str = Field(
        default="fake",
        description="Payment gateway adapter: 'fake' or 'stripe'",
    )
    stripe_secret_key: str | None = Field(default=None)
    duplicate_payment_window_seconds: int = Field(default=300, ge=1)

    low_stock_threshold: int = Field(default=10, ge=0)

    model_config = SettingsConfigDict(
        env_prefix="STOREFRONT_",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("jwt_secret_key")
    @classmethod
    def validate_secret_length(cls, v: str) -> str:
        if len(v) < 32:
            raise ValueError("JWT secret key must be at least 32 characters")
        return v

    @field_validator("bcrypt_rounds")
    @classmethod
    def validate_bcrypt_rounds(cls, v: int) -> int:
        if not 4 <= v <= 20:
            raise ValueError("bcrypt rounds must be between 4 and 20")
        return v

    @field_validator("payment_gateway")
    @classmethod
    def validate_gateway(cls, v: str) -> str:
        v = v.lower()
        if v not in ("fake", "stripe"):
            raise ValueError("payment_gateway must be 'fake' or 'stripe'")
        return v


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
