"""Pydantic request/response schemas for the Identity API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

# --- Request Schemas ---


class RegisterRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "email": "jane.doe@example.com",
                    "password": "correct-horse-battery",
                    "full_name": "Jane Doe",
                }
            ]
        }
    }

    email: str = Field(..., max_length=254)
    password: str = Field(..., max_length=128)
    full_name: str = Field(..., max_length=100)


class LoginRequest(BaseModel):
    model_config = {
        "json_schema_extra": {"examples": [{"email": "jane.doe@example.com", "password": "correct-horse-battery"}]}
    }

    email: str = Field(..., max_length=254)
    password: str = Field(..., max_length=128)


class UpdateProfileRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"full_name": "Jane Smith"}]}}

    full_name: str = Field(..., max_length=100)


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(..., max_length=128)
    new_password: str = Field(..., max_length=128)


class AddressRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "street": "123 Elm Street",
                    "city": "Springfield",
                    "postal_code": "62701",
                    "country": "US",
                }
            ]
        }
    }

    street: str = Field(..., max_length=200)
    city: str = Field(..., max_length=100)
    postal_code: str = Field(..., max_length=20)
    country: str = Field(..., max_length=100)


# --- Response Schemas ---


class AddressResponse(BaseModel):
    id: str
    street: str
    city: str
    postal_code: str
    country: str


class UserResponse(BaseModel):
    id: str
    email: str
    full_name: str
    role: str
    addresses: list[AddressResponse] = []
    created_at: datetime | None = None

    @classmethod
    def from_user(cls, user) -> UserResponse:
        return cls(
            id=str(user.id),
            email=user.email,
            full_name=user.full_name,
            role=user.role,
            addresses=[
                AddressResponse(
                    id=str(a.id),
                    street=a.street,
                    city=a.city,
                    postal_code=a.postal_code,
                    country=a.country,
                )
                for a in user.addresses
            ],
            created_at=user.created_at,
        )


class UserIdResponse(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"user_id": "a1b2c3d4-e5f6-7890-abcd-ef1234567890"}]}}

    user_id: str


class AddressIdResponse(BaseModel):
    address_id: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_at: datetime
    user: UserResponse


class StatusResponse(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"status": "ok"}]}}

    status: str = "ok"
