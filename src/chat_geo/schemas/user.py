"""User-related Pydantic schemas."""

import re
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _validate_email(value: str | None) -> str | None:
    if value is None:
        return value
    value = value.strip().lower()
    if not _EMAIL_PATTERN.match(value):
        raise ValueError("Email must be a valid address")
    return value


class RegisterRequest(BaseModel):
    """Schema for account registration."""

    fullname: str = Field(..., min_length=1, max_length=200)
    username: str = Field(..., min_length=1, max_length=150)
    email: str = Field(..., min_length=3, max_length=320)
    password: str = Field(..., min_length=1)
    avatar: str | None = Field(None, description="Optional avatar reference")

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Normalize and validate the email address."""
        return _validate_email(v)  # type: ignore[return-value]


class LoginRequest(BaseModel):
    """Schema for login submissions."""

    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UserUpdate(BaseModel):
    """Sparse profile update; omitted fields are left untouched."""

    fullname: str | None = Field(None, min_length=1, max_length=200)
    username: str | None = Field(None, min_length=1, max_length=150)
    email: str | None = Field(None, min_length=3, max_length=320)
    avatar: str | None = Field(None, min_length=1)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str | None) -> str | None:
        """Normalize and validate the email address."""
        return _validate_email(v)


class UserResponse(BaseModel):
    """Public user profile. The credential hash is never part of it."""

    uuid: str
    fullname: str
    username: str
    email: str
    avatar: str | None = None
    created_on: datetime
    modified_on: datetime

    model_config = ConfigDict(from_attributes=True)


class LoginResponse(BaseModel):
    """Response returned after successful login."""

    token: str = Field(..., description="JWT access token")
    token_type: str = Field("bearer", description="Token type")
    user: UserResponse
