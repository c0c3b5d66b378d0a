"""Account, login and profile payloads."""
from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import Field, field_validator, model_validator

from .base import CamelModel

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class RegisterRequest(CamelModel):
    username: str = Field(min_length=3, max_length=50)
    email: str = Field(pattern=EMAIL_PATTERN, max_length=255)
    password: str = Field(min_length=6)

    @field_validator("email")
    @classmethod
    def _lower_email(cls, value: str) -> str:
        return value.strip().lower()


class LoginRequest(CamelModel):
    identifier: str = Field(min_length=1)
    password: str = Field(min_length=6)


class TokenResponse(CamelModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int


class UserUpdate(CamelModel):
    username: str | None = Field(default=None, min_length=3, max_length=50)
    bio: str | None = None
    profile_picture: str | None = None

    @model_validator(mode="after")
    def _username_not_null(self) -> "UserUpdate":
        if "username" in self.model_fields_set and self.username is None:
            raise ValueError("username cannot be null")
        return self


class UserRead(CamelModel):
    id: UUID
    username: str
    email: str
    profile_picture: str | None = None
    bio: str | None = None
    created_at: datetime
    updated_at: datetime
