"""Request/response schemas for auth endpoints."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from kaisla.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
)
from kaisla.schemas.base import CamelModel


class LoginRequest(BaseModel):
    """Credentials for login."""

    username: str = Field(..., min_length=1, max_length=USERNAME_MAX_LEN, description="Username")
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN, description="Password")


class UserSummary(CamelModel):
    """Public user fields returned with a token and by the profile endpoint."""

    id: UUID
    username: str
    role: str


class LoginResponse(BaseModel):
    """JWT access token returned after successful login."""

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    user: UserSummary


class CurrentUser(BaseModel):
    """Authenticated user (id, username, role) for dependency injection."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    username: str
    role: str


class UpdateCredentialsRequest(CamelModel):
    """
    Body of PATCH /auth/credentials.

    currentPassword is always required; username and newPassword are each
    optional, the service rejects a request that supplies neither.
    """

    current_password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN)
    username: str | None = None
    new_password: str | None = None
    confirm_password: str | None = None

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip()
        if len(v) < USERNAME_MIN_LEN:
            raise ValueError("Username cannot be empty")
        if len(v) > USERNAME_MAX_LEN:
            raise ValueError(f"Username must be at most {USERNAME_MAX_LEN} characters long")
        return v

    @field_validator("new_password")
    @classmethod
    def validate_new_password(cls, v: str | None) -> str | None:
        if v is None:
            return None
        if len(v) < PASSWORD_MIN_LEN:
            raise ValueError(
                f"New password must be at least {PASSWORD_MIN_LEN} characters long"
            )
        if len(v) > PASSWORD_MAX_LEN:
            raise ValueError(
                f"New password must be at most {PASSWORD_MAX_LEN} characters long"
            )
        return v

    @model_validator(mode="after")
    def check_confirm_password(self) -> "UpdateCredentialsRequest":
        if self.confirm_password is not None and self.confirm_password != self.new_password:
            raise ValueError("Password confirmation does not match new password")
        return self


class UserResponse(CamelModel):
    """User record without the password hash."""

    id: UUID
    username: str
    role: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
