"""Pydantic request/response schemas."""

from kaisla.schemas.auth import (
    CurrentUser,
    LoginRequest,
    LoginResponse,
    UpdateCredentialsRequest,
    UserResponse,
    UserSummary,
)
from kaisla.schemas.base import CamelModel
from kaisla.schemas.health import HealthResponse

__all__ = [
    "CamelModel",
    "CurrentUser",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "UpdateCredentialsRequest",
    "UserResponse",
    "UserSummary",
]
