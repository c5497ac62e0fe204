"""Login, profile and credential update."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from kaisla.api.deps import get_current_user, public
from kaisla.core.database import get_db
from kaisla.schemas.auth import (
    CurrentUser,
    LoginRequest,
    LoginResponse,
    UpdateCredentialsRequest,
    UserResponse,
    UserSummary,
)
from kaisla.services import auth as auth_service

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
@public
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
) -> LoginResponse:
    """
    Authenticate with username and password; returns a JWT access token.
    Include the token in the Authorization header as: Bearer <access_token>
    """
    return auth_service.login(db, body.username, body.password)


@router.get("/profile", response_model=UserSummary)
def get_profile(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> UserSummary:
    return UserSummary(id=current_user.id, username=current_user.username, role=current_user.role)


@router.patch("/credentials", response_model=UserResponse)
def update_credentials(
    body: UpdateCredentialsRequest,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> UserResponse:
    """
    Change the caller's username and/or password.

    currentPassword is always required. Send username, newPassword (with an
    optional matching confirmPassword) or both.
    """
    return auth_service.update_credentials(db, current_user.id, body)
