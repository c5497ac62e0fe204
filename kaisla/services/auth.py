"""Authentication: credential checks, token issuing and credential updates."""

import logging
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from kaisla.core.errors import BadRequestError, ConflictError, NotFoundError, UnauthorizedError
from kaisla.core.security import create_access_token, hash_password, verify_password
from kaisla.models import User
from kaisla.schemas.auth import (
    LoginResponse,
    UpdateCredentialsRequest,
    UserResponse,
    UserSummary,
)

logger = logging.getLogger(__name__)


def validate_user(db: Session, username: str, password: str) -> User | None:
    """Return the user when username exists and password matches its hash, else None."""
    user = db.query(User).filter(User.username == username).first()
    if user is None:
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user


def login(db: Session, username: str, password: str) -> LoginResponse:
    user = validate_user(db, username, password)
    if user is None:
        logger.warning("Login failed for username=%s", username)
        raise UnauthorizedError("Invalid credentials")
    token = create_access_token(sub=user.id, username=user.username, role=user.role)
    logger.info("User logged in: %s", user.id)
    return LoginResponse(
        access_token=token,
        token_type="bearer",
        user=UserSummary(id=user.id, username=user.username, role=user.role),
    )


def get_user_by_id(db: Session, user_id: UUID) -> User | None:
    return db.query(User).filter(User.id == user_id).first()


def update_credentials(
    db: Session,
    user_id: UUID,
    body: UpdateCredentialsRequest,
) -> UserResponse:
    """
    Change username and/or password after re-verifying the current password.

    Raises BadRequestError when neither field is supplied, NotFoundError when
    the user is gone, UnauthorizedError when currentPassword is wrong, and
    ConflictError when the new username belongs to someone else. The user row
    is only mutated once every check has passed.
    """
    if not body.username and not body.new_password:
        raise BadRequestError(
            "At least one field (username or newPassword) must be provided"
        )

    user = get_user_by_id(db, user_id)
    if user is None:
        raise NotFoundError("User not found")

    if not verify_password(body.current_password, user.password_hash):
        logger.warning("Credential update rejected for user %s: wrong current password", user_id)
        raise UnauthorizedError("Current password is incorrect")

    new_username: str | None = None
    if body.username and body.username != user.username:
        existing = db.query(User).filter(User.username == body.username).first()
        if existing is not None:
            raise ConflictError("Username is already taken")
        new_username = body.username

    new_hash = hash_password(body.new_password) if body.new_password else None

    if new_username is not None:
        user.username = new_username
    if new_hash is not None:
        user.password_hash = new_hash
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ConflictError("Username is already taken", cause=e) from e
    db.refresh(user)

    logger.info(
        "Credentials updated for user %s (username_changed=%s, password_changed=%s)",
        user.id,
        new_username is not None,
        new_hash is not None,
    )
    return UserResponse.model_validate(user)
