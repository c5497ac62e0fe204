"""JWT guard applied to every API route, the @public marker and get_current_user."""

import logging
import uuid
from collections.abc import Callable
from typing import Annotated, Any, TypeVar

import jwt
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from kaisla.core.database import get_db
from kaisla.core.security import decode_access_token
from kaisla.models.user import User
from kaisla.schemas.auth import CurrentUser

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)

PUBLIC_ATTR = "__kaisla_public__"

F = TypeVar("F", bound=Callable[..., Any])


def public(endpoint: F) -> F:
    """Mark an endpoint as reachable without a token."""
    setattr(endpoint, PUBLIC_ATTR, True)
    return endpoint


def is_public(request: Request) -> bool:
    endpoint = request.scope.get("endpoint")
    return bool(getattr(endpoint, PUBLIC_ATTR, False))


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def jwt_guard(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> None:
    """
    Router-level dependency: public endpoints pass through untouched; every
    other endpoint needs a valid Bearer JWT whose user still exists. The user
    is stored on request.state.user for get_current_user.
    """
    if is_public(request):
        logger.debug("Public route, skipping token check: %s", request.url.path)
        return
    if credentials is None:
        logger.debug("Missing bearer token: %s", request.url.path)
        raise _unauthorized("Not authenticated")
    try:
        payload = decode_access_token(credentials.credentials)
    except jwt.PyJWTError:
        logger.debug("Rejected token on %s", request.url.path)
        raise _unauthorized("Invalid or expired token")
    sub = payload.get("sub")
    if not sub:
        raise _unauthorized("Invalid token payload")
    try:
        user_id = uuid.UUID(str(sub))
    except ValueError:
        raise _unauthorized("Invalid token payload")
    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise _unauthorized("User not found")
    request.state.user = CurrentUser(id=user.id, username=user.username, role=user.role)


def get_current_user(request: Request) -> CurrentUser:
    """Dependency: the user authenticated by jwt_guard. Raises 401 on public routes."""
    user = getattr(request.state, "user", None)
    if user is None:
        raise _unauthorized("Not authenticated")
    return user
