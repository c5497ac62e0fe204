"""bcrypt password hashing and HS256 access tokens for backoffice users."""

from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from kaisla.core.config import get_settings

# Cost factor shared by the API and the create_user script.
BCRYPT_ROUNDS = 10
# bcrypt only reads the first 72 bytes of a password.
BCRYPT_MAX_BYTES = 72

USERNAME_MIN_LEN = 1
USERNAME_MAX_LEN = 100
PASSWORD_MIN_LEN = 6
PASSWORD_MAX_LEN = 128

REQUIRED_CLAIMS = ("sub", "exp", "iat")


def _password_bytes(plain_password: str) -> bytes:
    return plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(plain_password: str) -> str:
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(_password_bytes(plain_password), salt).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """False for a wrong password and for a stored value that is not a bcrypt hash."""
    try:
        return bcrypt.checkpw(_password_bytes(plain_password), hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def create_access_token(
    sub: Any,
    username: str,
    role: str,
    expires_delta: timedelta | None = None,
) -> str:
    """Signed token identifying a user by id (sub) with username and role claims."""
    settings = get_settings()
    issued_at = datetime.now(UTC)
    lifetime = expires_delta or timedelta(minutes=settings.JWT_EXPIRE_MINUTES)
    claims = {
        "sub": str(sub),
        "username": username,
        "role": role,
        "iat": issued_at,
        "exp": issued_at + lifetime,
    }
    return jwt.encode(claims, settings.JWT_SECRET.get_secret_value(), algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Verify signature and expiry and return the claims.

    Raises jwt.PyJWTError (expired, badly signed, malformed or missing a
    required claim).
    """
    settings = get_settings()
    return jwt.decode(
        token,
        settings.JWT_SECRET.get_secret_value(),
        algorithms=[settings.JWT_ALGORITHM],
        options={"require": list(REQUIRED_CLAIMS)},
    )
