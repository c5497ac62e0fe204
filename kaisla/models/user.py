"""ORM model for backoffice users (auth and roles)."""

from sqlalchemy import Column, String

from kaisla.models.base import Base, created_at_column, updated_at_column, uuid_pk

USER_ROLES = ("admin", "editor")


class User(Base):
    """
    Backoffice account for JWT authentication.

    role: 'admin' or 'editor'. password_hash is a bcrypt hash, never plain text.
    """

    __tablename__ = "users"

    id = uuid_pk()
    username = Column(String(100), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default="editor")
    created_at = created_at_column()
    updated_at = updated_at_column()
