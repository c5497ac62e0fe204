"""
Create a backoffice user (e.g. first admin). Run from project root:
  python -m kaisla.scripts.create_user USERNAME PASSWORD [role]
Example:
  python -m kaisla.scripts.create_user admin your-secure-password admin
"""
import argparse
import logging
import sys

from kaisla.core.config import settings
from kaisla.core.database import session_scope
from kaisla.core.logging import configure_logging
from kaisla.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    hash_password,
)
from kaisla.models.user import USER_ROLES, User

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create an Atelier Kaisla backoffice user.")
    parser.add_argument("username", help=f"Username (1-{USERNAME_MAX_LEN} chars)")
    parser.add_argument("password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument("role", nargs="?", default="editor", choices=list(USER_ROLES))
    args = parser.parse_args(argv)

    username = args.username.strip()
    if not username or len(username) > USERNAME_MAX_LEN:
        print("Invalid username length.", file=sys.stderr)
        return 1
    if not (PASSWORD_MIN_LEN <= len(args.password) <= PASSWORD_MAX_LEN):
        print(f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.", file=sys.stderr)
        return 1

    with session_scope() as db:
        existing = db.query(User).filter(User.username == username).first()
        if existing:
            print(f"User '{username}' already exists.", file=sys.stderr)
            return 1
        user = User(
            username=username,
            password_hash=hash_password(args.password),
            role=args.role,
        )
        db.add(user)
        db.commit()
        logger.info("Created user %s with role %s", username, args.role)
        print(f"Created user '{username}' with role '{args.role}'.")
        return 0


if __name__ == "__main__":
    configure_logging(settings.LOG_LEVEL)
    sys.exit(main())
