"""Unit tests for the create_user seeding script."""

import unittest
from contextlib import contextmanager
from unittest.mock import MagicMock, patch

from kaisla.core.security import verify_password
from kaisla.models import User
from kaisla.scripts import create_user


def _scope_yielding(session: MagicMock):
    @contextmanager
    def scope():
        yield session

    return scope


class TestCreateUser(unittest.TestCase):
    def test_creates_user_with_hashed_password(self) -> None:
        session = MagicMock()
        session.query.return_value.filter.return_value.first.return_value = None
        with patch.object(create_user, "session_scope", _scope_yielding(session)):
            code = create_user.main(["kaisla", "secret1", "admin"])
        self.assertEqual(code, 0)
        user = session.add.call_args.args[0]
        self.assertIsInstance(user, User)
        self.assertEqual(user.role, "admin")
        self.assertTrue(verify_password("secret1", user.password_hash))
        session.commit.assert_called_once()

    def test_default_role_is_editor(self) -> None:
        session = MagicMock()
        session.query.return_value.filter.return_value.first.return_value = None
        with patch.object(create_user, "session_scope", _scope_yielding(session)):
            create_user.main(["kaisla", "secret1"])
        self.assertEqual(session.add.call_args.args[0].role, "editor")

    def test_existing_username_fails(self) -> None:
        session = MagicMock()
        session.query.return_value.filter.return_value.first.return_value = User(username="kaisla")
        with patch.object(create_user, "session_scope", _scope_yielding(session)):
            code = create_user.main(["kaisla", "secret1"])
        self.assertEqual(code, 1)
        session.add.assert_not_called()

    def test_short_password_fails_without_touching_database(self) -> None:
        session = MagicMock()
        with patch.object(create_user, "session_scope", _scope_yielding(session)):
            code = create_user.main(["kaisla", "abc"])
        self.assertEqual(code, 1)
        session.query.assert_not_called()
