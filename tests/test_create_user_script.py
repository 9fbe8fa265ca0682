"""Tests for the create_user CLI."""

from contextlib import redirect_stderr, redirect_stdout
from io import StringIO
from unittest.mock import patch

from portal.core.security import verify_password
from portal.models import User
from portal.scripts import create_user
from tests.support import PASSWORD, DatabaseTestCase


class TestCreateUserScript(DatabaseTestCase):
    def _run(self, *argv: str) -> int:
        with patch.object(create_user, "SessionLocal", self.SessionTesting), redirect_stdout(
            StringIO()
        ), redirect_stderr(StringIO()):
            return create_user.main(list(argv))

    def test_creates_account_with_role(self) -> None:
        self.assertEqual(self._run("Boss@Studio.Example.com", "boss", PASSWORD, "ceo"), 0)
        user = self.db.query(User).filter_by(username="boss").one()
        self.assertEqual(user.email, "boss@studio.example.com")
        self.assertEqual(user.role, "ceo")
        self.assertTrue(verify_password(PASSWORD, user.password_hash))

    def test_defaults_to_user_role(self) -> None:
        self.assertEqual(self._run("a@example.com", "alice", PASSWORD), 0)
        self.assertEqual(self.db.query(User).filter_by(username="alice").one().role, "user")

    def test_rejects_weak_password_and_duplicates(self) -> None:
        self.assertEqual(self._run("a@example.com", "alice", "password"), 1)
        self.assertEqual(self._run("a@example.com", "alice", PASSWORD), 0)
        self.assertEqual(self._run("a@example.com", "alice2", PASSWORD), 1)
        self.assertEqual(self.db.query(User).count(), 1)

    def test_rejects_bad_username(self) -> None:
        self.assertEqual(self._run("a@example.com", "no spaces", PASSWORD), 1)

    def test_rejects_malformed_email(self) -> None:
        for email in ("a@b..c", "a@-x.com", "x,y@z.q", "a@b.c,"):
            with self.subTest(email=email):
                self.assertEqual(self._run(email, "alice", PASSWORD), 1)
        self.assertEqual(self.db.query(User).count(), 0)
