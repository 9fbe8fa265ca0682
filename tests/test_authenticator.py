"""Tests for portal.services.auth: registration, login, per-request authentication, revocation."""

from datetime import timedelta

from portal.core.config import get_settings
from portal.core.exceptions import Conflict, Unauthenticated, ValidationFailed
from portal.core.security import hash_session_token, verify_password
from portal.models import SystemLog, User
from portal.schemas.auth import RegisterRequest
from portal.services.auth import INVALID_CREDENTIALS, Authenticator, register_user
from portal.services.session_store import InMemorySessionStore, utcnow
from tests.support import PASSWORD, DatabaseTestCase


class AuthenticatorTestCase(DatabaseTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.store = InMemorySessionStore()
        self.auth = Authenticator(store=self.store, db=self.db, settings=get_settings())


class TestRegisterUser(AuthenticatorTestCase):
    def _body(self, **overrides: object) -> RegisterRequest:
        values = {
            "email": "Alice@Example.com",
            "username": "alice",
            "password": PASSWORD,
            "data_processing_consent": True,
        }
        values.update(overrides)
        return RegisterRequest(**values)

    def test_creates_plain_user_with_hashed_password(self) -> None:
        user = register_user(self.db, self._body(marketing_consent=True))
        self.assertEqual(user.role, "user")
        self.assertEqual(user.email, "alice@example.com")
        self.assertTrue(user.is_active)
        self.assertNotEqual(user.password_hash, PASSWORD)
        self.assertTrue(verify_password(PASSWORD, user.password_hash))
        self.assertIsNotNone(user.data_processing_consent_at)
        self.assertIsNotNone(user.marketing_consent_at)

    def test_does_not_open_a_session(self) -> None:
        register_user(self.db, self._body())
        self.assertEqual(self.store.count_active(), 0)

    def test_duplicate_email_or_username_conflicts(self) -> None:
        register_user(self.db, self._body())
        with self.assertRaises(Conflict):
            register_user(self.db, self._body(username="alice2"))
        with self.assertRaises(Conflict):
            register_user(self.db, self._body(email="other@example.com"))
        self.assertEqual(self.db.query(User).count(), 1)

    def test_audited(self) -> None:
        user = register_user(self.db, self._body())
        actions = [row.action for row in self.db.query(SystemLog).filter_by(user_id=user.id)]
        self.assertIn("user.register", actions)


class TestLogin(AuthenticatorTestCase):
    def test_login_by_username_or_email(self) -> None:
        alice = self.create_user("alice")
        user, token = self.auth.login("alice", PASSWORD)
        self.assertEqual(user.id, alice.id)
        self.assertIsNotNone(self.store.get(hash_session_token(token)))
        user, _ = self.auth.login("  ALICE@example.com ", PASSWORD)
        self.assertEqual(user.id, alice.id)
        self.assertEqual(self.store.count_active(), 2)

    def test_stores_only_the_token_digest(self) -> None:
        self.create_user("alice")
        _, token = self.auth.login("alice", PASSWORD)
        self.assertNotIn(token, self.store.records)
        self.assertIn(hash_session_token(token), self.store.records)

    def test_sets_last_login(self) -> None:
        alice = self.create_user("alice")
        self.assertIsNone(alice.last_login)
        self.auth.login("alice", PASSWORD)
        self.assertIsNotNone(self.reload(User, alice.id).last_login)

    def test_failures_are_indistinguishable(self) -> None:
        self.create_user("alice")
        self.create_user("dormant", is_active=False)
        attempts = [
            ("nobody", PASSWORD),
            ("alice", "Wr0ng!Pass"),
            ("dormant", PASSWORD),
            ("", PASSWORD),
        ]
        for identifier, password in attempts:
            with self.subTest(identifier=identifier):
                with self.assertRaises(Unauthenticated) as ctx:
                    self.auth.login(identifier, password)
                self.assertEqual(ctx.exception.message, INVALID_CREDENTIALS)
                self.assertEqual(ctx.exception.reason, "bad_credentials")
        self.assertEqual(self.store.count_active(), 0)

    def test_wrong_password_is_audited(self) -> None:
        alice = self.create_user("alice")
        with self.assertRaises(Unauthenticated):
            self.auth.login("alice", "Wr0ng!Pass")
        actions = [row.action for row in self.db.query(SystemLog).filter_by(user_id=alice.id)]
        self.assertEqual(actions, ["user.login_failed"])

    def test_session_expiry_follows_ttl(self) -> None:
        self.create_user("alice")
        _, token = self.auth.login("alice", PASSWORD)
        record = self.store.get(hash_session_token(token))
        ttl = timedelta(hours=get_settings().SESSION_TTL_HOURS)
        self.assertAlmostEqual(
            (record.expires_at - utcnow()).total_seconds(),
            ttl.total_seconds(),
            delta=60,
        )


class TestAuthenticate(AuthenticatorTestCase):
    def _reason(self, token: str | None) -> str:
        with self.assertRaises(Unauthenticated) as ctx:
            self.auth.authenticate(token)
        self.assertEqual(ctx.exception.message, "Not authenticated")
        return ctx.exception.reason

    def test_valid_token_resolves_user(self) -> None:
        alice = self.create_user("alice")
        _, token = self.auth.login("alice", PASSWORD)
        self.assertEqual(self.auth.authenticate(token).id, alice.id)

    def test_missing_and_unknown(self) -> None:
        self.assertEqual(self._reason(None), "missing")
        self.assertEqual(self._reason(""), "missing")
        self.assertEqual(self._reason("forged-token"), "invalid")

    def test_expired_session_rejected_and_removed(self) -> None:
        self.create_user("alice")
        _, token = self.auth.login("alice", PASSWORD)
        token_hash = hash_session_token(token)
        self.store.get(token_hash).expires_at = utcnow() - timedelta(seconds=1)
        self.assertEqual(self._reason(token), "expired")
        self.assertIsNone(self.store.get(token_hash))

    def test_deactivated_user_rejected_immediately(self) -> None:
        alice = self.create_user("alice")
        _, token = self.auth.login("alice", PASSWORD)
        alice.is_active = False
        self.db.commit()
        self.assertEqual(self._reason(token), "user_invalid")
        self.assertEqual(self.store.count_active(), 0)

    def test_deleted_user_rejected(self) -> None:
        alice = self.create_user("alice")
        _, token = self.auth.login("alice", PASSWORD)
        self.db.delete(alice)
        self.db.commit()
        self.assertEqual(self._reason(token), "user_invalid")

    def test_role_change_visible_without_new_login(self) -> None:
        alice = self.create_user("alice")
        _, token = self.auth.login("alice", PASSWORD)
        alice.role = "developer"
        self.db.commit()
        self.assertEqual(self.auth.authenticate(token).role, "developer")


class TestLogout(AuthenticatorTestCase):
    def test_logout_ends_only_that_session(self) -> None:
        self.create_user("alice")
        _, first = self.auth.login("alice", PASSWORD)
        _, second = self.auth.login("alice", PASSWORD)
        self.assertTrue(self.auth.logout(first))
        with self.assertRaises(Unauthenticated):
            self.auth.authenticate(first)
        self.auth.authenticate(second)

    def test_logout_without_token_is_harmless(self) -> None:
        self.assertFalse(self.auth.logout(None))
        self.assertFalse(self.auth.logout("unknown"))

    def test_logout_all(self) -> None:
        alice = self.create_user("alice")
        self.create_user("bob")
        self.auth.login("alice", PASSWORD)
        self.auth.login("alice", PASSWORD)
        _, bob_token = self.auth.login("bob", PASSWORD)
        self.assertEqual(self.auth.logout_all(alice.id), 2)
        self.auth.authenticate(bob_token)


class TestChangePassword(AuthenticatorTestCase):
    NEW_PASSWORD = "N3w!Secret"

    def test_changes_hash_and_revokes_every_session(self) -> None:
        alice = self.create_user("alice")
        _, token = self.auth.login("alice", PASSWORD)
        self.auth.login("alice", PASSWORD)
        revoked = self.auth.change_password(alice, PASSWORD, self.NEW_PASSWORD)
        self.assertEqual(revoked, 2)
        with self.assertRaises(Unauthenticated):
            self.auth.authenticate(token)
        with self.assertRaises(Unauthenticated):
            self.auth.login("alice", PASSWORD)
        self.auth.login("alice", self.NEW_PASSWORD)

    def test_wrong_current_password(self) -> None:
        alice = self.create_user("alice")
        with self.assertRaises(Unauthenticated) as ctx:
            self.auth.change_password(alice, "Wr0ng!Pass", self.NEW_PASSWORD)
        self.assertEqual(ctx.exception.message, "Current password is incorrect")

    def test_weak_new_password(self) -> None:
        alice = self.create_user("alice")
        with self.assertRaises(ValidationFailed) as ctx:
            self.auth.change_password(alice, PASSWORD, "weak")
        self.assertIn("new_password", ctx.exception.errors)

    def test_same_password_rejected(self) -> None:
        alice = self.create_user("alice")
        _, token = self.auth.login("alice", PASSWORD)
        with self.assertRaises(ValidationFailed):
            self.auth.change_password(alice, PASSWORD, PASSWORD)
        self.auth.authenticate(token)
