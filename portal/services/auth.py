"""
Authentication and session lifecycle: registration, login, per-request
authentication, logout, and password change.

The Authenticator receives its session store and DB session at construction;
nothing here reaches for module-level connection state.
"""

import logging
from datetime import timedelta
from typing import TYPE_CHECKING

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from portal.core.exceptions import Conflict, Unauthenticated, ValidationFailed
from portal.core.roles import Role
from portal.core.security import (
    burn_password_check,
    generate_session_token,
    hash_password,
    hash_session_token,
    normalize_email,
    password_policy_error,
    verify_password,
)
from portal.models import User
from portal.schemas.auth import RegisterRequest
from portal.services.audit import record_event
from portal.services.session_store import SessionRecord, SessionStore, utcnow

if TYPE_CHECKING:
    from portal.core.config import Settings

logger = logging.getLogger(__name__)

# Same response for unknown identifier, wrong password, and disabled account.
INVALID_CREDENTIALS = "Invalid credentials"


def register_user(db: Session, body: RegisterRequest, ip_address: str | None = None) -> User:
    """
    Create an account with role 'user'. Raises Conflict when the email or
    username is taken. Does not start a session.
    """
    existing = (
        db.query(User.id)
        .filter(or_(User.email == body.email, User.username == body.username))
        .first()
    )
    if existing is not None:
        raise Conflict("User already exists")

    now = utcnow()
    user = User(
        email=body.email,
        username=body.username,
        password_hash=hash_password(body.password),
        first_name=body.first_name,
        last_name=body.last_name,
        role=Role.USER.value,
        is_active=True,
        data_processing_consent=body.data_processing_consent,
        data_processing_consent_at=now if body.data_processing_consent else None,
        marketing_consent=body.marketing_consent,
        marketing_consent_at=now if body.marketing_consent else None,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        # Lost a race with a concurrent registration for the same email/username.
        db.rollback()
        raise Conflict("User already exists") from e
    db.refresh(user)
    record_event(db, "user.register", user_id=user.id, ip_address=ip_address)
    return user


class Authenticator:
    """Issues, resolves and revokes server-side sessions for one request."""

    def __init__(self, store: SessionStore, db: Session, settings: "Settings"):
        self.store = store
        self.db = db
        self.settings = settings

    def _find_login_candidate(self, identifier: str) -> User | None:
        ident = identifier.strip()
        if not ident:
            return None
        return (
            self.db.query(User)
            .filter(or_(User.username == ident, User.email == normalize_email(ident)))
            .first()
        )

    def login(
        self,
        identifier: str,
        password: str,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> tuple[User, str]:
        """
        Verify credentials and open a new session.
        Returns (user, raw session token); the token goes into the cookie only.
        """
        user = self._find_login_candidate(identifier)
        if user is None:
            burn_password_check(password)
            raise Unauthenticated("bad_credentials", INVALID_CREDENTIALS)
        if not verify_password(password, user.password_hash):
            record_event(self.db, "user.login_failed", user_id=user.id, ip_address=ip_address)
            raise Unauthenticated("bad_credentials", INVALID_CREDENTIALS)
        if not user.is_active:
            raise Unauthenticated("bad_credentials", INVALID_CREDENTIALS)

        token = self.issue_session(user, ip_address=ip_address, user_agent=user_agent)
        user.last_login = utcnow()
        self.db.commit()
        record_event(self.db, "user.login", user_id=user.id, ip_address=ip_address)
        return user, token

    def issue_session(
        self,
        user: User,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> str:
        token = generate_session_token()
        self.store.create(
            SessionRecord(
                token_hash=hash_session_token(token),
                user_id=user.id,
                username=user.username,
                role=user.role,
                expires_at=utcnow() + timedelta(hours=self.settings.SESSION_TTL_HOURS),
                ip_address=ip_address,
                user_agent=user_agent,
            )
        )
        return token

    def authenticate(self, token: str | None) -> User:
        """
        Resolve a session cookie value to its active user.

        Raises Unauthenticated with reason missing, invalid, expired or
        user_invalid. The user row is re-read on every call so deactivation,
        deletion and role changes apply immediately.
        """
        if not token:
            raise Unauthenticated("missing")
        token_hash = hash_session_token(token)
        record = self.store.get(token_hash)
        if record is None:
            raise Unauthenticated("invalid")
        if record.is_expired():
            self.store.delete(token_hash)
            raise Unauthenticated("expired")

        user = self.db.get(User, record.user_id)
        if user is None or not user.is_active:
            self.store.delete_all_for_user(record.user_id)
            raise Unauthenticated("user_invalid")
        return user

    def logout(self, token: str | None) -> bool:
        """End the session behind token. Safe to call with no or unknown token."""
        if not token:
            return False
        return self.store.delete(hash_session_token(token))

    def logout_all(self, user_id: int) -> int:
        """End every session of user_id, on any device."""
        return self.store.delete_all_for_user(user_id)

    def change_password(
        self,
        user: User,
        current_password: str,
        new_password: str,
        ip_address: str | None = None,
    ) -> int:
        """
        Replace the user's password and revoke all of their sessions.
        Returns the number of sessions revoked.
        """
        if not verify_password(current_password, user.password_hash):
            raise Unauthenticated("bad_credentials", "Current password is incorrect")
        problem = password_policy_error(new_password)
        if problem:
            raise ValidationFailed(errors={"new_password": problem})
        if verify_password(new_password, user.password_hash):
            raise ValidationFailed(
                errors={"new_password": "New password must be different from the old password"}
            )

        user.password_hash = hash_password(new_password)
        self.db.commit()
        revoked = self.store.delete_all_for_user(user.id)
        record_event(self.db, "user.password_changed", user_id=user.id, ip_address=ip_address)
        return revoked
