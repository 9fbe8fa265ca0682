"""Server-side session storage behind a small interface so the store can be swapped or faked."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from portal.models import UserSession

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """MySQL and SQLite hand back naive datetimes; they are stored as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


@dataclass
class SessionRecord:
    """What the store keeps for one login, keyed by the digest of the cookie value."""

    token_hash: str
    user_id: int
    username: str
    role: str
    expires_at: datetime
    ip_address: str | None = None
    user_agent: str | None = None

    def is_expired(self, now: datetime | None = None) -> bool:
        return as_utc(self.expires_at) <= (now or utcnow())


class SessionStore(ABC):
    """Persistence for login sessions. Every write is durable when the call returns."""

    @abstractmethod
    def create(self, record: SessionRecord) -> None: ...

    @abstractmethod
    def get(self, token_hash: str) -> SessionRecord | None: ...

    @abstractmethod
    def delete(self, token_hash: str) -> bool:
        """Remove one session; returns False when it did not exist."""

    @abstractmethod
    def delete_all_for_user(self, user_id: int) -> int:
        """Remove every session belonging to user_id; returns how many were removed."""

    @abstractmethod
    def purge_expired(self, now: datetime | None = None) -> int:
        """Remove sessions whose absolute expiry has passed."""

    @abstractmethod
    def count_active(self, now: datetime | None = None) -> int: ...


class SqlSessionStore(SessionStore):
    """SessionStore over the `sessions` table using the request's SQLAlchemy session."""

    def __init__(self, db: Session):
        self.db = db

    def create(self, record: SessionRecord) -> None:
        row = UserSession(
            token_hash=record.token_hash,
            user_id=record.user_id,
            username=record.username,
            role=record.role,
            expires_at=record.expires_at,
            ip_address=record.ip_address,
            user_agent=(record.user_agent or "")[:512] or None,
        )
        self.db.add(row)
        self.db.commit()

    def get(self, token_hash: str) -> SessionRecord | None:
        row = (
            self.db.query(UserSession)
            .filter(UserSession.token_hash == token_hash)
            .first()
        )
        if row is None:
            return None
        return SessionRecord(
            token_hash=row.token_hash,
            user_id=row.user_id,
            username=row.username,
            role=row.role,
            expires_at=as_utc(row.expires_at),
            ip_address=row.ip_address,
            user_agent=row.user_agent,
        )

    def delete(self, token_hash: str) -> bool:
        deleted = (
            self.db.query(UserSession)
            .filter(UserSession.token_hash == token_hash)
            .delete(synchronize_session=False)
        )
        self.db.commit()
        return deleted > 0

    def delete_all_for_user(self, user_id: int) -> int:
        deleted = (
            self.db.query(UserSession)
            .filter(UserSession.user_id == user_id)
            .delete(synchronize_session=False)
        )
        self.db.commit()
        if deleted:
            logger.info("Revoked sessions: user_id=%s count=%s", user_id, deleted)
        return deleted

    def purge_expired(self, now: datetime | None = None) -> int:
        cutoff = now or utcnow()
        deleted = (
            self.db.query(UserSession)
            .filter(UserSession.expires_at <= cutoff)
            .delete(synchronize_session=False)
        )
        self.db.commit()
        return deleted

    def count_active(self, now: datetime | None = None) -> int:
        cutoff = now or utcnow()
        return self.db.query(UserSession).filter(UserSession.expires_at > cutoff).count()


class InMemorySessionStore(SessionStore):
    """Dict-backed store for tests and single-process tooling."""

    def __init__(self) -> None:
        self.records: dict[str, SessionRecord] = {}

    def create(self, record: SessionRecord) -> None:
        self.records[record.token_hash] = record

    def get(self, token_hash: str) -> SessionRecord | None:
        return self.records.get(token_hash)

    def delete(self, token_hash: str) -> bool:
        return self.records.pop(token_hash, None) is not None

    def delete_all_for_user(self, user_id: int) -> int:
        doomed = [h for h, r in self.records.items() if r.user_id == user_id]
        for token_hash in doomed:
            del self.records[token_hash]
        return len(doomed)

    def purge_expired(self, now: datetime | None = None) -> int:
        now = now or utcnow()
        doomed = [h for h, r in self.records.items() if r.is_expired(now)]
        for token_hash in doomed:
            del self.records[token_hash]
        return len(doomed)

    def count_active(self, now: datetime | None = None) -> int:
        now = now or utcnow()
        return sum(1 for r in self.records.values() if not r.is_expired(now))
