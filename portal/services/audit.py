"""Audit trail: persist security-relevant actions to system_logs and read them back for admins."""

import logging

from sqlalchemy.orm import Session

from portal.models import SystemLog, User

logger = logging.getLogger(__name__)

MAX_LOG_ROWS = 100


def record_event(
    db: Session,
    action: str,
    user_id: int | None = None,
    details: str | None = None,
    ip_address: str | None = None,
) -> SystemLog:
    """Append one audit row and commit it."""
    entry = SystemLog(
        user_id=user_id,
        action=action[:100],
        details=details,
        ip_address=ip_address,
    )
    db.add(entry)
    db.commit()
    logger.info("audit action=%s user_id=%s", action, user_id)
    return entry


def list_events(db: Session, limit: int = MAX_LOG_ROWS) -> list[tuple[SystemLog, str | None]]:
    """Newest audit rows with the actor's username (None for deleted or anonymous actors)."""
    limit = max(1, min(limit, MAX_LOG_ROWS))
    return (
        db.query(SystemLog, User.username)
        .outerjoin(User, SystemLog.user_id == User.id)
        .order_by(SystemLog.created_at.desc(), SystemLog.id.desc())
        .limit(limit)
        .all()
    )
