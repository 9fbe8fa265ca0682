"""Team announcements: admins publish, staff read the ones addressed to their role."""

from typing import Any

from sqlalchemy.orm import Session

from portal.core.exceptions import NotFound, ValidationFailed
from portal.models import ALL_ROLES, TeamAnnouncement, User
from portal.schemas.announcements import AnnouncementCreate
from portal.schemas.auth import CurrentUser
from portal.services.audit import record_event


def list_for_role(db: Session, role: str) -> list[tuple[TeamAnnouncement, str | None]]:
    """Sticky announcements first, then newest; only those targeting role or everyone."""
    rows = (
        db.query(TeamAnnouncement, User.username)
        .outerjoin(User, TeamAnnouncement.author_id == User.id)
        .order_by(
            TeamAnnouncement.is_sticky.desc(),
            TeamAnnouncement.created_at.desc(),
            TeamAnnouncement.id.desc(),
        )
        .all()
    )
    # JSON containment differs per backend; the table is small enough to filter here.
    visible = []
    for announcement, author in rows:
        targets = announcement.target_roles or []
        if ALL_ROLES in targets or role in targets:
            visible.append((announcement, author))
    return visible


def _get_announcement(db: Session, announcement_id: int) -> TeamAnnouncement:
    announcement = db.get(TeamAnnouncement, announcement_id)
    if announcement is None:
        raise NotFound("Announcement not found")
    return announcement


def get_with_author(db: Session, announcement_id: int) -> tuple[TeamAnnouncement, str | None]:
    row = (
        db.query(TeamAnnouncement, User.username)
        .outerjoin(User, TeamAnnouncement.author_id == User.id)
        .filter(TeamAnnouncement.id == announcement_id)
        .first()
    )
    if row is None:
        raise NotFound("Announcement not found")
    return row


def create_announcement(db: Session, author: CurrentUser, body: AnnouncementCreate) -> TeamAnnouncement:
    announcement = TeamAnnouncement(
        title=body.title,
        content=body.content,
        author_id=author.id,
        is_sticky=body.is_sticky,
        target_roles=body.target_roles,
    )
    db.add(announcement)
    db.commit()
    db.refresh(announcement)
    record_event(
        db,
        "announcement.created",
        user_id=author.id,
        details=f"announcement_id={announcement.id}",
    )
    return announcement


def update_announcement(
    db: Session,
    actor: CurrentUser,
    announcement_id: int,
    changes: dict[str, Any],
) -> TeamAnnouncement:
    if not changes:
        raise ValidationFailed("No fields to update")
    announcement = _get_announcement(db, announcement_id)
    for field, value in changes.items():
        setattr(announcement, field, value)
    db.commit()
    db.refresh(announcement)
    record_event(
        db,
        "announcement.updated",
        user_id=actor.id,
        details=f"announcement_id={announcement_id}",
    )
    return announcement


def delete_announcement(db: Session, actor: CurrentUser, announcement_id: int) -> None:
    announcement = _get_announcement(db, announcement_id)
    db.delete(announcement)
    db.commit()
    record_event(
        db,
        "announcement.deleted",
        user_id=actor.id,
        details=f"announcement_id={announcement_id}",
    )
