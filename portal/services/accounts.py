"""Account self-service and admin user management on top of the users table."""

import logging
from typing import Any

from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from portal.core.exceptions import Conflict, Forbidden, NotFound, ValidationFailed
from portal.core.roles import Role, role_rank
from portal.models import (
    PREFERENCE_FIELDS,
    BugReport,
    BuildDownload,
    ConsentLogEntry,
    GameBuild,
    MessagePost,
    SystemLog,
    TeamAnnouncement,
    User,
)
from portal.schemas.auth import CurrentUser
from portal.services.audit import record_event
from portal.services.session_store import SessionStore

logger = logging.getLogger(__name__)

HIDDEN_USERNAME = "HIDDEN_USER"

# Columns included in a personal data export.
EXPORT_FIELDS = (
    "id",
    "username",
    "email",
    "first_name",
    "last_name",
    "role",
    "created_at",
    "last_login",
    "data_processing_consent",
    "data_processing_consent_at",
    "marketing_consent",
    "marketing_consent_at",
) + PREFERENCE_FIELDS


def get_user(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if user is None:
        raise NotFound("User not found")
    return user


def update_profile(db: Session, user: User, changes: dict[str, Any]) -> User:
    """Apply username/email/name changes. Raises Conflict on a taken email or username."""
    if not changes:
        raise ValidationFailed("No fields to update")

    clashes = []
    if "email" in changes and changes["email"] != user.email:
        clashes.append(User.email == changes["email"])
    if "username" in changes and changes["username"] != user.username:
        clashes.append(User.username == changes["username"])
    if clashes:
        taken = db.query(User.id).filter(User.id != user.id, or_(*clashes)).first()
        if taken is not None:
            raise Conflict("Username or email is already in use")

    for field, value in changes.items():
        setattr(user, field, value)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise Conflict("Username or email is already in use") from e
    db.refresh(user)
    return user


def update_preference(db: Session, user: User, setting_key: str, is_checked: bool) -> None:
    if setting_key not in PREFERENCE_FIELDS:
        logger.warning("Rejected preference key %r for user_id=%s", setting_key, user.id)
        raise ValidationFailed(errors={"setting_key": "Invalid setting key"})
    setattr(user, setting_key, bool(is_checked))
    db.commit()


def _json_value(value: Any) -> Any:
    return value.isoformat() if hasattr(value, "isoformat") else value


def export_user_data(db: Session, user: User) -> dict[str, Any]:
    """Everything stored about the user except credentials, JSON-ready."""
    data: dict[str, Any] = {field: _json_value(getattr(user, field)) for field in EXPORT_FIELDS}
    consents = (
        db.query(ConsentLogEntry)
        .filter(ConsentLogEntry.user_id == user.id)
        .order_by(ConsentLogEntry.created_at, ConsentLogEntry.id)
    )
    data["consent_history"] = [
        {
            "consent_type": entry.consent_type,
            "consent_given": entry.consent_given,
            "document_version": entry.document_version,
            "ip_address": entry.ip_address,
            "created_at": _json_value(entry.created_at),
        }
        for entry in consents
    ]
    downloads = (
        db.query(BuildDownload)
        .filter(BuildDownload.user_id == user.id)
        .order_by(BuildDownload.download_date, BuildDownload.id)
    )
    data["download_history"] = [
        {
            "build_id": entry.build_id,
            "download_date": _json_value(entry.download_date),
            "ip_address": entry.ip_address,
        }
        for entry in downloads
    ]
    reports = (
        db.query(BugReport)
        .filter(BugReport.reported_by == user.id)
        .order_by(BugReport.created_at, BugReport.id)
    )
    data["bug_reports"] = [
        {
            "id": bug.id,
            "title": bug.title,
            "description": bug.description,
            "created_at": _json_value(bug.created_at),
        }
        for bug in reports
    ]
    return data


def public_username(db: Session, user_id: int) -> tuple[int, str]:
    """(id, username) as shown to other players; hidden when the user opted out."""
    user = get_user(db, user_id)
    if not user.allow_community_engagement:
        return user.id, HIDDEN_USERNAME
    return user.id, user.username


def _detach_user_rows(db: Session, user_id: int) -> None:
    """Clear references to a user before deleting the row, mirroring the FK rules."""
    db.query(SystemLog).filter(SystemLog.user_id == user_id).update(
        {SystemLog.user_id: None}, synchronize_session=False
    )
    db.query(GameBuild).filter(GameBuild.uploaded_by == user_id).update(
        {GameBuild.uploaded_by: None}, synchronize_session=False
    )
    db.query(TeamAnnouncement).filter(TeamAnnouncement.author_id == user_id).update(
        {TeamAnnouncement.author_id: None}, synchronize_session=False
    )
    db.query(BugReport).filter(BugReport.reported_by == user_id).update(
        {BugReport.reported_by: None}, synchronize_session=False
    )
    db.query(BugReport).filter(BugReport.assigned_to == user_id).update(
        {BugReport.assigned_to: None}, synchronize_session=False
    )
    db.query(BuildDownload).filter(BuildDownload.user_id == user_id).delete(
        synchronize_session=False
    )
    db.query(ConsentLogEntry).filter(ConsentLogEntry.user_id == user_id).delete(
        synchronize_session=False
    )
    authored = [
        row.id for row in db.query(MessagePost.id).filter(MessagePost.author_id == user_id)
    ]
    if authored:
        db.query(MessagePost).filter(MessagePost.parent_id.in_(authored)).delete(
            synchronize_session=False
        )
        db.query(MessagePost).filter(MessagePost.id.in_(authored)).delete(
            synchronize_session=False
        )


def delete_user(db: Session, store: SessionStore, user: User) -> None:
    """Hard-delete an account and every session it holds."""
    user_id = user.id
    store.delete_all_for_user(user_id)
    _detach_user_rows(db, user_id)
    db.delete(user)
    db.commit()
    logger.info("Deleted user_id=%s", user_id)


def delete_own_account(
    db: Session,
    store: SessionStore,
    current: CurrentUser,
    ip_address: str | None = None,
) -> None:
    user = get_user(db, current.id)
    delete_user(db, store, user)
    record_event(db, "user.account_deleted", details=f"user_id={current.id}", ip_address=ip_address)


def list_users(db: Session) -> list[User]:
    return db.query(User).order_by(User.created_at.desc(), User.id.desc()).all()


def count_users_by_role(db: Session) -> dict[str, int]:
    rows = db.query(User.role, func.count(User.id)).group_by(User.role).all()
    return {role: count for role, count in rows}


def admin_set_role(db: Session, actor: CurrentUser, user_id: int, role: Role) -> User:
    """Admin role change: any role, but never on the admin's own account."""
    if user_id == actor.id:
        raise ValidationFailed("Cannot demote yourself")
    user = get_user(db, user_id)
    previous = user.role
    user.role = role.value
    db.commit()
    record_event(
        db,
        "admin.role_changed",
        user_id=actor.id,
        details=f"user_id={user_id} {previous}->{role.value}",
    )
    return user


def staff_set_role(db: Session, actor: CurrentUser, user_id: int, role: Role) -> User:
    """
    Staff role change: the actor may only grant roles ranked below their own
    and may not touch accounts ranked at or above them. The CEO is exempt.
    """
    actor_rank = role_rank(actor.role)
    is_ceo = actor.role == Role.CEO.value
    if not is_ceo and actor_rank <= role_rank(role.value):
        raise Forbidden("Insufficient permissions to assign this role")

    user = get_user(db, user_id)
    if not is_ceo and role_rank(user.role) >= actor_rank:
        raise Forbidden("Cannot modify users with equal or higher privileges")

    previous = user.role
    user.role = role.value
    db.commit()
    record_event(
        db,
        "staff.role_changed",
        user_id=actor.id,
        details=f"user_id={user_id} {previous}->{role.value}",
    )
    return user


def admin_update_user(
    db: Session,
    actor: CurrentUser,
    user_id: int,
    changes: dict[str, Any],
) -> User:
    """Admin edit of another account's email and names."""
    if not changes:
        raise ValidationFailed("No fields to update")
    user = update_profile(db, get_user(db, user_id), changes)
    record_event(
        db,
        "admin.user_updated",
        user_id=actor.id,
        details=f"user_id={user_id} fields={','.join(sorted(changes))}",
    )
    return user


def admin_set_active(
    db: Session,
    store: SessionStore,
    actor: CurrentUser,
    user_id: int,
    is_active: bool,
) -> User:
    """Enable or disable an account; disabling ends all of its sessions."""
    if user_id == actor.id:
        raise ValidationFailed("Cannot deactivate yourself")
    user = get_user(db, user_id)
    user.is_active = is_active
    db.commit()
    if not is_active:
        store.delete_all_for_user(user_id)
    record_event(
        db,
        "admin.user_activated" if is_active else "admin.user_deactivated",
        user_id=actor.id,
        details=f"user_id={user_id}",
    )
    return user


def admin_delete_user(db: Session, store: SessionStore, actor: CurrentUser, user_id: int) -> None:
    if user_id == actor.id:
        raise ValidationFailed("Cannot delete yourself")
    user = get_user(db, user_id)
    delete_user(db, store, user)
    record_event(db, "admin.user_deleted", user_id=actor.id, details=f"user_id={user_id}")
