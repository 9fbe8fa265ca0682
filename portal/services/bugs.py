"""Bug reports filed by staff, with reporter, assignee and build resolved for display."""

import logging
from typing import Any

from sqlalchemy.orm import Query, Session, aliased

from portal.core.exceptions import NotFound, ValidationFailed
from portal.core.roles import STAFF_ROLES
from portal.models import BugReport, GameBuild, User
from portal.schemas.auth import CurrentUser
from portal.schemas.bugs import BugCreateRequest, BugItem
from portal.services.audit import record_event

logger = logging.getLogger(__name__)

_Reporter = aliased(User)
_Assignee = aliased(User)


def _with_names(db: Session) -> Query:
    return (
        db.query(
            BugReport,
            _Reporter.username,
            _Assignee.username,
            GameBuild.version,
            GameBuild.title,
        )
        .outerjoin(_Reporter, BugReport.reported_by == _Reporter.id)
        .outerjoin(_Assignee, BugReport.assigned_to == _Assignee.id)
        .outerjoin(GameBuild, BugReport.build_id == GameBuild.id)
    )


def _to_item(row: tuple) -> BugItem:
    bug, reporter, assignee, build_version, build_title = row
    item = BugItem.model_validate(bug)
    item.reporter_name = reporter
    item.assignee_name = assignee
    item.build_version = build_version
    item.build_title = build_title
    return item


def list_bugs(db: Session) -> list[BugItem]:
    """All reports, newest first."""
    rows = _with_names(db).order_by(BugReport.created_at.desc(), BugReport.id.desc()).all()
    return [_to_item(row) for row in rows]


def get_bug_item(db: Session, bug_id: int) -> BugItem:
    row = _with_names(db).filter(BugReport.id == bug_id).first()
    if row is None:
        raise NotFound("Bug report not found")
    return _to_item(row)


def _check_build(db: Session, build_id: int | None) -> None:
    if build_id is not None and db.get(GameBuild, build_id) is None:
        raise ValidationFailed(errors={"build_id": "Build not found"})


def _check_assignee(db: Session, user_id: int | None) -> None:
    if user_id is None:
        return
    user = db.get(User, user_id)
    if user is None or user.role not in STAFF_ROLES or not user.is_active:
        raise ValidationFailed(errors={"assigned_to": "Assignee must be an active team member"})


def create_bug(db: Session, reporter: CurrentUser, body: BugCreateRequest) -> BugItem:
    _check_build(db, body.build_id)
    bug = BugReport(
        title=body.title,
        description=body.description,
        priority=body.priority.value,
        tags=body.tags,
        build_id=body.build_id,
        reported_by=reporter.id,
    )
    db.add(bug)
    db.commit()
    db.refresh(bug)
    record_event(
        db,
        "bug.reported",
        user_id=reporter.id,
        details=f"bug_id={bug.id} priority={bug.priority}",
    )
    return get_bug_item(db, bug.id)


def update_bug(db: Session, actor: CurrentUser, bug_id: int, changes: dict[str, Any]) -> BugItem:
    if not changes:
        raise ValidationFailed("No fields to update")
    bug = db.get(BugReport, bug_id)
    if bug is None:
        raise NotFound("Bug report not found")
    if "build_id" in changes:
        _check_build(db, changes["build_id"])
    if "assigned_to" in changes:
        _check_assignee(db, changes["assigned_to"])

    for field, value in changes.items():
        # enums arrive as members; the columns hold their string values
        setattr(bug, field, getattr(value, "value", value))
    db.commit()
    logger.info("Bug updated: bug_id=%s by user_id=%s fields=%s", bug_id, actor.id, sorted(changes))
    return get_bug_item(db, bug_id)


def delete_bug(db: Session, actor: CurrentUser, bug_id: int) -> None:
    bug = db.get(BugReport, bug_id)
    if bug is None:
        raise NotFound("Bug report not found")
    db.delete(bug)
    db.commit()
    record_event(db, "bug.deleted", user_id=actor.id, details=f"bug_id={bug_id}")


def list_team_members(db: Session) -> list[User]:
    """Active accounts holding a staff role, for the assignee picker."""
    return (
        db.query(User)
        .filter(User.role.in_([r.value for r in STAFF_ROLES]), User.is_active.is_(True))
        .order_by(User.role, User.username)
        .all()
    )
