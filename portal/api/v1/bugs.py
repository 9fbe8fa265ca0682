"""Bug report routes: staff file, triage and assign; admins delete."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from portal.api.v1.auth import require_admin, require_staff
from portal.core.database import get_db
from portal.schemas.auth import CurrentUser, MessageResponse
from portal.schemas.bugs import (
    BugCreateRequest,
    BugItem,
    BugsResponse,
    BugUpdateRequest,
    TeamMember,
    TeamMembersResponse,
)
from portal.services import bugs as bug_service

router = APIRouter()

# Fields that may be cleared by sending null.
NULLABLE_BUG_FIELDS = frozenset({"assigned_to", "build_id"})


@router.get("", response_model=BugsResponse)
def list_bugs(
    _staff: Annotated[CurrentUser, Depends(require_staff)],
    db: Annotated[Session, Depends(get_db)],
) -> BugsResponse:
    """Every report, newest first, with reporter, assignee and build details."""
    return BugsResponse(bugs=bug_service.list_bugs(db))


@router.get("/team-members", response_model=TeamMembersResponse)
def list_team_members(
    _staff: Annotated[CurrentUser, Depends(require_staff)],
    db: Annotated[Session, Depends(get_db)],
) -> TeamMembersResponse:
    """Accounts a report can be assigned to."""
    return TeamMembersResponse(
        members=[TeamMember.model_validate(u) for u in bug_service.list_team_members(db)]
    )


@router.post("", response_model=BugItem, status_code=status.HTTP_201_CREATED)
def create_bug(
    body: BugCreateRequest,
    staff: Annotated[CurrentUser, Depends(require_staff)],
    db: Annotated[Session, Depends(get_db)],
) -> BugItem:
    return bug_service.create_bug(db, staff, body)


@router.put("/{bug_id}", response_model=BugItem)
def update_bug(
    bug_id: int,
    body: BugUpdateRequest,
    staff: Annotated[CurrentUser, Depends(require_staff)],
    db: Annotated[Session, Depends(get_db)],
) -> BugItem:
    changes = {
        field: value
        for field, value in body.model_dump(exclude_unset=True).items()
        if value is not None or field in NULLABLE_BUG_FIELDS
    }
    return bug_service.update_bug(db, staff, bug_id, changes)


@router.delete("/{bug_id}", response_model=MessageResponse)
def delete_bug(
    bug_id: int,
    admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    bug_service.delete_bug(db, admin, bug_id)
    return MessageResponse(message="Bug report deleted successfully")
