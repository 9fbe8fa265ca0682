"""Team announcement routes: staff read what targets their role; admins manage."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from portal.api.v1.auth import require_admin, require_staff
from portal.core.database import get_db
from portal.models import TeamAnnouncement
from portal.schemas.announcements import (
    AnnouncementCreate,
    AnnouncementItem,
    AnnouncementsResponse,
    AnnouncementUpdate,
)
from portal.schemas.auth import CurrentUser, MessageResponse
from portal.services import announcements as announcement_service

router = APIRouter()


def _to_item(announcement: TeamAnnouncement, author_name: str | None) -> AnnouncementItem:
    item = AnnouncementItem.model_validate(announcement)
    item.author_name = author_name
    return item


@router.get("", response_model=AnnouncementsResponse)
def list_announcements(
    staff: Annotated[CurrentUser, Depends(require_staff)],
    db: Annotated[Session, Depends(get_db)],
) -> AnnouncementsResponse:
    """Announcements addressed to the caller's role or to everyone; sticky first."""
    return AnnouncementsResponse(
        announcements=[
            _to_item(a, author) for a, author in announcement_service.list_for_role(db, staff.role)
        ]
    )


@router.post("", response_model=AnnouncementItem, status_code=status.HTTP_201_CREATED)
def create_announcement(
    body: AnnouncementCreate,
    admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> AnnouncementItem:
    announcement = announcement_service.create_announcement(db, admin, body)
    return _to_item(announcement, admin.username)


@router.put("/{announcement_id}", response_model=AnnouncementItem)
def update_announcement(
    announcement_id: int,
    body: AnnouncementUpdate,
    admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> AnnouncementItem:
    changes = {k: v for k, v in body.model_dump(exclude_unset=True).items() if v is not None}
    announcement_service.update_announcement(db, admin, announcement_id, changes)
    return _to_item(*announcement_service.get_with_author(db, announcement_id))


@router.delete("/{announcement_id}", response_model=MessageResponse)
def delete_announcement(
    announcement_id: int,
    admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    announcement_service.delete_announcement(db, admin, announcement_id)
    return MessageResponse(message="Announcement deleted successfully")
