"""Staff message board routes. Authors alone may edit or delete their posts."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from portal.api.v1.auth import require_staff
from portal.core.database import get_db
from portal.models import MessagePost
from portal.schemas.auth import CurrentUser, MessageResponse
from portal.schemas.messages import MessagePostItem, MessagePostRequest, MessagePostsResponse
from portal.services import messages as message_service

router = APIRouter()


def _to_item(post: MessagePost, author_name: str | None, reply_count: int = 0) -> MessagePostItem:
    item = MessagePostItem.model_validate(post)
    item.author_name = author_name
    item.reply_count = reply_count
    return item


@router.get("", response_model=MessagePostsResponse)
def list_posts(
    _staff: Annotated[CurrentUser, Depends(require_staff)],
    db: Annotated[Session, Depends(get_db)],
) -> MessagePostsResponse:
    """Top-level posts with reply counts, newest first."""
    return MessagePostsResponse(
        posts=[
            _to_item(post, author, count or 0)
            for post, author, count in message_service.list_threads(db)
        ]
    )


@router.get("/{post_id}/replies", response_model=MessagePostsResponse)
def list_replies(
    post_id: int,
    _staff: Annotated[CurrentUser, Depends(require_staff)],
    db: Annotated[Session, Depends(get_db)],
) -> MessagePostsResponse:
    return MessagePostsResponse(
        posts=[_to_item(post, author) for post, author in message_service.list_replies(db, post_id)]
    )


@router.post("", response_model=MessagePostItem, status_code=status.HTTP_201_CREATED)
def create_post(
    body: MessagePostRequest,
    staff: Annotated[CurrentUser, Depends(require_staff)],
    db: Annotated[Session, Depends(get_db)],
) -> MessagePostItem:
    post = message_service.create_post(db, staff, body.title, body.content, body.parent_id)
    return _to_item(post, staff.username)


@router.put("/{post_id}", response_model=MessagePostItem)
def edit_post(
    post_id: int,
    body: MessagePostRequest,
    staff: Annotated[CurrentUser, Depends(require_staff)],
    db: Annotated[Session, Depends(get_db)],
) -> MessagePostItem:
    post = message_service.edit_post(db, staff, post_id, body.title, body.content)
    return _to_item(post, staff.username)


@router.delete("/{post_id}", response_model=MessageResponse)
def delete_post(
    post_id: int,
    staff: Annotated[CurrentUser, Depends(require_staff)],
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    """Delete a post and its replies."""
    message_service.delete_post(db, staff, post_id)
    return MessageResponse(message="Message deleted successfully")
