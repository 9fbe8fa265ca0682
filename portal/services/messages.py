"""Staff message board: threads of posts with one level of replies."""

from sqlalchemy import func
from sqlalchemy.orm import Session, aliased

from portal.core.exceptions import NotFound
from portal.models import MessagePost, User
from portal.schemas.auth import CurrentUser
from portal.services.ownership import ensure_owner


def list_threads(db: Session) -> list[tuple[MessagePost, str | None, int]]:
    """Top-level posts, newest first, as (post, author username, reply count)."""
    reply = aliased(MessagePost)
    reply_count = (
        db.query(func.count(reply.id))
        .filter(reply.parent_id == MessagePost.id)
        .correlate(MessagePost)
        .scalar_subquery()
    )
    return (
        db.query(MessagePost, User.username, reply_count)
        .outerjoin(User, MessagePost.author_id == User.id)
        .filter(MessagePost.parent_id.is_(None))
        .order_by(MessagePost.created_at.desc(), MessagePost.id.desc())
        .all()
    )


def _get_post(db: Session, post_id: int) -> MessagePost:
    post = db.get(MessagePost, post_id)
    if post is None:
        raise NotFound("Message not found")
    return post


def list_replies(db: Session, post_id: int) -> list[tuple[MessagePost, str | None]]:
    _get_post(db, post_id)
    return (
        db.query(MessagePost, User.username)
        .outerjoin(User, MessagePost.author_id == User.id)
        .filter(MessagePost.parent_id == post_id)
        .order_by(MessagePost.created_at.asc(), MessagePost.id.asc())
        .all()
    )


def create_post(
    db: Session,
    author: CurrentUser,
    title: str,
    content: str,
    parent_id: int | None = None,
) -> MessagePost:
    if parent_id is not None:
        parent = _get_post(db, parent_id)
        # Replies attach to the thread root so threads stay one level deep.
        if parent.parent_id is not None:
            parent_id = parent.parent_id
    post = MessagePost(
        title=title,
        content=content,
        author_id=author.id,
        parent_id=parent_id,
        is_edited=False,
    )
    db.add(post)
    db.commit()
    db.refresh(post)
    return post


def edit_post(db: Session, author: CurrentUser, post_id: int, title: str, content: str) -> MessagePost:
    post = _get_post(db, post_id)
    ensure_owner(post.author_id, author)
    post.title = title
    post.content = content
    post.is_edited = True
    db.commit()
    db.refresh(post)
    return post


def delete_post(db: Session, author: CurrentUser, post_id: int) -> None:
    post = _get_post(db, post_id)
    ensure_owner(post.author_id, author)
    db.query(MessagePost).filter(MessagePost.parent_id == post_id).delete(
        synchronize_session=False
    )
    db.delete(post)
    db.commit()
