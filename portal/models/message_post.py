"""ORM model for staff message board posts and replies."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text, func

from portal.models.base import Base


class MessagePost(Base):
    """Top-level post when parent_id is NULL, otherwise a reply to parent_id."""

    __tablename__ = "message_posts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(200), nullable=False)
    content = Column(Text, nullable=False)
    author_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    parent_id = Column(
        Integer,
        ForeignKey("message_posts.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    is_edited = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
