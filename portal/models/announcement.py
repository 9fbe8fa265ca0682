"""ORM model for team announcements pinned on the staff dashboard."""

from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, Integer, String, Text, func

from portal.models.base import Base

# target_roles entry that reaches every staff role.
ALL_ROLES = "all"


class TeamAnnouncement(Base):
    """Announcement shown to the staff roles listed in target_roles; sticky ones sort first."""

    __tablename__ = "team_announcements"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(200), nullable=False)
    content = Column(Text, nullable=False)
    author_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    is_sticky = Column(Boolean, nullable=False, default=False)
    target_roles = Column(JSON, nullable=False, default=lambda: [ALL_ROLES])
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
