"""ORM model for the audit trail shown on the admin dashboard."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, func

from portal.models.base import Base


class SystemLog(Base):
    """Security-relevant action (login, logout, role change, ...) with its actor."""

    __tablename__ = "system_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    action = Column(String(100), nullable=False, index=True)
    details = Column(Text, nullable=True)
    ip_address = Column(String(45), nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        index=True,
    )
