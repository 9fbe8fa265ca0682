"""ORM model for the append-only consent audit log."""

from enum import Enum

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, func

from portal.models.base import Base


class ConsentType(str, Enum):
    DATA_PROCESSING = "data_processing"
    MARKETING = "marketing"
    COOKIES = "cookies"


class ConsentLogEntry(Base):
    """One consent decision as given, with the document version and client it came from."""

    __tablename__ = "user_consent_log"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    consent_type = Column(String(20), nullable=False)
    consent_given = Column(Boolean, nullable=False)
    document_version = Column(String(20), nullable=True)
    ip_address = Column(String(45), nullable=True)
    user_agent = Column(String(512), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
