"""ORM model for game builds listed on the staff dashboard."""

from sqlalchemy import BigInteger, Boolean, Column, DateTime, ForeignKey, Integer, String, Text, func

from portal.models.base import Base


class GameBuild(Base):
    """
    Build metadata. The binary itself lives behind download_url;
    rows are soft-deleted by clearing is_active.
    """

    __tablename__ = "game_builds"

    id = Column(Integer, primary_key=True, autoincrement=True)
    version = Column(String(50), nullable=False)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    download_url = Column(String(500), nullable=False)
    file_size = Column(BigInteger, nullable=False, default=0)
    test_instructions = Column(Text, nullable=True)
    known_issues = Column(Text, nullable=True)
    uploaded_by = Column(
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    upload_date = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    is_active = Column(Boolean, nullable=False, default=True, index=True)
