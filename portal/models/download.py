"""ORM model for build download history."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, func

from portal.models.base import Base


class BuildDownload(Base):
    """One fetch of a build's download link by a staff account."""

    __tablename__ = "download_history"

    id = Column(Integer, primary_key=True, autoincrement=True)
    build_id = Column(
        Integer,
        ForeignKey("game_builds.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    download_date = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        index=True,
    )
    ip_address = Column(String(45), nullable=True)
    user_agent = Column(String(512), nullable=True)
