"""SQLAlchemy declarative Base shared by account, session and dashboard tables."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass
