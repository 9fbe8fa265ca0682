"""Engine construction for MySQL (production) or SQLite (local runs), and per-request sessions."""

from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine, text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from portal.core.config import Settings, settings


def engine_options(cfg: Settings) -> dict[str, Any]:
    """Keyword arguments for create_engine, depending on the database backend."""
    options: dict[str, Any] = {"pool_pre_ping": True, "echo": cfg.DEBUG}
    backend = make_url(cfg.DATABASE_URL).get_backend_name()
    if backend == "sqlite":
        # Route handlers run in a threadpool; one connection may cross threads.
        options["connect_args"] = {"check_same_thread": False}
    else:
        # MySQL closes idle connections after wait_timeout.
        options["pool_recycle"] = cfg.DB_POOL_RECYCLE_SECONDS
    return options


engine = create_engine(settings.DATABASE_URL, **engine_options(settings))

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Dependency that yields a DB session and closes it when done."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def check_db_connected(db: Session) -> bool:
    """SELECT 1 against the request's session; False on any database error."""
    try:
        db.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError:
        db.rollback()
        return False
