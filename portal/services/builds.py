"""Game builds: staff list and download, developers publish, owner or admin retires."""

import logging

from sqlalchemy.orm import Session

from portal.core.exceptions import NotFound
from portal.core.roles import ADMIN_ROLES
from portal.models import BuildDownload, GameBuild, User
from portal.schemas.auth import CurrentUser
from portal.schemas.builds import BuildCreateRequest
from portal.services.audit import record_event
from portal.services.ownership import ensure_owner_or_roles

logger = logging.getLogger(__name__)

MAX_DOWNLOAD_ROWS = 100


def list_active_builds(db: Session) -> list[tuple[GameBuild, str | None]]:
    """Active builds, newest first, with the uploader's username."""
    return (
        db.query(GameBuild, User.username)
        .outerjoin(User, GameBuild.uploaded_by == User.id)
        .filter(GameBuild.is_active.is_(True))
        .order_by(GameBuild.upload_date.desc(), GameBuild.id.desc())
        .all()
    )


def create_build(db: Session, actor: CurrentUser, body: BuildCreateRequest) -> GameBuild:
    build = GameBuild(
        version=body.version,
        title=body.title,
        description=body.description,
        download_url=body.download_url,
        file_size=body.file_size,
        test_instructions=body.test_instructions,
        known_issues=body.known_issues,
        uploaded_by=actor.id,
        is_active=True,
    )
    db.add(build)
    db.commit()
    db.refresh(build)
    record_event(
        db,
        "build.created",
        user_id=actor.id,
        details=f"build_id={build.id} version={build.version}",
    )
    return build


def deactivate_build(db: Session, actor: CurrentUser, build_id: int) -> None:
    build = (
        db.query(GameBuild)
        .filter(GameBuild.id == build_id, GameBuild.is_active.is_(True))
        .first()
    )
    if build is None:
        raise NotFound("Build not found")
    ensure_owner_or_roles(build.uploaded_by, actor, ADMIN_ROLES)
    build.is_active = False
    db.commit()
    record_event(db, "build.deleted", user_id=actor.id, details=f"build_id={build_id}")


def record_download(
    db: Session,
    actor: CurrentUser,
    build_id: int,
    ip_address: str | None = None,
    user_agent: str | None = None,
) -> GameBuild:
    """Log one fetch of an active build and return it for its download link."""
    build = (
        db.query(GameBuild)
        .filter(GameBuild.id == build_id, GameBuild.is_active.is_(True))
        .first()
    )
    if build is None:
        raise NotFound("Build not found")
    db.add(
        BuildDownload(
            build_id=build.id,
            user_id=actor.id,
            ip_address=ip_address,
            user_agent=(user_agent or "")[:512] or None,
        )
    )
    db.commit()
    logger.info("Build download: build_id=%s user_id=%s", build_id, actor.id)
    return build


def list_downloads(
    db: Session, limit: int = MAX_DOWNLOAD_ROWS
) -> list[tuple[BuildDownload, str | None, str | None, str | None, str | None]]:
    """Newest downloads as (row, username, role, build version, build title)."""
    limit = max(1, min(limit, MAX_DOWNLOAD_ROWS))
    return (
        db.query(BuildDownload, User.username, User.role, GameBuild.version, GameBuild.title)
        .outerjoin(User, BuildDownload.user_id == User.id)
        .outerjoin(GameBuild, BuildDownload.build_id == GameBuild.id)
        .order_by(BuildDownload.download_date.desc(), BuildDownload.id.desc())
        .limit(limit)
        .all()
    )
