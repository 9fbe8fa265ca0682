"""Game build routes: staff list and download, developers publish, owner or admin retires."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from portal.api.v1.auth import client_ip, require_admin, require_developer, require_staff
from portal.core.database import get_db
from portal.schemas.auth import CurrentUser, MessageResponse
from portal.schemas.builds import (
    BuildCreateRequest,
    BuildDownloadResponse,
    BuildItem,
    BuildsListResponse,
    DownloadItem,
    DownloadsResponse,
)
from portal.services import builds as build_service

router = APIRouter()


@router.get("", response_model=BuildsListResponse)
def list_builds(
    _staff: Annotated[CurrentUser, Depends(require_staff)],
    db: Annotated[Session, Depends(get_db)],
) -> BuildsListResponse:
    items = []
    for build, uploader in build_service.list_active_builds(db):
        item = BuildItem.model_validate(build)
        item.uploaded_by_name = uploader
        items.append(item)
    return BuildsListResponse(builds=items)


@router.post("", response_model=BuildItem, status_code=status.HTTP_201_CREATED)
def create_build(
    body: BuildCreateRequest,
    developer: Annotated[CurrentUser, Depends(require_developer)],
    db: Annotated[Session, Depends(get_db)],
) -> BuildItem:
    """Publish build metadata; the caller is recorded as the uploader."""
    build = build_service.create_build(db, developer, body)
    item = BuildItem.model_validate(build)
    item.uploaded_by_name = developer.username
    return item


@router.delete("/{build_id}", response_model=MessageResponse)
def delete_build(
    build_id: int,
    staff: Annotated[CurrentUser, Depends(require_staff)],
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    """Retire a build. Allowed for its uploader or an admin."""
    build_service.deactivate_build(db, staff, build_id)
    return MessageResponse(message="Build deleted successfully")


@router.get("/downloads", response_model=DownloadsResponse)
def list_downloads(
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> DownloadsResponse:
    """Most recent build downloads with who fetched what, newest first."""
    return DownloadsResponse(
        downloads=[
            DownloadItem(
                id=entry.id,
                build_id=entry.build_id,
                version=version,
                title=title,
                user_id=entry.user_id,
                username=username,
                role=role,
                download_date=entry.download_date,
                ip_address=entry.ip_address,
            )
            for entry, username, role, version, title in build_service.list_downloads(db)
        ]
    )


@router.get("/{build_id}/download", response_model=BuildDownloadResponse)
def download_build(
    build_id: int,
    request: Request,
    staff: Annotated[CurrentUser, Depends(require_staff)],
    db: Annotated[Session, Depends(get_db)],
) -> BuildDownloadResponse:
    """Record the download and hand back the build's link."""
    build = build_service.record_download(
        db,
        staff,
        build_id,
        ip_address=client_ip(request),
        user_agent=request.headers.get("user-agent"),
    )
    return BuildDownloadResponse(
        id=build.id,
        version=build.version,
        title=build.title,
        download_url=build.download_url,
        file_size=build.file_size,
    )
