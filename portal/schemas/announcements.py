"""Request/response schemas for team announcements."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from portal.core.roles import Role
from portal.models import ALL_ROLES

VALID_TARGETS = frozenset({ALL_ROLES} | {r.value for r in Role})


def _strip_required(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("must not be blank")
    return v


def _check_targets(v: list[str]) -> list[str]:
    if not v:
        raise ValueError("target_roles must name at least one role")
    unknown = sorted(set(v) - VALID_TARGETS)
    if unknown:
        raise ValueError(f"Unknown roles: {', '.join(unknown)}")
    # order kept, duplicates dropped
    return list(dict.fromkeys(v))


class AnnouncementCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1, max_length=20_000)
    is_sticky: bool = False
    target_roles: list[str] = Field(default_factory=lambda: [ALL_ROLES], max_length=10)

    @field_validator("title", "content")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return _strip_required(v)

    @field_validator("target_roles")
    @classmethod
    def check_targets(cls, v: list[str]) -> list[str]:
        return _check_targets(v)


class AnnouncementUpdate(BaseModel):
    """Partial update; only fields present in the body are changed."""

    title: str | None = Field(default=None, min_length=1, max_length=200)
    content: str | None = Field(default=None, min_length=1, max_length=20_000)
    is_sticky: bool | None = None
    target_roles: list[str] | None = Field(default=None, max_length=10)

    @field_validator("title", "content")
    @classmethod
    def strip_text(cls, v: str | None) -> str | None:
        return None if v is None else _strip_required(v)

    @field_validator("target_roles")
    @classmethod
    def check_targets(cls, v: list[str] | None) -> list[str] | None:
        return None if v is None else _check_targets(v)


class AnnouncementItem(BaseModel):
    id: int
    title: str
    content: str
    author_id: int | None = None
    author_name: str | None = None
    is_sticky: bool
    target_roles: list[str]
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


class AnnouncementsResponse(BaseModel):
    announcements: list[AnnouncementItem]
