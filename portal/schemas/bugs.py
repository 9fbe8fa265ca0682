"""Request/response schemas for staff bug reports."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from portal.models import BugPriority, BugStatus

MAX_TAGS = 20


def _strip_required(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("must not be blank")
    return v


def _clean_tags(v: list[str]) -> list[str]:
    tags = [t.strip() for t in v if t.strip()]
    if any(len(t) > 50 for t in tags):
        raise ValueError("Tags must be at most 50 characters")
    return list(dict.fromkeys(tags))


class BugCreateRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1, max_length=20_000)
    priority: BugPriority = BugPriority.MEDIUM
    build_id: int | None = Field(default=None, ge=1)
    tags: list[str] = Field(default_factory=list, max_length=MAX_TAGS)

    @field_validator("title", "description")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return _strip_required(v)

    @field_validator("tags")
    @classmethod
    def clean_tags(cls, v: list[str]) -> list[str]:
        return _clean_tags(v)


class BugUpdateRequest(BaseModel):
    """Partial update. assigned_to and build_id may be cleared with null."""

    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, min_length=1, max_length=20_000)
    priority: BugPriority | None = None
    status: BugStatus | None = None
    tags: list[str] | None = Field(default=None, max_length=MAX_TAGS)
    assigned_to: int | None = Field(default=None, ge=1)
    build_id: int | None = Field(default=None, ge=1)

    @field_validator("title", "description")
    @classmethod
    def strip_text(cls, v: str | None) -> str | None:
        return None if v is None else _strip_required(v)

    @field_validator("tags")
    @classmethod
    def clean_tags(cls, v: list[str] | None) -> list[str] | None:
        return None if v is None else _clean_tags(v)


class BugItem(BaseModel):
    id: int
    title: str
    description: str
    priority: str
    status: str
    tags: list[str]
    build_id: int | None = None
    build_version: str | None = None
    build_title: str | None = None
    reported_by: int | None = None
    reporter_name: str | None = None
    assigned_to: int | None = None
    assignee_name: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


class BugsResponse(BaseModel):
    bugs: list[BugItem]


class TeamMember(BaseModel):
    id: int
    username: str
    role: str

    model_config = {"from_attributes": True}


class TeamMembersResponse(BaseModel):
    members: list[TeamMember]
