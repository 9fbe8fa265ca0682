"""Request/response schemas for the staff message board."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator


class MessagePostRequest(BaseModel):
    """New post, reply (parent_id set), or edit (parent_id ignored)."""

    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1, max_length=20_000)
    parent_id: int | None = Field(default=None, ge=1)

    @field_validator("title", "content")
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v


class MessagePostItem(BaseModel):
    id: int
    title: str
    content: str
    author_id: int
    author_name: str | None = None
    parent_id: int | None = None
    is_edited: bool = False
    reply_count: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


class MessagePostsResponse(BaseModel):
    posts: list[MessagePostItem]
