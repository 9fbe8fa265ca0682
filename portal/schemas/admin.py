"""Schemas for admin dashboard endpoints: feature toggles, audit logs, stats."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator


class FeatureToggleCreate(BaseModel):
    feature_name: str = Field(..., min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=2000)
    is_enabled: bool

    @field_validator("feature_name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("feature_name must not be blank")
        return v


class FeatureToggleUpdate(BaseModel):
    """Partial update; only fields present in the body are changed."""

    feature_name: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=2000)
    is_enabled: bool | None = None

    @field_validator("feature_name")
    @classmethod
    def strip_name(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip()
        if not v:
            raise ValueError("feature_name must not be blank")
        return v


class FeatureToggleItem(BaseModel):
    id: int
    feature_name: str
    description: str | None = None
    is_enabled: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


class FeatureTogglesResponse(BaseModel):
    features: list[FeatureToggleItem]


class SystemLogItem(BaseModel):
    id: int
    user_id: int | None = None
    username: str | None = None
    action: str
    details: str | None = None
    ip_address: str | None = None
    created_at: datetime | None = None


class SystemLogsResponse(BaseModel):
    logs: list[SystemLogItem]


class StatsResponse(BaseModel):
    """Counts shown on the admin dashboard landing page."""

    users_by_role: dict[str, int]
    total_users: int = Field(..., ge=0)
    active_builds: int = Field(..., ge=0)
    active_sessions: int = Field(..., ge=0)
