"""Schemas for the account dashboard and user management endpoints."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, field_validator

from portal.core.roles import Role
from portal.core.security import normalize_email
from portal.schemas.auth import (
    validate_name_value,
    validate_username_value,
)


class UserProfile(BaseModel):
    """Full profile for GET /api/user (no password hash)."""

    id: int
    username: str
    email: str
    first_name: str | None = None
    last_name: str | None = None
    role: str
    created_at: datetime | None = None
    last_login: datetime | None = None
    data_processing_consent: bool
    marketing_consent: bool
    collect_cookies: bool
    allow_analytics: bool
    personalized_ads: bool
    receive_emails: bool
    store_purchase_history: bool
    save_game_progress: bool
    allow_community_engagement: bool

    class Config:
        from_attributes = True


class ProfileUpdateRequest(BaseModel):
    """Partial profile update; omitted fields are left unchanged."""

    username: str | None = None
    email: EmailStr | None = None
    first_name: str | None = Field(default=None, max_length=50)
    last_name: str | None = Field(default=None, max_length=50)

    @field_validator("username")
    @classmethod
    def check_username(cls, v: str | None) -> str | None:
        return None if v is None else validate_username_value(v)

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str | None) -> str | None:
        return None if v is None else normalize_email(v)

    @field_validator("first_name", "last_name")
    @classmethod
    def check_names(cls, v: str | None) -> str | None:
        return validate_name_value(v)


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(..., min_length=1, max_length=128)
    new_password: str = Field(..., min_length=1, max_length=128)


class SettingUpdateRequest(BaseModel):
    """Flip one boolean preference on the caller's account."""

    setting_key: str = Field(..., min_length=1, max_length=64)
    is_checked: bool


class PublicUser(BaseModel):
    id: int
    username: str


class RoleUpdateRequest(BaseModel):
    role: Role


class ActiveUpdateRequest(BaseModel):
    is_active: bool


class UserListItem(BaseModel):
    """User entry for admin list (no password)."""

    id: int
    username: str
    email: str
    first_name: str | None = None
    last_name: str | None = None
    role: str
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None
    last_login: datetime | None = None

    class Config:
        from_attributes = True


class UsersListResponse(BaseModel):
    """Response for GET /admin/users (admin only)."""

    users: list[UserListItem]


class AdminUserUpdateRequest(BaseModel):
    """Admin edit of another account's contact details; omitted fields are left unchanged."""

    email: EmailStr | None = None
    first_name: str | None = Field(default=None, max_length=50)
    last_name: str | None = Field(default=None, max_length=50)

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str | None) -> str | None:
        return None if v is None else normalize_email(v)

    @field_validator("first_name", "last_name")
    @classmethod
    def check_names(cls, v: str | None) -> str | None:
        return validate_name_value(v)
