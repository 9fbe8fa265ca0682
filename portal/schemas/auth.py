"""Request/response schemas for auth endpoints."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, field_validator

from portal.core.security import (
    NAME_PATTERN,
    PASSWORD_MAX_LEN,
    USERNAME_PATTERN,
    normalize_email,
    password_policy_error,
)


def validate_username_value(value: str) -> str:
    username = value.strip()
    if not USERNAME_PATTERN.match(username):
        raise ValueError("Username must be 3-20 letters, numbers or underscores")
    return username


def validate_name_value(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    name = value.strip()
    if not NAME_PATTERN.match(name):
        raise ValueError("Names may only contain letters, spaces, hyphens and apostrophes")
    return name


def validate_password_value(value: str) -> str:
    problem = password_policy_error(value)
    if problem:
        raise ValueError(problem)
    return value


class LoginRequest(BaseModel):
    """Credentials for login; identifier is a username or an email address."""

    identifier: str = Field(..., min_length=1, max_length=255, description="Username or email")
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN, description="Password")


class RegisterRequest(BaseModel):
    """New account details, including consent flags recorded with a timestamp."""

    email: EmailStr = Field(..., description="Email address (unique)")
    username: str = Field(..., description="Username (unique, 3-20 chars)")
    password: str = Field(..., description="Password (8-128 chars, at most 72 bytes, letter, number, special)")
    first_name: str | None = Field(default=None, max_length=50)
    last_name: str | None = Field(default=None, max_length=50)
    data_processing_consent: bool = Field(default=False, validate_default=True)
    marketing_consent: bool = False

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return normalize_email(v)

    @field_validator("username")
    @classmethod
    def check_username(cls, v: str) -> str:
        return validate_username_value(v)

    @field_validator("password")
    @classmethod
    def check_password(cls, v: str) -> str:
        return validate_password_value(v)

    @field_validator("first_name", "last_name")
    @classmethod
    def check_names(cls, v: str | None) -> str | None:
        return validate_name_value(v)

    @field_validator("data_processing_consent")
    @classmethod
    def require_data_processing_consent(cls, v: bool) -> bool:
        if not v:
            raise ValueError("Data processing consent is required to create an account")
        return v


class CurrentUser(BaseModel):
    """Authenticated user (id, username, email, role) for dependency injection."""

    id: int
    username: str
    email: str
    role: str

    class Config:
        from_attributes = True


class UserSummary(BaseModel):
    """Public account summary returned by register and login (never the hash)."""

    id: int
    username: str
    email: str
    role: str
    first_name: str | None = None
    last_name: str | None = None
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class AuthResponse(BaseModel):
    message: str
    user: UserSummary


class AuthenticateResponse(BaseModel):
    """Response for GET /api/authenticate."""

    user: CurrentUser


class MessageResponse(BaseModel):
    message: str


class LogoutAllResponse(BaseModel):
    message: str
    sessions_revoked: int = Field(..., ge=0)
