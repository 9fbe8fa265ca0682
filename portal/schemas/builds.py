"""Request/response schemas for game build endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator


class BuildCreateRequest(BaseModel):
    """Build metadata; the binary is hosted elsewhere and referenced by download_url."""

    version: str = Field(..., min_length=1, max_length=50)
    title: str = Field(..., min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=10_000)
    download_url: str = Field(..., min_length=1, max_length=500)
    file_size: int = Field(default=0, ge=0)
    test_instructions: str | None = Field(default=None, max_length=10_000)
    known_issues: str | None = Field(default=None, max_length=10_000)

    @field_validator("version", "title")
    @classmethod
    def strip_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator("download_url")
    @classmethod
    def validate_download_url(cls, v: str) -> str:
        s = v.strip()
        if not (s.lower().startswith("https://") or s.lower().startswith("http://")):
            raise ValueError("download_url must use http or https")
        return s


class BuildItem(BaseModel):
    id: int
    version: str
    title: str
    description: str | None = None
    download_url: str
    file_size: int
    test_instructions: str | None = None
    known_issues: str | None = None
    uploaded_by: int | None = None
    uploaded_by_name: str | None = None
    upload_date: datetime | None = None

    class Config:
        from_attributes = True


class BuildsListResponse(BaseModel):
    builds: list[BuildItem]


class BuildDownloadResponse(BaseModel):
    """Download link handed out once the fetch has been recorded."""

    id: int
    version: str
    title: str
    download_url: str
    file_size: int


class DownloadItem(BaseModel):
    id: int
    build_id: int
    version: str | None = None
    title: str | None = None
    user_id: int
    username: str | None = None
    role: str | None = None
    download_date: datetime | None = None
    ip_address: str | None = None


class DownloadsResponse(BaseModel):
    downloads: list[DownloadItem]
