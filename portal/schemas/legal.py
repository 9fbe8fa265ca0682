"""Schemas for consent management and the consent audit trail."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

# Cookie categories a visitor can switch individually; each maps to a preference column.
COOKIE_PREFERENCES = ("collect_cookies", "allow_analytics", "personalized_ads")


class ConsentUpdateRequest(BaseModel):
    """Current consent choices. Cookie categories left out keep their stored value."""

    data_processing: bool
    marketing: bool
    cookies: dict[str, bool] = Field(default_factory=dict)

    @field_validator("cookies")
    @classmethod
    def check_cookie_keys(cls, v: dict[str, bool]) -> dict[str, bool]:
        unknown = sorted(set(v) - set(COOKIE_PREFERENCES))
        if unknown:
            raise ValueError(f"Unknown cookie categories: {', '.join(unknown)}")
        return v


class ConsentStatus(BaseModel):
    data_processing: bool
    data_processing_at: datetime | None = None
    marketing: bool
    marketing_at: datetime | None = None
    cookies: dict[str, bool]


class ConsentLogItem(BaseModel):
    id: int
    consent_type: str
    consent_given: bool
    document_version: str | None = None
    ip_address: str | None = None
    created_at: datetime | None = None

    model_config = {"from_attributes": True}


class ConsentHistoryResponse(BaseModel):
    history: list[ConsentLogItem]
