"""Consent routes: current choices, updates, and the caller's consent history."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from portal.api.v1.auth import client_ip, get_current_user
from portal.core.config import Settings, get_settings
from portal.core.database import get_db
from portal.schemas.auth import CurrentUser
from portal.schemas.legal import (
    ConsentHistoryResponse,
    ConsentLogItem,
    ConsentStatus,
    ConsentUpdateRequest,
)
from portal.services import accounts, consent

router = APIRouter()


@router.get("/consent", response_model=ConsentStatus)
def get_consent(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> ConsentStatus:
    return consent.consent_status(accounts.get_user(db, current_user.id))


@router.post("/consent", response_model=ConsentStatus)
def update_consent(
    body: ConsentUpdateRequest,
    request: Request,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> ConsentStatus:
    """Record the caller's consent choices; every call appends to the consent log."""
    user = accounts.get_user(db, current_user.id)
    return consent.update_consent(
        db,
        user,
        body,
        document_version=settings.PRIVACY_POLICY_VERSION,
        ip_address=client_ip(request),
        user_agent=request.headers.get("user-agent"),
    )


@router.get("/consent/history", response_model=ConsentHistoryResponse)
def get_consent_history(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> ConsentHistoryResponse:
    return ConsentHistoryResponse(
        history=[
            ConsentLogItem.model_validate(entry)
            for entry in consent.consent_history(db, current_user.id)
        ]
    )
