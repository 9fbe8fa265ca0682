"""Consent choices on the account plus the append-only log of every decision."""

from sqlalchemy.orm import Session

from portal.models import ConsentLogEntry, ConsentType, User
from portal.schemas.legal import COOKIE_PREFERENCES, ConsentStatus, ConsentUpdateRequest
from portal.services.audit import record_event
from portal.services.session_store import utcnow


def consent_status(user: User) -> ConsentStatus:
    return ConsentStatus(
        data_processing=user.data_processing_consent,
        data_processing_at=user.data_processing_consent_at,
        marketing=user.marketing_consent,
        marketing_at=user.marketing_consent_at,
        cookies={name: getattr(user, name) for name in COOKIE_PREFERENCES},
    )


def _set_consent(user: User, field: str, given: bool) -> None:
    # The timestamp records when consent was last granted; withdrawal clears it.
    if getattr(user, field) != given:
        setattr(user, field, given)
        setattr(user, f"{field}_at", utcnow() if given else None)
    elif given and getattr(user, f"{field}_at") is None:
        setattr(user, f"{field}_at", utcnow())


def update_consent(
    db: Session,
    user: User,
    body: ConsentUpdateRequest,
    document_version: str,
    ip_address: str | None = None,
    user_agent: str | None = None,
) -> ConsentStatus:
    """Store the choices and log one row per consent type, whether or not it changed."""
    _set_consent(user, "data_processing_consent", body.data_processing)
    _set_consent(user, "marketing_consent", body.marketing)
    for name, enabled in body.cookies.items():
        setattr(user, name, enabled)

    decisions = (
        (ConsentType.DATA_PROCESSING, body.data_processing),
        (ConsentType.MARKETING, body.marketing),
        (ConsentType.COOKIES, bool(user.collect_cookies)),
    )
    for consent_type, given in decisions:
        db.add(
            ConsentLogEntry(
                user_id=user.id,
                consent_type=consent_type.value,
                consent_given=given,
                document_version=document_version,
                ip_address=ip_address,
                user_agent=(user_agent or "")[:512] or None,
            )
        )
    db.commit()
    db.refresh(user)
    record_event(
        db,
        "user.consent_updated",
        user_id=user.id,
        details=f"data_processing={body.data_processing} marketing={body.marketing}",
        ip_address=ip_address,
    )
    return consent_status(user)


def consent_history(db: Session, user_id: int) -> list[ConsentLogEntry]:
    """The user's consent log, newest first."""
    return (
        db.query(ConsentLogEntry)
        .filter(ConsentLogEntry.user_id == user_id)
        .order_by(ConsentLogEntry.created_at.desc(), ConsentLogEntry.id.desc())
        .all()
    )
