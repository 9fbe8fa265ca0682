"""Feature toggle CRUD for the admin dashboard."""

from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from portal.core.exceptions import Conflict, NotFound, ValidationFailed
from portal.models import FeatureToggle


def list_features(db: Session) -> list[FeatureToggle]:
    return db.query(FeatureToggle).order_by(FeatureToggle.feature_name).all()


def _get_feature(db: Session, feature_id: int) -> FeatureToggle:
    feature = db.get(FeatureToggle, feature_id)
    if feature is None:
        raise NotFound("Feature toggle not found")
    return feature


def _commit_or_conflict(db: Session) -> None:
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise Conflict("A feature toggle with that name already exists") from e


def create_feature(
    db: Session,
    feature_name: str,
    description: str | None,
    is_enabled: bool,
) -> FeatureToggle:
    exists = db.query(FeatureToggle.id).filter(FeatureToggle.feature_name == feature_name).first()
    if exists is not None:
        raise Conflict("A feature toggle with that name already exists")
    feature = FeatureToggle(
        feature_name=feature_name,
        description=description,
        is_enabled=is_enabled,
    )
    db.add(feature)
    _commit_or_conflict(db)
    db.refresh(feature)
    return feature


def update_feature(db: Session, feature_id: int, changes: dict[str, Any]) -> FeatureToggle:
    if not changes:
        raise ValidationFailed("No fields to update")
    feature = _get_feature(db, feature_id)
    for field, value in changes.items():
        setattr(feature, field, value)
    _commit_or_conflict(db)
    db.refresh(feature)
    return feature


def delete_feature(db: Session, feature_id: int) -> None:
    feature = _get_feature(db, feature_id)
    db.delete(feature)
    db.commit()
