"""Admin dashboard routes (admin and CEO only): users, feature toggles, logs, stats."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from portal.api.v1.auth import get_session_store, require_admin
from portal.core.database import get_db
from portal.models import GameBuild
from portal.schemas.admin import (
    FeatureToggleCreate,
    FeatureToggleItem,
    FeatureTogglesResponse,
    FeatureToggleUpdate,
    StatsResponse,
    SystemLogItem,
    SystemLogsResponse,
)
from portal.schemas.auth import CurrentUser, MessageResponse
from portal.schemas.user import (
    AdminUserUpdateRequest,
    ActiveUpdateRequest,
    RoleUpdateRequest,
    UserListItem,
    UsersListResponse,
)
from portal.services import accounts, features
from portal.services.audit import MAX_LOG_ROWS, list_events, record_event
from portal.services.session_store import SessionStore

router = APIRouter()


@router.get("/users", response_model=UsersListResponse)
def list_users(
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> UsersListResponse:
    """List all users, newest first."""
    return UsersListResponse(
        users=[UserListItem.model_validate(u) for u in accounts.list_users(db)]
    )


@router.put("/users/{user_id}", response_model=UserListItem)
def update_user(
    user_id: int,
    body: AdminUserUpdateRequest,
    admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> UserListItem:
    """Edit another account's email or names. Names may be cleared with null."""
    changes = {
        field: value
        for field, value in body.model_dump(exclude_unset=True).items()
        if value is not None or field in ("first_name", "last_name")
    }
    return UserListItem.model_validate(accounts.admin_update_user(db, admin, user_id, changes))


@router.put("/users/{user_id}/role", response_model=UserListItem)
def update_user_role(
    user_id: int,
    body: RoleUpdateRequest,
    admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> UserListItem:
    return UserListItem.model_validate(accounts.admin_set_role(db, admin, user_id, body.role))


@router.put("/users/{user_id}/active", response_model=UserListItem)
def update_user_active(
    user_id: int,
    body: ActiveUpdateRequest,
    admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
    store: Annotated[SessionStore, Depends(get_session_store)],
) -> UserListItem:
    """Enable or disable an account. Disabling logs it out everywhere."""
    user = accounts.admin_set_active(db, store, admin, user_id, body.is_active)
    return UserListItem.model_validate(user)


@router.delete("/users/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: int,
    admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
    store: Annotated[SessionStore, Depends(get_session_store)],
) -> MessageResponse:
    accounts.admin_delete_user(db, store, admin, user_id)
    return MessageResponse(message="User deleted successfully")


@router.get("/features", response_model=FeatureTogglesResponse)
def list_feature_toggles(
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> FeatureTogglesResponse:
    return FeatureTogglesResponse(
        features=[FeatureToggleItem.model_validate(f) for f in features.list_features(db)]
    )


@router.post("/features", response_model=FeatureToggleItem, status_code=status.HTTP_201_CREATED)
def create_feature_toggle(
    body: FeatureToggleCreate,
    admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> FeatureToggleItem:
    feature = features.create_feature(db, body.feature_name, body.description, body.is_enabled)
    record_event(db, "admin.feature_created", user_id=admin.id, details=feature.feature_name)
    return FeatureToggleItem.model_validate(feature)


@router.put("/features/{feature_id}", response_model=FeatureToggleItem)
def update_feature_toggle(
    feature_id: int,
    body: FeatureToggleUpdate,
    admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> FeatureToggleItem:
    # description may be cleared with null; name and flag may not
    changes = {
        field: value
        for field, value in body.model_dump(exclude_unset=True).items()
        if value is not None or field == "description"
    }
    feature = features.update_feature(db, feature_id, changes)
    record_event(db, "admin.feature_updated", user_id=admin.id, details=feature.feature_name)
    return FeatureToggleItem.model_validate(feature)


@router.delete("/features/{feature_id}", response_model=MessageResponse)
def delete_feature_toggle(
    feature_id: int,
    admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    features.delete_feature(db, feature_id)
    record_event(db, "admin.feature_deleted", user_id=admin.id, details=f"feature_id={feature_id}")
    return MessageResponse(message="Feature toggle deleted successfully")


@router.get("/logs", response_model=SystemLogsResponse)
def list_system_logs(
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
    limit: Annotated[int, Query(ge=1, le=MAX_LOG_ROWS)] = MAX_LOG_ROWS,
) -> SystemLogsResponse:
    """Most recent audit entries, newest first."""
    return SystemLogsResponse(
        logs=[
            SystemLogItem(
                id=entry.id,
                user_id=entry.user_id,
                username=username,
                action=entry.action,
                details=entry.details,
                ip_address=entry.ip_address,
                created_at=entry.created_at,
            )
            for entry, username in list_events(db, limit)
        ]
    )


@router.get("/stats", response_model=StatsResponse)
def get_stats(
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
    store: Annotated[SessionStore, Depends(get_session_store)],
) -> StatsResponse:
    by_role = accounts.count_users_by_role(db)
    active_builds = db.query(GameBuild).filter(GameBuild.is_active.is_(True)).count()
    return StatsResponse(
        users_by_role=by_role,
        total_users=sum(by_role.values()),
        active_builds=active_builds,
        active_sessions=store.count_active(),
    )
