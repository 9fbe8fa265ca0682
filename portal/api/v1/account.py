"""Account dashboard routes: identity, profile, preferences, password, export, deletion."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from portal.api.v1.auth import (
    clear_session_cookie,
    client_ip,
    get_authenticator,
    get_current_user,
    get_session_store,
    require_staff,
)
from portal.core.config import Settings, get_settings
from portal.core.database import get_db
from portal.schemas.auth import AuthenticateResponse, CurrentUser, MessageResponse
from portal.schemas.user import (
    ChangePasswordRequest,
    ProfileUpdateRequest,
    PublicUser,
    RoleUpdateRequest,
    SettingUpdateRequest,
    UserListItem,
    UserProfile,
)
from portal.services import accounts
from portal.services.auth import Authenticator
from portal.services.session_store import SessionStore

router = APIRouter()

# Fields that may be cleared by sending null; the rest are ignored when null.
NULLABLE_PROFILE_FIELDS = frozenset({"first_name", "last_name"})


@router.get("/authenticate", response_model=AuthenticateResponse)
def authenticate(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> AuthenticateResponse:
    """Return the identity behind the session cookie, or 401."""
    return AuthenticateResponse(user=current_user)


@router.get("/user", response_model=UserProfile)
def get_profile(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> UserProfile:
    user = accounts.get_user(db, current_user.id)
    return UserProfile.model_validate(user)


@router.put("/user/profile", response_model=UserProfile)
def update_profile(
    body: ProfileUpdateRequest,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> UserProfile:
    changes = {
        field: value
        for field, value in body.model_dump(exclude_unset=True).items()
        if value is not None or field in NULLABLE_PROFILE_FIELDS
    }
    user = accounts.get_user(db, current_user.id)
    return UserProfile.model_validate(accounts.update_profile(db, user, changes))


@router.put("/user/settings", response_model=MessageResponse)
def update_setting(
    body: SettingUpdateRequest,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    """Flip one boolean preference (cookies, analytics, emails, ...)."""
    user = accounts.get_user(db, current_user.id)
    accounts.update_preference(db, user, body.setting_key, body.is_checked)
    return MessageResponse(message="Setting updated successfully")


@router.post("/user/change-password", response_model=MessageResponse)
def change_password(
    body: ChangePasswordRequest,
    request: Request,
    response: Response,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    authenticator: Annotated[Authenticator, Depends(get_authenticator)],
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> MessageResponse:
    """Change password; every session of the account, including this one, is ended."""
    user = accounts.get_user(db, current_user.id)
    authenticator.change_password(
        user,
        body.current_password,
        body.new_password,
        ip_address=client_ip(request),
    )
    clear_session_cookie(response, settings)
    return MessageResponse(message="Password changed successfully. Please log in again.")


@router.get("/user/export")
def export_data(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> JSONResponse:
    """Download everything stored about the caller as a JSON attachment."""
    user = accounts.get_user(db, current_user.id)
    return JSONResponse(
        content=accounts.export_user_data(db, user),
        headers={"Content-Disposition": 'attachment; filename="my_data.json"'},
    )


@router.delete("/user", response_model=MessageResponse)
def delete_account(
    request: Request,
    response: Response,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    store: Annotated[SessionStore, Depends(get_session_store)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> MessageResponse:
    accounts.delete_own_account(db, store, current_user, ip_address=client_ip(request))
    clear_session_cookie(response, settings)
    return MessageResponse(message="Account successfully deleted.")


@router.get("/users/{user_id}/public", response_model=PublicUser)
def public_user(
    user_id: int,
    db: Annotated[Session, Depends(get_db)],
) -> PublicUser:
    """Username as shown to other players; HIDDEN_USER when the account opted out."""
    uid, username = accounts.public_username(db, user_id)
    return PublicUser(id=uid, username=username)


@router.put("/users/{user_id}/role", response_model=UserListItem)
def staff_update_role(
    user_id: int,
    body: RoleUpdateRequest,
    staff: Annotated[CurrentUser, Depends(require_staff)],
    db: Annotated[Session, Depends(get_db)],
) -> UserListItem:
    """Staff grant roles ranked below their own to accounts ranked below them."""
    user = accounts.staff_set_role(db, staff, user_id, body.role)
    return UserListItem.model_validate(user)
