"""Session login/logout routes and the auth dependencies (get_current_user, require_roles)."""

import logging
from collections.abc import Callable
from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.orm import Session

from portal.core.config import Settings, get_settings
from portal.core.database import get_db
from portal.core.exceptions import Forbidden
from portal.core.roles import ADMIN_ROLES, DEVELOPER_ROLES, STAFF_ROLES, Role
from portal.schemas.auth import (
    AuthResponse,
    CurrentUser,
    LoginRequest,
    LogoutAllResponse,
    MessageResponse,
    RegisterRequest,
    UserSummary,
)
from portal.services.audit import record_event
from portal.services.auth import Authenticator, register_user
from portal.services.session_store import SessionStore, SqlSessionStore

logger = logging.getLogger(__name__)
router = APIRouter()


def get_session_store(db: Annotated[Session, Depends(get_db)]) -> SessionStore:
    """Dependency: session store for this request (override in tests to swap the backend)."""
    return SqlSessionStore(db)


def get_authenticator(
    db: Annotated[Session, Depends(get_db)],
    store: Annotated[SessionStore, Depends(get_session_store)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> Authenticator:
    return Authenticator(store=store, db=db, settings=settings)


def client_ip(request: Request) -> str | None:
    return request.client.host if request.client else None


def session_token(request: Request, settings: Settings) -> str | None:
    return request.cookies.get(settings.SESSION_COOKIE_NAME)


def set_session_cookie(response: Response, token: str, settings: Settings) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.SESSION_TTL_HOURS * 3600,
        path="/",
        domain=settings.SESSION_COOKIE_DOMAIN,
        secure=settings.SESSION_COOKIE_SECURE,
        httponly=True,
        samesite=settings.SESSION_COOKIE_SAMESITE,
    )


def clear_session_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(
        key=settings.SESSION_COOKIE_NAME,
        path="/",
        domain=settings.SESSION_COOKIE_DOMAIN,
        secure=settings.SESSION_COOKIE_SECURE,
        httponly=True,
        samesite=settings.SESSION_COOKIE_SAMESITE,
    )


def get_current_user(
    request: Request,
    authenticator: Annotated[Authenticator, Depends(get_authenticator)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> CurrentUser:
    """Dependency: require a valid session cookie and return the current user. Raises 401 otherwise."""
    user = authenticator.authenticate(session_token(request, settings))
    request.state.user_id = user.id
    return CurrentUser.model_validate(user)


def require_roles(*roles: Role) -> Callable[..., CurrentUser]:
    """
    Build a dependency that lets the request through only when the caller's
    role is one of roles. Runs after get_current_user; raises 403 otherwise.
    """
    allowed = frozenset(r.value for r in roles)

    def dependency(
        current_user: Annotated[CurrentUser, Depends(get_current_user)],
    ) -> CurrentUser:
        if current_user.role not in allowed:
            logger.info(
                "Forbidden: user_id=%s role=%s allowed=%s",
                current_user.id,
                current_user.role,
                sorted(allowed),
            )
            raise Forbidden()
        return current_user

    return dependency


require_staff = require_roles(*STAFF_ROLES)
require_developer = require_roles(*DEVELOPER_ROLES)
require_admin = require_roles(*ADMIN_ROLES)


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    request: Request,
    db: Annotated[Session, Depends(get_db)],
) -> AuthResponse:
    """Create an account with role 'user'. Log in separately to start a session."""
    user = register_user(db, body, ip_address=client_ip(request))
    return AuthResponse(
        message="User registered successfully",
        user=UserSummary.model_validate(user),
    )


@router.post("/login", response_model=AuthResponse)
def login(
    body: LoginRequest,
    request: Request,
    response: Response,
    authenticator: Annotated[Authenticator, Depends(get_authenticator)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> AuthResponse:
    """
    Authenticate with username or email and password; sets the session cookie.
    Any failure returns the same 401 body so accounts cannot be enumerated.
    """
    user, token = authenticator.login(
        body.identifier,
        body.password,
        ip_address=client_ip(request),
        user_agent=request.headers.get("user-agent"),
    )
    set_session_cookie(response, token, settings)
    return AuthResponse(message="Login successful", user=UserSummary.model_validate(user))


@router.post("/logout", response_model=MessageResponse)
def logout(
    request: Request,
    response: Response,
    authenticator: Annotated[Authenticator, Depends(get_authenticator)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> MessageResponse:
    """End the current session. Succeeds even when no session is present."""
    authenticator.logout(session_token(request, settings))
    clear_session_cookie(response, settings)
    return MessageResponse(message="Logged out successfully")


@router.post("/logout-all", response_model=LogoutAllResponse)
def logout_all(
    request: Request,
    response: Response,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    authenticator: Annotated[Authenticator, Depends(get_authenticator)],
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> LogoutAllResponse:
    """End every session of the caller on every device."""
    revoked = authenticator.logout_all(current_user.id)
    record_event(
        db,
        "user.logout_all",
        user_id=current_user.id,
        details=f"sessions_revoked={revoked}",
        ip_address=client_ip(request),
    )
    clear_session_cookie(response, settings)
    return LogoutAllResponse(message="Logged out from all devices", sessions_revoked=revoked)
