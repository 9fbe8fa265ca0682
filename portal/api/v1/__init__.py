"""API routes: `auth_router` for the session endpoints, `router` for everything under the API prefix."""

from fastapi import APIRouter

from portal.api.v1 import (
    account,
    admin,
    announcements,
    auth,
    bugs,
    builds,
    health,
    legal,
    messages,
    public,
)

auth_router = auth.router

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(public.router, prefix="/public", tags=["public"])
router.include_router(account.router, tags=["account"])
router.include_router(legal.router, prefix="/legal", tags=["legal"])
router.include_router(admin.router, prefix="/admin", tags=["admin"])
router.include_router(builds.router, prefix="/builds", tags=["builds"])
router.include_router(messages.router, prefix="/staff/messages", tags=["messages"])
router.include_router(announcements.router, prefix="/staff/announcements", tags=["announcements"])
router.include_router(bugs.router, prefix="/staff/bugs", tags=["bugs"])
