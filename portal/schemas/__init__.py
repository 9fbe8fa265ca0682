"""Pydantic request/response schemas."""

from portal.schemas.admin import (
    FeatureToggleCreate,
    FeatureToggleItem,
    FeatureTogglesResponse,
    FeatureToggleUpdate,
    StatsResponse,
    SystemLogItem,
    SystemLogsResponse,
)
from portal.schemas.announcements import (
    AnnouncementCreate,
    AnnouncementItem,
    AnnouncementsResponse,
    AnnouncementUpdate,
)
from portal.schemas.auth import (
    AuthenticateResponse,
    AuthResponse,
    CurrentUser,
    LoginRequest,
    LogoutAllResponse,
    MessageResponse,
    RegisterRequest,
    UserSummary,
)
from portal.schemas.bugs import (
    BugCreateRequest,
    BugItem,
    BugsResponse,
    BugUpdateRequest,
    TeamMember,
    TeamMembersResponse,
)
from portal.schemas.builds import (
    BuildCreateRequest,
    BuildDownloadResponse,
    BuildItem,
    BuildsListResponse,
    DownloadItem,
    DownloadsResponse,
)
from portal.schemas.health import HealthResponse
from portal.schemas.legal import (
    ConsentHistoryResponse,
    ConsentLogItem,
    ConsentStatus,
    ConsentUpdateRequest,
)
from portal.schemas.messages import MessagePostItem, MessagePostRequest, MessagePostsResponse
from portal.schemas.public import CompanyInfo, GameInfo, TeamInfo
from portal.schemas.user import (
    ActiveUpdateRequest,
    AdminUserUpdateRequest,
    ChangePasswordRequest,
    ProfileUpdateRequest,
    PublicUser,
    RoleUpdateRequest,
    SettingUpdateRequest,
    UserListItem,
    UserProfile,
    UsersListResponse,
)

__all__ = [
    "ActiveUpdateRequest",
    "AdminUserUpdateRequest",
    "AnnouncementCreate",
    "AnnouncementItem",
    "AnnouncementsResponse",
    "AnnouncementUpdate",
    "AuthenticateResponse",
    "AuthResponse",
    "BugCreateRequest",
    "BugItem",
    "BugsResponse",
    "BugUpdateRequest",
    "BuildCreateRequest",
    "BuildDownloadResponse",
    "BuildItem",
    "BuildsListResponse",
    "ChangePasswordRequest",
    "CompanyInfo",
    "ConsentHistoryResponse",
    "ConsentLogItem",
    "ConsentStatus",
    "ConsentUpdateRequest",
    "CurrentUser",
    "DownloadItem",
    "DownloadsResponse",
    "FeatureToggleCreate",
    "FeatureToggleItem",
    "FeatureTogglesResponse",
    "FeatureToggleUpdate",
    "GameInfo",
    "HealthResponse",
    "LoginRequest",
    "LogoutAllResponse",
    "MessagePostItem",
    "MessagePostRequest",
    "MessagePostsResponse",
    "MessageResponse",
    "ProfileUpdateRequest",
    "PublicUser",
    "RegisterRequest",
    "RoleUpdateRequest",
    "SettingUpdateRequest",
    "StatsResponse",
    "SystemLogItem",
    "SystemLogsResponse",
    "TeamInfo",
    "TeamMember",
    "TeamMembersResponse",
    "UserListItem",
    "UserProfile",
    "UsersListResponse",
    "UserSummary",
]
