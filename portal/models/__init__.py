"""SQLAlchemy ORM models."""

from portal.models.announcement import ALL_ROLES, TeamAnnouncement
from portal.models.base import Base
from portal.models.bug_report import BugPriority, BugReport, BugStatus
from portal.models.consent_log import ConsentLogEntry, ConsentType
from portal.models.download import BuildDownload
from portal.models.feature_toggle import FeatureToggle
from portal.models.game_build import GameBuild
from portal.models.message_post import MessagePost
from portal.models.session import UserSession
from portal.models.system_log import SystemLog
from portal.models.user import PREFERENCE_FIELDS, User

__all__ = [
    "ALL_ROLES",
    "Base",
    "BugPriority",
    "BugReport",
    "BugStatus",
    "BuildDownload",
    "ConsentLogEntry",
    "ConsentType",
    "FeatureToggle",
    "GameBuild",
    "MessagePost",
    "PREFERENCE_FIELDS",
    "SystemLog",
    "TeamAnnouncement",
    "User",
    "UserSession",
]
