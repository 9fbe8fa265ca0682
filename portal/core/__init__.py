"""Core app configuration, database, and error types."""

from portal.core.config import get_settings, settings
from portal.core.database import get_db

__all__ = ["get_settings", "settings", "get_db"]
