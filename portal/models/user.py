"""ORM model for site accounts (credentials, role, consents, preferences)."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String, func, true

from portal.models.base import Base

# Boolean preference columns a user may flip from the account dashboard.
PREFERENCE_FIELDS = (
    "collect_cookies",
    "allow_analytics",
    "personalized_ads",
    "receive_emails",
    "store_purchase_history",
    "save_game_progress",
    "allow_community_engagement",
)


class User(Base):
    """
    Account used for session authentication and role-based access control.

    role: one of portal.core.roles.Role (stored as its string value)
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    username = Column(String(50), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    first_name = Column(String(50), nullable=True)
    last_name = Column(String(50), nullable=True)
    role = Column(String(32), nullable=False, default="user", server_default="user")
    is_active = Column(Boolean, nullable=False, default=True, server_default=true())

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
    last_login = Column(DateTime(timezone=True), nullable=True)

    data_processing_consent = Column(Boolean, nullable=False, default=False)
    data_processing_consent_at = Column(DateTime(timezone=True), nullable=True)
    marketing_consent = Column(Boolean, nullable=False, default=False)
    marketing_consent_at = Column(DateTime(timezone=True), nullable=True)

    collect_cookies = Column(Boolean, nullable=False, default=False)
    allow_analytics = Column(Boolean, nullable=False, default=False)
    personalized_ads = Column(Boolean, nullable=False, default=False)
    receive_emails = Column(Boolean, nullable=False, default=False)
    store_purchase_history = Column(Boolean, nullable=False, default=True)
    save_game_progress = Column(Boolean, nullable=False, default=True)
    allow_community_engagement = Column(Boolean, nullable=False, default=True)
