"""Session retention: delete session rows whose absolute expiry has passed."""

import logging
from datetime import datetime
from typing import TYPE_CHECKING

from portal.services.session_store import SessionStore, utcnow

if TYPE_CHECKING:
    from portal.core.config import Settings

logger = logging.getLogger(__name__)


def run_session_sweep(
    store: SessionStore,
    settings: "Settings",
    now: datetime | None = None,
) -> int:
    """
    Purge expired sessions and return how many were removed.

    Expired sessions are already rejected on use; the sweep only keeps the
    table small. Idempotent: safe to run repeatedly.
    """
    if not settings.SESSION_SWEEP_ENABLED:
        logger.info("Session sweep is disabled (SESSION_SWEEP_ENABLED=false); skipping.")
        return 0

    cutoff = now or utcnow()
    deleted_count = store.purge_expired(cutoff)
    if deleted_count > 0:
        logger.info(
            "Session sweep: cutoff=%s, sessions_deleted=%s",
            cutoff.isoformat(),
            deleted_count,
        )
    return deleted_count
