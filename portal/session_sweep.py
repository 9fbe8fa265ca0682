"""
CLI entrypoint for the expired-session sweep. Run from cron, e.g.:

  python -m portal.session_sweep

Or hourly: 0 * * * * cd /srv/studio-portal && .venv/bin/python -m portal.session_sweep
"""

import logging
import sys

from portal.core.config import get_settings
from portal.core.database import SessionLocal
from portal.services.retention import run_session_sweep
from portal.services.session_store import SqlSessionStore

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main() -> int:
    """Delete sessions past their absolute expiry."""
    settings = get_settings()
    db = SessionLocal()
    try:
        deleted = run_session_sweep(SqlSessionStore(db), settings)
        logger.info("Session sweep completed: sessions_deleted=%s", deleted)
        return 0
    except Exception as e:
        logger.exception("Session sweep failed: %s", e)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
