"""Tests for the expired-session sweep (run_session_sweep and its CLI)."""

import unittest
from datetime import timedelta
from unittest.mock import MagicMock, patch

from portal.services.retention import run_session_sweep
from portal.services.session_store import InMemorySessionStore, SessionRecord, utcnow


class TestSweepDisabled(unittest.TestCase):
    """When SESSION_SWEEP_ENABLED is False, the store is not touched."""

    def test_returns_zero_and_does_not_purge(self) -> None:
        settings = MagicMock()
        settings.SESSION_SWEEP_ENABLED = False
        store = MagicMock()
        self.assertEqual(run_session_sweep(store, settings), 0)
        store.purge_expired.assert_not_called()


class TestSweepPurges(unittest.TestCase):
    def test_passes_cutoff_and_returns_count(self) -> None:
        settings = MagicMock()
        settings.SESSION_SWEEP_ENABLED = True
        store = MagicMock()
        store.purge_expired.return_value = 3
        now = utcnow()
        self.assertEqual(run_session_sweep(store, settings, now=now), 3)
        store.purge_expired.assert_called_once_with(now)

    def test_only_expired_sessions_removed(self) -> None:
        settings = MagicMock()
        settings.SESSION_SWEEP_ENABLED = True
        store = InMemorySessionStore()
        for name, hours in (("old", -2), ("fresh", 2)):
            store.create(
                SessionRecord(
                    token_hash=name,
                    user_id=1,
                    username="alice",
                    role="user",
                    expires_at=utcnow() + timedelta(hours=hours),
                )
            )
        self.assertEqual(run_session_sweep(store, settings), 1)
        self.assertEqual(run_session_sweep(store, settings), 0)
        self.assertIsNotNone(store.get("fresh"))


class TestSweepCli(unittest.TestCase):
    def test_main_returns_zero_and_closes_session(self) -> None:
        from portal import session_sweep

        db = MagicMock()
        with patch.object(session_sweep, "SessionLocal", return_value=db), patch.object(
            session_sweep, "run_session_sweep", return_value=2
        ) as sweep:
            self.assertEqual(session_sweep.main(), 0)
        sweep.assert_called_once()
        db.close.assert_called_once()

    def test_main_returns_one_on_failure(self) -> None:
        from portal import session_sweep

        db = MagicMock()
        with patch.object(session_sweep, "SessionLocal", return_value=db), patch.object(
            session_sweep, "run_session_sweep", side_effect=RuntimeError("db down")
        ):
            self.assertEqual(session_sweep.main(), 1)
        db.close.assert_called_once()


if __name__ == "__main__":
    unittest.main()
