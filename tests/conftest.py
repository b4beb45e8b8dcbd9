"""Shared test fixtures and configuration.

Pins environment variables so clearair.config loads predictable settings,
and provides common fixtures like a temp DB and a fixed "today".
"""

import os

# Patch env vars BEFORE any clearair imports
os.environ.setdefault("TIMEZONE", "UTC")
os.environ.setdefault("WEEK_START", "1")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

from datetime import date, datetime, timezone

import pytest

TODAY = date(2026, 10, 19)


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def tmp_db_path(tmp_path):
    """Return a temporary SQLite DB path."""
    return str(tmp_path / "test_clearair.db")


@pytest.fixture
def state_db(tmp_db_path):
    """Return a StateDB instance backed by a temp file."""
    from clearair.data.db import StateDB
    return StateDB(db_path=tmp_db_path)


@pytest.fixture
def notifier():
    from clearair.core.notifier import ChangeNotifier
    return ChangeNotifier()


@pytest.fixture
def habit_store(state_db, notifier):
    from clearair.core.habit_store import HabitStore
    return HabitStore(state_db, notifier, tz=timezone.utc)


@pytest.fixture
def tracker(state_db, notifier):
    from clearair.core.profile_tracker import ProfileStreakTracker
    return ProfileStreakTracker(state_db, notifier, tz=timezone.utc)


@pytest.fixture
def service(state_db):
    """TrackerService whose clock is pinned to TODAY at 10:00 UTC."""
    from clearair.core.tracker_service import TrackerService
    return TrackerService(
        state_db,
        tz=timezone.utc,
        week_start=1,
        clock=lambda: datetime(2026, 10, 19, 10, 0, tzinfo=timezone.utc),
    )
