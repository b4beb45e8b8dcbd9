"""
Clear Air Habit — Profile Streak Tracker.

Owns the user profile and the smoke-free days. The current streak is always
recomputed from the days; the best streak is cached on the profile and only
ever raised, so un-marking days can never lower a record once reached.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import fields, replace
from datetime import date, datetime, timezone, tzinfo
from typing import TYPE_CHECKING, Any

from clearair.core import streaks
from clearair.core.date_set import DateSet
from clearair.core.notifier import ChangeEvent, ChangeKind, ChangeNotifier
from clearair.data.db import PROFILE_KEY, SMOKE_FREE_DAYS_KEY
from clearair.data.models import AppTheme, UserProfile
from clearair.data.records import (
    decode_days,
    decode_profile,
    encode_days,
    encode_profile,
    validate_profile,
)
from clearair.ports.storage_port import DecodeError

if TYPE_CHECKING:
    from clearair.ports.storage_port import StoragePort

logger = logging.getLogger(__name__)

_EDITABLE_FIELDS = {f.name for f in fields(UserProfile)} - {"max_streak"}


class ProfileStreakTracker:
    """Smoke-free day tracking plus the monotonic max-streak cache."""

    def __init__(
        self,
        storage: StoragePort,
        notifier: ChangeNotifier | None = None,
        tz: tzinfo | None = None,
    ) -> None:
        self._storage = storage
        self._notifier = notifier if notifier is not None else ChangeNotifier()
        self._tz = tz if tz is not None else timezone.utc
        self._lock = threading.RLock()
        self._profile = self._load_profile()
        self._days = self._load_days()

        # Data from an older install may predate the cached max streak.
        if self._days and self._profile.max_streak == 0:
            logger.info("Recomputing max streak for %d existing smoke-free days", len(self._days))
            self.refresh_max_streak()

    def _load_profile(self) -> UserProfile:
        raw = self._storage.get_document(PROFILE_KEY)
        if raw is None:
            return UserProfile()
        try:
            return decode_profile(raw)
        except DecodeError as exc:
            logger.warning("Profile document unreadable, using defaults: %s", exc)
            return UserProfile()

    def _load_days(self) -> DateSet:
        raw = self._storage.get_document(SMOKE_FREE_DAYS_KEY)
        if raw is None:
            return DateSet(tz=self._tz)
        try:
            return decode_days(raw, tz=self._tz)
        except DecodeError as exc:
            logger.warning("Smoke-free days document unreadable, starting empty: %s", exc)
            return DateSet(tz=self._tz)

    def _save_profile(self) -> None:
        self._storage.put_document(PROFILE_KEY, encode_profile(self._profile, tz=self._tz))

    def _save_days(self) -> None:
        self._storage.put_document(SMOKE_FREE_DAYS_KEY, encode_days(self._days, tz=self._tz))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def profile(self) -> UserProfile:
        with self._lock:
            return replace(self._profile)

    @property
    def smoke_free_days(self) -> DateSet:
        with self._lock:
            return self._days

    def is_smoke_free(self, value: date | datetime) -> bool:
        with self._lock:
            return self._days.contains(value)

    def current_streak(self, today: date) -> int:
        with self._lock:
            return streaks.current_streak(self._days, today)

    def max_streak(self) -> int:
        with self._lock:
            return self._profile.max_streak

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def refresh_max_streak(self) -> int:
        """Recompute the best streak and store it if it beats the cached one.

        Returns the cached value after the pass.
        """
        with self._lock:
            computed = streaks.max_streak(self._days)
            if computed > self._profile.max_streak:
                previous = self._profile.max_streak
                self._profile = replace(self._profile, max_streak=computed)
                self._save_profile()
                logger.info("Max streak raised: %d -> %d", previous, computed)
            return self._profile.max_streak

    def toggle_smoke_free_day(self, value: date | datetime) -> bool:
        """Flip one smoke-free day. Returns True if the day is now marked."""
        with self._lock:
            self._days = self._days.toggle(value)
            self._save_days()
            self.refresh_max_streak()
            marked = self._days.contains(value)
        logger.info("Smoke-free day %s %s", value, "marked" if marked else "cleared")
        self._notifier.publish(ChangeEvent(ChangeKind.SMOKE_FREE_DAYS))
        return marked

    def save_profile(self, **changes: Any) -> UserProfile:
        """Update profile fields. ``max_streak`` is not caller-editable.

        Raises ValueError for unknown fields or values that cannot be stored;
        the profile is left untouched in that case.
        """
        unknown = set(changes) - _EDITABLE_FIELDS
        if unknown:
            raise ValueError(f"Unknown or read-only profile fields: {sorted(unknown)}")

        with self._lock:
            # Raises before anything is assigned when a value cannot be stored.
            self._profile = validate_profile(replace(self._profile, **changes), self._tz)
            self._save_profile()
            profile = replace(self._profile)
        logger.info("Profile saved: %s", ", ".join(sorted(changes)) or "no changes")
        self._notifier.publish(ChangeEvent(ChangeKind.PROFILE))
        return profile

    def set_theme(self, theme: AppTheme | str) -> UserProfile:
        return self.save_profile(theme=theme)
