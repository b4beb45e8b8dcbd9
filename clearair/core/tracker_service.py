"""
Clear Air Habit — UI-Agnostic Tracker Service.

The single object presentation layers talk to. It is constructed explicitly
at startup (``TrackerService.from_settings()``) and passed to whoever needs
it; there is no module-level instance. Lifecycle: construct, persist on every
command, no teardown.

Queries never write. Commands mutate the owning component, persist, then
notify subscribers synchronously.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone, tzinfo
from typing import TYPE_CHECKING, Any, Callable

from clearair.core import calendar_grid, milestones
from clearair.core.date_set import normalize_day
from clearair.core.habit_store import HabitStore, validate_title
from clearair.core.notifier import ChangeNotifier
from clearair.core.profile_tracker import ProfileStreakTracker

if TYPE_CHECKING:
    from clearair.config import Settings
    from clearair.core.calendar_grid import CalendarGridCell
    from clearair.core.milestones import HealthFact
    from clearair.data.models import AppTheme, Habit, UserProfile
    from clearair.ports.notification_port import ChangeListener
    from clearair.ports.storage_port import StoragePort

logger = logging.getLogger(__name__)


class TrackerService:
    """Collaborator-facing facade over habits, smoke-free days and the profile."""

    def __init__(
        self,
        storage: StoragePort,
        tz: tzinfo | None = None,
        week_start: int = 1,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._tz = tz if tz is not None else timezone.utc
        self._week_start = week_start
        self._clock = clock or (lambda: datetime.now(self._tz))
        self._notifier = ChangeNotifier()
        self.habits = HabitStore(storage, self._notifier, tz=self._tz)
        self.tracker = ProfileStreakTracker(storage, self._notifier, tz=self._tz)

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> TrackerService:
        """Build the service graph from configuration."""
        from clearair.data.db import StateDB

        if settings is None:
            from clearair.config import settings

        storage = StateDB(db_path=settings.DATABASE_PATH)
        logger.info(
            "Tracker service ready (db=%s, tz=%s, week_start=%d)",
            settings.DATABASE_PATH, settings.TIMEZONE, settings.WEEK_START,
        )
        return cls(storage, tz=settings.tz, week_start=settings.WEEK_START)

    # ------------------------------------------------------------------
    # Change notification
    # ------------------------------------------------------------------

    def subscribe(self, listener: ChangeListener) -> None:
        self._notifier.subscribe(listener)

    def unsubscribe(self, listener: ChangeListener) -> None:
        self._notifier.unsubscribe(listener)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def week_start(self) -> int:
        return self._week_start

    @property
    def tz(self) -> tzinfo:
        return self._tz

    def today(self) -> date:
        """Today's calendar day in the reference timezone."""
        return normalize_day(self._clock(), self._tz)

    def list_habits(self) -> list[Habit]:
        return self.habits.list_all()

    def get_habit(self, habit_id: str) -> Habit | None:
        return self.habits.get(habit_id)

    def habit_current_streak(self, habit_id: str) -> int:
        return self.habits.current_streak(habit_id, self.today())

    def habit_max_streak(self, habit_id: str) -> int:
        return self.habits.max_streak(habit_id)

    def is_habit_completed(self, habit_id: str, value: date | datetime) -> bool:
        return self.habits.is_completed(habit_id, value)

    def is_smoke_free(self, value: date | datetime) -> bool:
        return self.tracker.is_smoke_free(value)

    def smoke_free_current_streak(self) -> int:
        return self.tracker.current_streak(self.today())

    def max_streak(self) -> int:
        return self.tracker.max_streak()

    def profile(self) -> UserProfile:
        return self.tracker.profile

    def month_grid(self, anchor: date | datetime | None = None) -> list[CalendarGridCell]:
        if anchor is None:
            anchor = self.today()
        return calendar_grid.build_month_grid(anchor, week_start=self._week_start)

    def reached_milestones(self) -> list[HealthFact]:
        return milestones.reached_milestones(self.smoke_free_current_streak())

    def next_milestone(self) -> HealthFact | None:
        return milestones.next_milestone(self.smoke_free_current_streak())

    def days_until_next_milestone(self) -> int | None:
        return milestones.days_until_next_milestone(self.smoke_free_current_streak())

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def add_habit(self, title: str, description: str = "") -> Habit:
        """Create a habit. Raises ValueError for a blank title."""
        return self.habits.add(validate_title(title), description.strip())

    def update_habit(self, habit: Habit) -> Habit:
        return self.habits.update(habit)

    def delete_habit(self, habit_id: str) -> bool:
        return self.habits.delete(habit_id)

    def toggle_habit_day(self, habit_id: str, value: date | datetime | None = None) -> Habit:
        return self.habits.toggle_completion(habit_id, value or self.today())

    def toggle_smoke_free_day(self, value: date | datetime | None = None) -> bool:
        return self.tracker.toggle_smoke_free_day(value or self.today())

    def set_theme(self, theme: AppTheme | str) -> UserProfile:
        return self.tracker.set_theme(theme)

    def save_profile(self, **fields: Any) -> UserProfile:
        return self.tracker.save_profile(**fields)
