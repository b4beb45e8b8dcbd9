"""
Clear Air Habit — Habit Store.

Owns the habit collection. Every command mutates the in-memory list, writes
the whole list back to storage, and only then notifies listeners. Per-habit
streaks are derived on read from each habit's completed days.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import replace
from datetime import date, datetime, timezone, tzinfo
from typing import TYPE_CHECKING

from clearair.core import streaks
from clearair.core.date_set import DateSet
from clearair.core.notifier import ChangeEvent, ChangeKind, ChangeNotifier
from clearair.data.db import HABITS_KEY
from clearair.data.models import Habit
from clearair.data.records import decode_habits, encode_habits
from clearair.ports.storage_port import DecodeError

if TYPE_CHECKING:
    from clearair.ports.storage_port import StoragePort

logger = logging.getLogger(__name__)


class HabitNotFoundError(LookupError):
    """Raised when a command references a habit id the store does not hold."""

    def __init__(self, habit_id: str) -> None:
        super().__init__(f"Habit {habit_id} not found")
        self.habit_id = habit_id


def validate_title(title: str) -> str:
    """Return the trimmed title, or raise ValueError if nothing is left."""
    cleaned = title.strip()
    if not cleaned:
        raise ValueError("Habit title must not be empty")
    return cleaned


class HabitStore:
    """Habit CRUD with write-all-on-change persistence."""

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
        self._habits: list[Habit] = self._load()

    def _load(self) -> list[Habit]:
        raw = self._storage.get_document(HABITS_KEY)
        if raw is None:
            return []
        try:
            habits = decode_habits(raw, tz=self._tz)
        except DecodeError as exc:
            logger.warning("Habits document unreadable, starting empty: %s", exc)
            return []
        logger.info("Loaded %d habits", len(habits))
        return habits

    def _save(self) -> None:
        self._storage.put_document(HABITS_KEY, encode_habits(self._habits, tz=self._tz))

    def _index_of(self, habit_id: str) -> int | None:
        for i, habit in enumerate(self._habits):
            if habit.id == habit_id:
                return i
        return None

    def _commit(self, event: ChangeEvent) -> None:
        # Persistence errors propagate before listeners hear about anything.
        self._save()
        self._notifier.publish(event)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_all(self) -> list[Habit]:
        """All habits in insertion order (copies)."""
        with self._lock:
            return [replace(h) for h in self._habits]

    def get(self, habit_id: str) -> Habit | None:
        with self._lock:
            index = self._index_of(habit_id)
            if index is None:
                return None
            return replace(self._habits[index])

    def _require(self, habit_id: str) -> Habit:
        habit = self.get(habit_id)
        if habit is None:
            raise HabitNotFoundError(habit_id)
        return habit

    def is_completed(self, habit_id: str, value: date | datetime) -> bool:
        return self._require(habit_id).completed_dates.contains(value)

    def current_streak(self, habit_id: str, today: date) -> int:
        return streaks.current_streak(self._require(habit_id).completed_dates, today)

    def max_streak(self, habit_id: str) -> int:
        return streaks.max_streak(self._require(habit_id).completed_dates)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def add(self, title: str, description: str = "") -> Habit:
        """Create a habit with a fresh id and the current timestamp."""
        habit = Habit(
            title=title,
            description=description,
            created_date=datetime.now(self._tz),
            completed_dates=DateSet(tz=self._tz),
        )
        with self._lock:
            self._habits.append(habit)
            self._commit(ChangeEvent(ChangeKind.HABITS, habit.id))
        logger.info("Habit added: %s '%s'", habit.id, title)
        return replace(habit)

    def update(self, habit: Habit) -> Habit:
        """Replace the stored habit that has ``habit.id``."""
        with self._lock:
            index = self._index_of(habit.id)
            if index is None:
                raise HabitNotFoundError(habit.id)
            stored = replace(habit, completed_dates=DateSet(habit.completed_dates, tz=self._tz))
            self._habits[index] = stored
            self._commit(ChangeEvent(ChangeKind.HABITS, habit.id))
        logger.info("Habit updated: %s '%s'", habit.id, habit.title)
        return replace(stored)

    def delete(self, habit_id: str) -> bool:
        """Remove a habit and its completions. Unknown ids are a no-op."""
        with self._lock:
            index = self._index_of(habit_id)
            if index is None:
                logger.debug("Delete of unknown habit %s ignored", habit_id)
                return False
            removed = self._habits.pop(index)
            self._commit(ChangeEvent(ChangeKind.HABITS, habit_id))
        logger.info("Habit deleted: %s '%s'", habit_id, removed.title)
        return True

    def toggle_completion(self, habit_id: str, value: date | datetime) -> Habit:
        """Flip one day in the habit's completions and persist."""
        with self._lock:
            index = self._index_of(habit_id)
            if index is None:
                raise HabitNotFoundError(habit_id)
            habit = self._habits[index]
            updated = replace(habit, completed_dates=habit.completed_dates.toggle(value))
            self._habits[index] = updated
            self._commit(ChangeEvent(ChangeKind.HABITS, habit_id))
        logger.info(
            "Habit %s day %s toggled (%d days marked)",
            habit_id, value, len(updated.completed_dates),
        )
        return replace(updated)
