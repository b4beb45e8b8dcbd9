"""Day-granular date sets — the unit habits and smoke-free days are built from.

No I/O: this module only transforms data.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from datetime import date, datetime, tzinfo


def normalize_day(value: date | datetime, tz: tzinfo | None = None) -> date:
    """Truncate a date or datetime to its calendar day.

    Aware datetimes are first converted into ``tz`` (when given) so the day
    boundary is the reference timezone's, not the value's own offset.
    Naive datetimes are taken as already being in the reference timezone.
    """
    if isinstance(value, datetime):
        if tz is not None and value.tzinfo is not None:
            value = value.astimezone(tz)
        return value.date()
    if isinstance(value, date):
        return value
    raise TypeError(f"Expected date or datetime, got {type(value).__name__}")


class DateSet:
    """Immutable set of calendar days.

    Every value is normalized on the way in, so two entries on the same day
    can never coexist. ``toggle`` returns a new set rather than mutating.
    """

    __slots__ = ("_days", "_tz")

    def __init__(
        self, dates: Iterable[date | datetime] = (), tz: tzinfo | None = None,
    ) -> None:
        self._tz = tz
        self._days: frozenset[date] = frozenset(normalize_day(d, tz) for d in dates)

    @property
    def tz(self) -> tzinfo | None:
        return self._tz

    def toggle(self, value: date | datetime) -> DateSet:
        """Return a copy with ``value``'s day flipped (removed if present, else added)."""
        day = normalize_day(value, self._tz)
        if day in self._days:
            days = self._days - {day}
        else:
            days = self._days | {day}
        return DateSet(days, tz=self._tz)

    def contains(self, value: date | datetime) -> bool:
        return normalize_day(value, self._tz) in self._days

    def sorted(self, descending: bool = False) -> list[date]:
        return sorted(self._days, reverse=descending)

    def __contains__(self, value: object) -> bool:
        if not isinstance(value, date):
            return False
        return self.contains(value)

    def __iter__(self) -> Iterator[date]:
        return iter(self.sorted())

    def __len__(self) -> int:
        return len(self._days)

    def __bool__(self) -> bool:
        return bool(self._days)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DateSet):
            return NotImplemented
        return self._days == other._days

    def __hash__(self) -> int:
        return hash(self._days)

    def __repr__(self) -> str:
        days = ", ".join(d.isoformat() for d in self.sorted())
        return f"DateSet([{days}])"
