"""
Clear Air Habit — Stored document shapes.

Shared JSON contract for the three documents kept in StateDB:

    userProfile      {"name", "gender", "age", "quitDate", "theme", "maxStreak"}
    habits           [{"id", "title", "description", "createdDate", "completedDates"}]
    smokingFreeDays  ["2026-10-19T00:00:00+00:00", ...]

Days are written as the start of that day in the reference timezone.
Reading accepts any ISO-8601 datetime (or epoch seconds) and normalizes it
back to a day, so the stored format is never relied upon for day equality.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, time, timezone, tzinfo

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel

from clearair.core.date_set import DateSet
from clearair.data.models import AppTheme, Gender, Habit, UserProfile
from clearair.ports.storage_port import DecodeError

logger = logging.getLogger(__name__)


class _Record(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProfileRecord(_Record):
    name: str = ""
    gender: Gender | None = None
    age: int | None = None
    quit_date: datetime | None = None
    theme: AppTheme = AppTheme.SYSTEM
    max_streak: int = 0


class HabitRecord(_Record):
    id: str
    title: str
    description: str = ""
    created_date: datetime
    completed_dates: list[datetime] = []


_HABITS = TypeAdapter(list[HabitRecord])
_TIMESTAMPS = TypeAdapter(list[datetime])


def _day_start(day: date, tz: tzinfo) -> datetime:
    return datetime.combine(day, time.min, tzinfo=tz)


def _aware(value: datetime | None, tz: tzinfo) -> datetime | None:
    """Naive timestamps are taken as local to the reference timezone."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=tz)


def _encode_days(date_set: DateSet, tz: tzinfo) -> list[datetime]:
    return [_day_start(day, tz) for day in date_set]


# ---------------------------------------------------------------------------
# userProfile
# ---------------------------------------------------------------------------


def _profile_record(profile: UserProfile, tz: tzinfo) -> ProfileRecord:
    return ProfileRecord(
        name=profile.name,
        gender=profile.gender,
        age=profile.age,
        quit_date=_aware(profile.quit_date, tz),
        theme=profile.theme,
        max_streak=profile.max_streak,
    )


def _from_profile_record(record: ProfileRecord) -> UserProfile:
    return UserProfile(
        name=record.name,
        gender=record.gender,
        age=record.age,
        quit_date=record.quit_date,
        theme=record.theme,
        max_streak=max(record.max_streak, 0),
    )


def validate_profile(profile: UserProfile, tz: tzinfo | None = None) -> UserProfile:
    """Check a profile against the stored shape and return it coerced.

    Enum fields accept their stored string values, and a naive quit date is
    made aware in ``tz``. Raises ValueError (pydantic's ValidationError)
    when a field cannot be stored.
    """
    return _from_profile_record(_profile_record(profile, tz or timezone.utc))


def encode_profile(profile: UserProfile, tz: tzinfo | None = None) -> str:
    return _profile_record(profile, tz or timezone.utc).model_dump_json(by_alias=True)


def decode_profile(raw: str) -> UserProfile:
    try:
        record = ProfileRecord.model_validate_json(raw)
    except ValidationError as exc:
        raise DecodeError(f"Invalid userProfile document: {exc}") from exc
    return _from_profile_record(record)


# ---------------------------------------------------------------------------
# habits
# ---------------------------------------------------------------------------


def encode_habits(habits: list[Habit], tz: tzinfo | None = None) -> str:
    tz = tz or timezone.utc
    records = [
        HabitRecord(
            id=h.id,
            title=h.title,
            description=h.description,
            created_date=_aware(h.created_date, tz),
            completed_dates=_encode_days(h.completed_dates, tz),
        )
        for h in habits
    ]
    return _HABITS.dump_json(records, by_alias=True).decode()


def decode_habits(raw: str, tz: tzinfo | None = None) -> list[Habit]:
    """Decode the habit list, keeping stored order.

    A repeated id keeps its first occurrence; later duplicates are dropped
    with a warning so ids stay unique.
    """
    try:
        records = _HABITS.validate_json(raw)
    except ValidationError as exc:
        raise DecodeError(f"Invalid habits document: {exc}") from exc

    habits: list[Habit] = []
    seen: set[str] = set()
    for r in records:
        if r.id in seen:
            logger.warning("Dropping duplicate habit id %s ('%s')", r.id, r.title)
            continue
        seen.add(r.id)
        habits.append(
            Habit(
                id=r.id,
                title=r.title,
                description=r.description,
                created_date=r.created_date,
                completed_dates=DateSet(r.completed_dates, tz=tz),
            )
        )
    return habits


# ---------------------------------------------------------------------------
# smokingFreeDays
# ---------------------------------------------------------------------------


def encode_days(date_set: DateSet, tz: tzinfo | None = None) -> str:
    return _TIMESTAMPS.dump_json(_encode_days(date_set, tz or timezone.utc)).decode()


def decode_days(raw: str, tz: tzinfo | None = None) -> DateSet:
    try:
        timestamps = _TIMESTAMPS.validate_json(raw)
    except ValidationError as exc:
        raise DecodeError(f"Invalid smokingFreeDays document: {exc}") from exc
    return DateSet(timestamps, tz=tz)
