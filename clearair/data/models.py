"""
Clear Air Habit — Data Models.

Habits and the user profile persist locally across restarts. The smoke-free
days have no model of their own: they are a plain DateSet owned by the
profile tracker.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from clearair.core.date_set import DateSet


class Gender(Enum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


class AppTheme(Enum):
    SYSTEM = "System"
    LIGHT = "Light"
    DARK = "Dark"


def new_habit_id() -> str:
    return str(uuid.uuid4())


@dataclass
class Habit:
    """A user-defined habit with its own set of completed days.

    ``id`` is generated once at creation and never reassigned.
    """

    title: str
    description: str = ""
    created_date: datetime = field(default_factory=datetime.now)
    completed_dates: DateSet = field(default_factory=DateSet)
    id: str = field(default_factory=new_habit_id)


@dataclass
class UserProfile:
    """Profile fields plus the cached best smoke-free streak.

    ``max_streak`` only ever goes up; see ProfileStreakTracker.
    """

    name: str = ""
    gender: Gender | None = None
    age: int | None = None
    quit_date: datetime | None = None   # when the user stopped smoking
    theme: AppTheme = AppTheme.SYSTEM
    max_streak: int = 0
