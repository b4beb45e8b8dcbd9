"""Streak calculator — pure business logic over a DateSet.

No I/O: this module only transforms data.
"""

from __future__ import annotations

from datetime import date, timedelta

from clearair.core.date_set import DateSet

_ONE_DAY = timedelta(days=1)


def current_streak(date_set: DateSet, today: date) -> int:
    """Count consecutive days present in ``date_set`` ending at ``today``.

    Today is the mandatory endpoint: if it is absent the streak is 0, even
    when yesterday and the days before it are all present. Days after today
    are never reached by the backwards walk.
    """
    if not date_set:
        return 0

    streak = 0
    expected = today
    while expected in date_set:
        streak += 1
        expected -= _ONE_DAY
    return streak


def max_streak(date_set: DateSet) -> int:
    """Return the longest run of consecutive days ever present."""
    days = date_set.sorted()
    if not days:
        return 0

    longest = 1
    run = 1
    for previous, day in zip(days, days[1:]):
        if day - previous == _ONE_DAY:
            run += 1
            longest = max(longest, run)
        else:
            run = 1
    return longest
