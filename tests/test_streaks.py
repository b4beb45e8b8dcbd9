"""Tests for clearair.core.streaks — pure streak logic."""

from datetime import date, timedelta

from clearair.core.date_set import DateSet
from clearair.core.streaks import current_streak, max_streak

TODAY = date(2026, 10, 19)


def _days(*offsets: int) -> DateSet:
    """DateSet of TODAY minus each offset."""
    return DateSet(TODAY - timedelta(days=o) for o in offsets)


class TestCurrentStreak:
    def test_empty_set_is_zero(self):
        assert current_streak(DateSet(), TODAY) == 0

    def test_only_today_is_one(self):
        assert current_streak(_days(0), TODAY) == 1

    def test_three_consecutive_days_ending_today(self):
        assert current_streak(_days(0, 1, 2), TODAY) == 3

    def test_gap_yesterday_stops_at_one(self):
        assert current_streak(_days(0, 2), TODAY) == 1

    def test_today_missing_is_zero(self):
        """Yesterday and before do not count until today is marked."""
        assert current_streak(_days(1, 2, 3, 4), TODAY) == 0

    def test_future_days_are_ignored(self):
        assert current_streak(_days(-2, -1, 0, 1), TODAY) == 2

    def test_earlier_run_after_gap_not_counted(self):
        assert current_streak(_days(0, 1, 3, 4, 5, 6), TODAY) == 2

    def test_crosses_month_and_year_boundaries(self):
        today = date(2026, 1, 1)
        days = DateSet([date(2025, 12, 30), date(2025, 12, 31), today])
        assert current_streak(days, today) == 3

    def test_long_streak(self):
        assert current_streak(_days(*range(400)), TODAY) == 400


class TestMaxStreak:
    def test_empty_set_is_zero(self):
        assert max_streak(DateSet()) == 0

    def test_single_day_is_one(self):
        assert max_streak(_days(10)) == 1

    def test_run_then_gap_then_single(self):
        days = DateSet([date(2026, 1, 1), date(2026, 1, 2), date(2026, 1, 3), date(2026, 1, 5)])
        assert max_streak(days) == 3

    def test_longest_run_later_in_history(self):
        days = DateSet(
            [date(2026, 1, 1), date(2026, 1, 2)]
            + [date(2026, 2, d) for d in range(1, 6)]
        )
        assert max_streak(days) == 5

    def test_no_consecutive_days(self):
        assert max_streak(DateSet([date(2026, 1, 1), date(2026, 1, 3), date(2026, 1, 5)])) == 1

    def test_leap_day_is_consecutive(self):
        days = DateSet([date(2024, 2, 28), date(2024, 2, 29), date(2024, 3, 1)])
        assert max_streak(days) == 3

    def test_not_limited_to_today(self):
        """Max streak looks at the whole history, including future days."""
        assert max_streak(_days(-3, -2, -1)) == 3

    def test_max_at_least_current(self):
        days = _days(0, 1, 2, 5, 6)
        assert max_streak(days) >= current_streak(days, TODAY)
