"""Tests for clearair.core.milestones."""

from clearair.core.milestones import (
    HEALTH_FACTS,
    days_until_next_milestone,
    next_milestone,
    reached_milestones,
)


def test_facts_are_sorted_by_threshold():
    thresholds = [f.days_required for f in HEALTH_FACTS]
    assert thresholds == sorted(thresholds)


def test_zero_streak_reaches_starting_point_only():
    reached = reached_milestones(0)
    assert [f.title for f in reached] == ["Starting Point"]
    assert next_milestone(0).title == "1 Day"
    assert days_until_next_milestone(0) == 1


def test_mid_streak():
    assert [f.days_required for f in reached_milestones(10)] == [0, 1, 2, 3, 7]
    assert next_milestone(10).days_required == 14
    assert days_until_next_milestone(10) == 4


def test_exact_threshold_counts_as_reached():
    assert reached_milestones(7)[-1].title == "1 Week"
    assert next_milestone(7).title == "2 Weeks"


def test_all_reached():
    assert len(reached_milestones(365)) == len(HEALTH_FACTS)
    assert next_milestone(365) is None
    assert days_until_next_milestone(1000) is None
