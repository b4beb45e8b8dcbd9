"""Health milestones unlocked by the current smoke-free streak.

No I/O: this module only transforms data.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class HealthFact:
    """A recovery fact shown once the streak reaches ``days_required``."""

    days_required: int
    title: str
    description: str
    icon: str


# Ordered by days_required ascending
HEALTH_FACTS: tuple[HealthFact, ...] = (
    HealthFact(0, "Starting Point", "You made an important decision! Your body is already beginning to recover.", "🎯"),
    HealthFact(1, "1 Day", "Carbon monoxide levels in blood decrease. Breathing becomes easier.", "🫁"),
    HealthFact(2, "2 Days", "Sense of smell and taste improve. Food tastes better!", "👃"),
    HealthFact(3, "3 Days", "Breathing becomes easier, lung capacity increases.", "🌬️"),
    HealthFact(7, "1 Week", "Your lungs begin to clear. Complexion improves.", "✨"),
    HealthFact(14, "2 Weeks", "Blood circulation improves. Physical exercise becomes easier.", "💪"),
    HealthFact(30, "1 Month", "Lung function improves by 30%. Risk of infections decreases significantly.", "🏆"),
    HealthFact(90, "3 Months", "Almost complete recovery of circulation and lung function.", "🎉"),
    HealthFact(180, "6 Months", "Stress decreases, sleep and overall well-being improve.", "😊"),
    HealthFact(365, "1 Year", "Risk of heart disease is cut in half!", "🎊"),
)


def reached_milestones(streak: int) -> list[HealthFact]:
    """All facts whose threshold the streak has reached."""
    return [fact for fact in HEALTH_FACTS if fact.days_required <= streak]


def next_milestone(streak: int) -> HealthFact | None:
    """The first fact still ahead of the streak, or None once all are reached."""
    for fact in HEALTH_FACTS:
        if fact.days_required > streak:
            return fact
    return None


def days_until_next_milestone(streak: int) -> int | None:
    milestone = next_milestone(streak)
    if milestone is None:
        return None
    return milestone.days_required - streak
