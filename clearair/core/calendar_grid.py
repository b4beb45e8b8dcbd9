"""Month grid builder — calendar layout for any date collection.

Produces a flat list of cells for a 7-column grid: ``None`` for the leading
blanks, then one ``date`` per day of the month. Rendering is the caller's job.

No I/O: this module only transforms data.
"""

from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta

from dateutil.relativedelta import relativedelta

GRID_COLUMNS = 7

_WEEKDAY_LABELS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]

CalendarGridCell = date | None


def _check_week_start(week_start: int) -> None:
    if not 1 <= week_start <= 7:
        raise ValueError(f"week_start must be between 1 and 7, got {week_start}")


def first_of_month(anchor: date | datetime) -> date:
    """Return the first day of the month containing ``anchor``."""
    return date(anchor.year, anchor.month, 1)


def leading_blanks(first_day: date, week_start: int = 1) -> int:
    """Number of blank cells before ``first_day`` in a grid starting on ``week_start``.

    ``week_start`` uses ISO numbering (1 = Monday ... 7 = Sunday).
    """
    _check_week_start(week_start)
    return (first_day.isoweekday() - week_start) % GRID_COLUMNS


def build_month_grid(anchor: date | datetime, week_start: int = 1) -> list[CalendarGridCell]:
    """Build the grid cells for the month containing ``anchor``.

    Only the anchor's year and month are used; its day and time are ignored.
    """
    first_day = first_of_month(anchor)
    _, days_in_month = calendar.monthrange(first_day.year, first_day.month)

    cells: list[CalendarGridCell] = [None] * leading_blanks(first_day, week_start)
    cells.extend(first_day + timedelta(days=offset) for offset in range(days_in_month))
    return cells


def grid_rows(cells: list[CalendarGridCell]) -> list[list[CalendarGridCell]]:
    """Split grid cells into rows of 7, padding the last row with blanks."""
    rows = [cells[i:i + GRID_COLUMNS] for i in range(0, len(cells), GRID_COLUMNS)]
    if rows and len(rows[-1]) < GRID_COLUMNS:
        rows[-1] = rows[-1] + [None] * (GRID_COLUMNS - len(rows[-1]))
    return rows


def move_month(anchor: date | datetime, delta: int) -> date | datetime:
    """Shift ``anchor`` by ``delta`` whole months.

    Day-of-month is clamped to the target month (Jan 31 + 1 month is the last
    day of February).
    """
    return anchor + relativedelta(months=delta)


def month_title(anchor: date | datetime) -> str:
    """Human-readable month header, e.g. "October 2026"."""
    return f"{calendar.month_name[anchor.month]} {anchor.year}"


def weekday_labels(week_start: int = 1) -> list[str]:
    """Column headers in grid order."""
    _check_week_start(week_start)
    start = week_start - 1
    return _WEEKDAY_LABELS[start:] + _WEEKDAY_LABELS[:start]


def week_strip(today: date, days: int = 7) -> list[date]:
    """The last ``days`` calendar days ending at ``today``, oldest first.

    Used for the per-habit completion strip in the habit list.
    """
    return [today - timedelta(days=offset) for offset in range(days - 1, -1, -1)]
