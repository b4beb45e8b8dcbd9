"""Command-line front end for the tracker service.

A thin presentation layer: every command calls one TrackerService method and
prints the refreshed values.
"""

from __future__ import annotations

from datetime import date, datetime

import click

from clearair.core.calendar_grid import grid_rows, month_title, week_strip, weekday_labels
from clearair.core.habit_store import HabitNotFoundError
from clearair.core.tracker_service import TrackerService
from clearair.data.models import AppTheme, Gender
from clearair.ports.storage_port import PersistenceError

_DAY = click.DateTime(formats=["%Y-%m-%d"])
_MONTH = click.DateTime(formats=["%Y-%m"])


def _day(value: datetime | None) -> date | None:
    return value.date() if value is not None else None


def _service(ctx: click.Context) -> TrackerService:
    return ctx.obj


def _fail(exc: Exception) -> click.ClickException:
    if isinstance(exc, PersistenceError):
        return click.ClickException(f"Changes could not be saved: {exc}")
    return click.ClickException(str(exc))


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Track smoke-free days and habits."""
    if ctx.obj is None:
        try:
            ctx.obj = TrackerService.from_settings()
        except PersistenceError as exc:
            raise _fail(exc) from exc


@cli.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show the smoke-free streak, best streak and next milestone."""
    service = _service(ctx)
    streak = service.smoke_free_current_streak()
    click.echo(f"Smoke-free streak: {streak} day(s)")
    click.echo(f"Best streak:       {service.max_streak()} day(s)")
    milestone = service.next_milestone()
    if milestone is None:
        click.echo("All milestones reached!")
    else:
        days = service.days_until_next_milestone()
        click.echo(f"Next milestone:    {milestone.icon} {milestone.title} in {days} day(s)")
    for fact in service.reached_milestones()[-3:]:
        click.echo(f"  {fact.icon} {fact.title}: {fact.description}")


@cli.command("smoke-free")
@click.argument("day", type=_DAY, required=False)
@click.pass_context
def smoke_free(ctx: click.Context, day: datetime | None) -> None:
    """Toggle DAY (YYYY-MM-DD, default today) as smoke-free."""
    service = _service(ctx)
    try:
        marked = service.toggle_smoke_free_day(_day(day))
    except PersistenceError as exc:
        raise _fail(exc) from exc
    label = (_day(day) or service.today()).isoformat()
    click.echo(f"{label}: {'smoke-free' if marked else 'cleared'}")
    click.echo(f"Streak {service.smoke_free_current_streak()}, best {service.max_streak()}")


@cli.group()
def habit() -> None:
    """Manage habits."""


@habit.command("add")
@click.argument("title")
@click.option("--description", "-d", default="", help="Optional description.")
@click.pass_context
def habit_add(ctx: click.Context, title: str, description: str) -> None:
    try:
        created = _service(ctx).add_habit(title, description)
    except (ValueError, PersistenceError) as exc:
        raise _fail(exc) from exc
    click.echo(f"Added {created.id}: {created.title}")


@habit.command("list")
@click.pass_context
def habit_list(ctx: click.Context) -> None:
    service = _service(ctx)
    habits = service.list_habits()
    if not habits:
        click.echo("No habits yet.")
        return
    strip = week_strip(service.today())
    for h in habits:
        marks = "".join("#" if h.completed_dates.contains(d) else "." for d in strip)
        streak = service.habit_current_streak(h.id)
        click.echo(f"{h.id}  [{marks}]  {streak:>3}  {h.title}")


@habit.command("toggle")
@click.argument("habit_id")
@click.argument("day", type=_DAY, required=False)
@click.pass_context
def habit_toggle(ctx: click.Context, habit_id: str, day: datetime | None) -> None:
    """Toggle DAY (default today) for HABIT_ID."""
    service = _service(ctx)
    try:
        updated = service.toggle_habit_day(habit_id, _day(day))
    except (HabitNotFoundError, PersistenceError) as exc:
        raise _fail(exc) from exc
    click.echo(f"{updated.title}: streak {service.habit_current_streak(updated.id)}")


@habit.command("delete")
@click.argument("habit_id")
@click.pass_context
def habit_delete(ctx: click.Context, habit_id: str) -> None:
    try:
        deleted = _service(ctx).delete_habit(habit_id)
    except PersistenceError as exc:
        raise _fail(exc) from exc
    click.echo("Deleted." if deleted else "Nothing to delete.")


@cli.command()
@click.option("--month", type=_MONTH, default=None, help="Month to show (YYYY-MM).")
@click.option("--habit", "habit_id", default=None, help="Show a habit instead of smoke-free days.")
@click.pass_context
def calendar(ctx: click.Context, month: datetime | None, habit_id: str | None) -> None:
    """Print a month grid; marked days are starred."""
    service = _service(ctx)
    anchor = _day(month) or service.today()
    if habit_id is not None:
        found = service.get_habit(habit_id)
        if found is None:
            raise _fail(HabitNotFoundError(habit_id))
        is_marked = found.completed_dates.contains
    else:
        is_marked = service.is_smoke_free

    click.echo(month_title(anchor).center(7 * 4))
    click.echo(" ".join(f"{label:>3}" for label in weekday_labels(service.week_start)))
    for row in grid_rows(service.month_grid(anchor)):
        cells = []
        for cell in row:
            if cell is None:
                cells.append("   ")
            else:
                cells.append(f"{cell.day:>2}{'*' if is_marked(cell) else ' '}")
        click.echo(" ".join(cells))


@cli.group()
def profile() -> None:
    """Show or edit the profile."""


@profile.command("show")
@click.pass_context
def profile_show(ctx: click.Context) -> None:
    p = _service(ctx).profile()
    click.echo(f"Name:       {p.name or '-'}")
    click.echo(f"Gender:     {p.gender.value if p.gender else '-'}")
    click.echo(f"Age:        {p.age if p.age is not None else '-'}")
    click.echo(f"Quit date:  {p.quit_date.date().isoformat() if p.quit_date else '-'}")
    click.echo(f"Theme:      {p.theme.value}")
    click.echo(f"Max streak: {p.max_streak}")


@profile.command("set")
@click.option("--name", default=None)
@click.option("--age", type=click.IntRange(min=0), default=None)
@click.option("--gender", type=click.Choice([g.value for g in Gender]), default=None)
@click.option("--quit-date", type=_DAY, default=None)
@click.option("--theme", type=click.Choice([t.value for t in AppTheme]), default=None)
@click.pass_context
def profile_set(
    ctx: click.Context,
    name: str | None,
    age: int | None,
    gender: str | None,
    quit_date: datetime | None,
    theme: str | None,
) -> None:
    service = _service(ctx)
    if quit_date is not None:
        quit_date = quit_date.replace(tzinfo=service.tz)
    changes = {
        "name": name,
        "age": age,
        "gender": gender,
        "quit_date": quit_date,
        "theme": theme,
    }
    changes = {k: v for k, v in changes.items() if v is not None}
    if not changes:
        raise click.UsageError("Nothing to change.")
    try:
        service.save_profile(**changes)
    except PersistenceError as exc:
        raise _fail(exc) from exc
    click.echo("Profile saved.")
