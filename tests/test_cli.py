"""Tests for clearair.cli — click commands over a pinned TrackerService."""

import json
from datetime import date, datetime, timezone
from unittest.mock import patch

import pytest
from click.testing import CliRunner
from dateutil.parser import isoparse

from clearair.cli import cli
from clearair.data.db import PROFILE_KEY
from clearair.ports.storage_port import PersistenceError


@pytest.fixture
def runner():
    return CliRunner()


def _run(runner, service, *args):
    return runner.invoke(cli, list(args), obj=service)


class TestStatus:
    def test_empty_status(self, runner, service):
        result = _run(runner, service, "status")
        assert result.exit_code == 0
        assert "Smoke-free streak: 0 day(s)" in result.output
        assert "1 Day in 1 day(s)" in result.output

    def test_after_marking(self, runner, service):
        _run(runner, service, "smoke-free", "2026-10-18")
        result = _run(runner, service, "smoke-free")
        assert result.exit_code == 0
        assert "2026-10-19: smoke-free" in result.output
        assert "Streak 2, best 2" in result.output


class TestSmokeFree:
    def test_toggle_twice_clears(self, runner, service):
        _run(runner, service, "smoke-free", "2026-10-19")
        result = _run(runner, service, "smoke-free", "2026-10-19")
        assert "cleared" in result.output
        assert not service.is_smoke_free(date(2026, 10, 19))

    def test_bad_date(self, runner, service):
        result = _run(runner, service, "smoke-free", "19/10/2026")
        assert result.exit_code != 0

    def test_persistence_error_reported(self, runner, service, state_db):
        with patch.object(state_db, "put_document", side_effect=PersistenceError("locked")):
            result = _run(runner, service, "smoke-free")
        assert result.exit_code == 1
        assert "could not be saved" in result.output


class TestHabitCommands:
    def test_add_and_list(self, runner, service):
        result = _run(runner, service, "habit", "add", "Walk", "-d", "daily")
        assert result.exit_code == 0
        habit = service.list_habits()[0]
        assert habit.id in result.output

        _run(runner, service, "habit", "toggle", habit.id)
        listed = _run(runner, service, "habit", "list")
        assert "[......#]" in listed.output
        assert "Walk" in listed.output

    def test_add_blank_title_fails(self, runner, service):
        result = _run(runner, service, "habit", "add", "  ")
        assert result.exit_code == 1
        assert "must not be empty" in result.output

    def test_list_empty(self, runner, service):
        assert "No habits yet." in _run(runner, service, "habit", "list").output

    def test_toggle_unknown(self, runner, service):
        result = _run(runner, service, "habit", "toggle", "missing")
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_delete(self, runner, service):
        habit = service.add_habit("Walk")
        assert "Deleted." in _run(runner, service, "habit", "delete", habit.id).output
        assert "Nothing to delete." in _run(runner, service, "habit", "delete", habit.id).output


class TestCalendar:
    def test_prints_month(self, runner, service):
        service.toggle_smoke_free_day(date(2026, 10, 5))
        result = _run(runner, service, "calendar")
        assert result.exit_code == 0
        assert "October 2026" in result.output
        assert "Mon Tue Wed Thu Fri Sat Sun" in result.output
        assert " 5*" in result.output

    def test_other_month(self, runner, service):
        result = _run(runner, service, "calendar", "--month", "2024-02")
        assert "February 2024" in result.output
        assert "29" in result.output

    def test_habit_calendar(self, runner, service):
        habit = service.add_habit("Walk")
        service.toggle_habit_day(habit.id, date(2026, 10, 7))
        result = _run(runner, service, "calendar", "--habit", habit.id)
        assert " 7*" in result.output

    def test_unknown_habit(self, runner, service):
        result = _run(runner, service, "calendar", "--habit", "missing")
        assert result.exit_code == 1


class TestProfile:
    def test_set_and_show(self, runner, service):
        result = _run(
            runner, service, "profile", "set",
            "--name", "Sam", "--age", "34", "--gender", "Other", "--theme", "Dark",
            "--quit-date", "2026-09-01",
        )
        assert result.exit_code == 0
        shown = _run(runner, service, "profile", "show").output
        assert "Sam" in shown
        assert "Other" in shown
        assert "Dark" in shown
        assert "2026-09-01" in shown

    def test_quit_date_stored_with_offset(self, runner, service, state_db):
        result = _run(runner, service, "profile", "set", "--quit-date", "2026-09-01")
        assert result.exit_code == 0
        stored = json.loads(state_db.get_document(PROFILE_KEY))["quitDate"]
        assert isoparse(stored) == datetime(2026, 9, 1, tzinfo=timezone.utc)

    def test_set_nothing(self, runner, service):
        result = _run(runner, service, "profile", "set")
        assert result.exit_code == 2
