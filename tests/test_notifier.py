"""Tests for clearair.core.notifier — observer registration."""

from unittest.mock import MagicMock

from clearair.core.notifier import ChangeEvent, ChangeKind, ChangeNotifier


def test_publish_in_registration_order():
    calls = []
    notifier = ChangeNotifier()
    notifier.subscribe(lambda e: calls.append(("first", e.kind)))
    notifier.subscribe(lambda e: calls.append(("second", e.kind)))
    notifier.publish(ChangeEvent(ChangeKind.PROFILE))
    assert calls == [("first", ChangeKind.PROFILE), ("second", ChangeKind.PROFILE)]


def test_subscribe_twice_registers_once():
    notifier = ChangeNotifier()
    listener = MagicMock()
    notifier.subscribe(listener)
    notifier.subscribe(listener)
    assert len(notifier) == 1


def test_unsubscribe_unknown_is_noop():
    notifier = ChangeNotifier()
    notifier.unsubscribe(MagicMock())
    assert len(notifier) == 0


def test_failing_listener_does_not_block_others():
    notifier = ChangeNotifier()
    broken = MagicMock(side_effect=RuntimeError("boom"))
    healthy = MagicMock()
    notifier.subscribe(broken)
    notifier.subscribe(healthy)
    event = ChangeEvent(ChangeKind.HABITS, habit_id="h1")
    notifier.publish(event)
    healthy.assert_called_once_with(event)


def test_listener_may_unsubscribe_itself():
    notifier = ChangeNotifier()
    calls = []

    def once(event):
        calls.append(event)
        notifier.unsubscribe(once)

    notifier.subscribe(once)
    notifier.publish(ChangeEvent(ChangeKind.PROFILE))
    notifier.publish(ChangeEvent(ChangeKind.PROFILE))
    assert len(calls) == 1
