# tests/test_task_scheduler.py

from __future__ import annotations

import asyncio
from datetime import datetime

import pytest

from tickbox.tasks.task_models import Task
from tickbox.tasks.task_scheduler import (
    ReminderTracker,
    build_reminder,
    reminder_time,
    run_reminder_scheduler,
    start_reminders_in_background,
)

from .fakes import FakeClock, FakeNotifier


def test_reminder_time_is_nine_the_day_before() -> None:
    assert reminder_time(Task.deadline("pay rent", "2024-03-05 1800")) == datetime(2024, 3, 4, 9, 0)
    assert reminder_time(Task.event("trip", "2024-06-01", "2024-06-03")) == datetime(2024, 5, 31, 9, 0)
    assert reminder_time(Task.todo("x")) is None
    assert reminder_time(Task.deadline("x", "2024-03-05"), hour=7, days_before=2) == datetime(2024, 3, 3, 7, 0)


def test_build_reminder_text() -> None:
    assert build_reminder(Task.deadline("pay rent", "2024-03-05")).text == "Deadline tomorrow: pay rent"
    assert build_reminder(Task.event("trip", "2024-06-01", "2024-06-03")).text == "Event tomorrow: trip"
    done = Task.deadline("old", "2024-03-05")
    done.mark_done()
    assert build_reminder(done) is None
    assert build_reminder(Task.todo("x")) is None


def test_tracker_skips_reminders_already_past_when_first_seen() -> None:
    r = build_reminder(Task.deadline("pay rent", "2024-03-05"))
    tracker = ReminderTracker()
    assert tracker.due([r], datetime(2024, 3, 10)) == []
    assert tracker.due([r], datetime(2024, 3, 11)) == []


def test_tracker_fires_once_after_time_passes() -> None:
    r = build_reminder(Task.deadline("pay rent", "2024-03-05"))
    tracker = ReminderTracker()
    assert tracker.due([r], datetime(2024, 3, 4, 8, 59)) == []
    assert tracker.due([r], datetime(2024, 3, 4, 9, 0)) == [r]
    tracker.mark_sent(r)
    assert tracker.due([r], datetime(2024, 3, 4, 9, 1)) == []


@pytest.mark.asyncio
async def test_scheduler_sends_due_reminder_once(state) -> None:
    state.tasks.add_task(Task.deadline("pay rent", "2024-03-05"))
    state.tasks.add_task(Task.todo("no reminder"))

    clock = FakeClock(datetime(2024, 3, 4, 8, 0))
    notifier = FakeNotifier()
    runner = asyncio.create_task(
        run_reminder_scheduler(state, notifier, interval_seconds=0.01, clock=clock)
    )

    await asyncio.sleep(0.05)
    assert notifier.sent == []

    clock.now = datetime(2024, 3, 4, 9, 30)
    await asyncio.sleep(0.05)

    runner.cancel()
    with pytest.raises(asyncio.CancelledError):
        await runner

    assert notifier.sent == ["Deadline tomorrow: pay rent"]


@pytest.mark.asyncio
async def test_scheduler_retries_after_send_failure(state) -> None:
    state.tasks.add_task(Task.event("trip", "2024-06-01", "2024-06-03"))
    clock = FakeClock(datetime(2024, 5, 30, 12, 0))
    notifier = FakeNotifier(fail=True)
    stop = asyncio.Event()
    runner = asyncio.create_task(
        run_reminder_scheduler(state, notifier, interval_seconds=0.01, clock=clock, stop_event=stop)
    )

    await asyncio.sleep(0.03)
    clock.now = datetime(2024, 5, 31, 9, 0)
    await asyncio.sleep(0.05)
    assert notifier.sent == []

    notifier.fail = False
    await asyncio.sleep(0.05)
    stop.set()
    await asyncio.wait_for(runner, timeout=1.0)

    assert notifier.sent == ["Event tomorrow: trip"]


def test_background_runner_starts_and_stops(state) -> None:
    runner = start_reminders_in_background(state, FakeNotifier(), interval_seconds=0.01)
    assert runner is not None
    assert runner.thread.is_alive()
    runner.stop()
    runner.join(timeout=2.0)
    assert not runner.thread.is_alive()
