# src/tickbox/tasks/task_scheduler.py

from __future__ import annotations

"""
Reminder scheduler.

A small polling loop that:
- scans the task list for not-done deadlines and events,
- computes each one's reminder time (a fixed hour, some days before the date),
- sends the reminder text once via an injected notifier port.

How the reminder is shown (console line, alert, chat message) belongs to the
notifier, not the scheduler.
"""

import asyncio
import contextlib
import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, time, timedelta

from ..core.ports import ReminderNotifier
from ..core.state import AppState
from .task_models import Deadline, Event, Task, ToDo

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


@dataclass(slots=True, frozen=True)
class Reminder:
    task: Task
    fire_at: datetime
    text: str

    @property
    def key(self) -> tuple[str, str, str]:
        # Identity of a reminder across scans; tasks carry no ids.
        return (self.task.kind.value, self.task.description, self.fire_at.isoformat())


def reminder_time(task: Task, *, hour: int = 9, days_before: int = 1) -> datetime | None:
    """`hour`:00 on the day `days_before` before the task's primary date."""
    primary = task.primary_date
    if primary is None:
        return None
    return datetime.combine(primary - timedelta(days=days_before), time(hour, 0))


def build_reminder(task: Task, *, hour: int = 9, days_before: int = 1) -> Reminder | None:
    if task.is_done:
        return None
    fire_at = reminder_time(task, hour=hour, days_before=days_before)
    if fire_at is None:
        return None

    when = "tomorrow" if days_before == 1 else f"in {days_before} days"
    match task.detail:
        case Deadline():
            text = f"Deadline {when}: {task.description}"
        case Event():
            text = f"Event {when}: {task.description}"
        case ToDo():
            return None
    return Reminder(task=task, fire_at=fire_at, text=text)


class ReminderTracker:
    """
    Remembers which reminders were already handled.

    A reminder whose time had already passed when its task was first seen is
    skipped rather than fired late.
    """

    def __init__(self) -> None:
        self._seen: set[tuple[str, str, str]] = set()
        self._done: set[tuple[str, str, str]] = set()

    def due(self, reminders: list[Reminder], now: datetime) -> list[Reminder]:
        out: list[Reminder] = []
        for r in reminders:
            key = r.key
            if key in self._done:
                continue
            first_seen = key not in self._seen
            self._seen.add(key)
            if r.fire_at > now:
                continue
            if first_seen:
                self._done.add(key)
                continue
            out.append(r)
        return out

    def mark_sent(self, reminder: Reminder) -> None:
        self._done.add(reminder.key)


def collect_reminders(state: AppState, *, hour: int, days_before: int) -> list[Reminder]:
    with state.lock:
        tasks = state.tasks.tasks
    out: list[Reminder] = []
    for task in tasks:
        r = build_reminder(task, hour=hour, days_before=days_before)
        if r is not None:
            out.append(r)
    return out


async def run_reminder_scheduler(
        state: AppState,
        notifier: ReminderNotifier,
        *,
        interval_seconds: float = 30.0,
        hour: int = 9,
        days_before: int = 1,
        clock: Clock = datetime.now,
        stop_event: asyncio.Event | None = None,
) -> None:
    """
    Simple polling scheduler.

    Every interval_seconds:
    - build reminders for the current task list
    - send the ones whose time has come (once each)

    To stop it, cancel the coroutine or set stop_event.
    """
    sleep_s = max(0.01, float(interval_seconds))
    tracker = ReminderTracker()

    while stop_event is None or not stop_event.is_set():
        try:
            reminders = collect_reminders(state, hour=hour, days_before=days_before)
        except Exception:
            logger.exception("collect_reminders failed")
            reminders = []

        for reminder in tracker.due(reminders, clock()):
            try:
                await notifier.send_text(reminder.text)
                tracker.mark_sent(reminder)
                logger.info("Reminder sent for %r at %s", reminder.task.description, reminder.fire_at)
            except Exception:
                logger.exception("Reminder send failed for %r", reminder.task.description)

        if stop_event is None:
            await asyncio.sleep(sleep_s)
        else:
            with contextlib.suppress(asyncio.TimeoutError):
                await asyncio.wait_for(stop_event.wait(), timeout=sleep_s)


@dataclass
class ReminderBackgroundRunner:
    thread: threading.Thread
    loop: asyncio.AbstractEventLoop
    stop_event: asyncio.Event

    def stop(self) -> None:
        try:
            self.loop.call_soon_threadsafe(self.stop_event.set)
        except RuntimeError:
            logger.debug("Reminder loop already closed.", exc_info=True)

    def join(self, timeout: float | None = None) -> None:
        self.thread.join(timeout=timeout)


def start_reminders_in_background(
        state: AppState,
        notifier: ReminderNotifier,
        *,
        interval_seconds: float = 30.0,
        hour: int = 9,
        days_before: int = 1,
) -> ReminderBackgroundRunner | None:
    """
    Run the reminder scheduler on its own event loop in a daemon thread,
    so the blocking console loop can keep the main thread.
    """
    ready = threading.Event()
    holder: dict[str, object] = {}

    def runner() -> None:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        stop_event = asyncio.Event()

        holder["loop"] = loop
        holder["stop_event"] = stop_event
        ready.set()

        try:
            loop.run_until_complete(
                run_reminder_scheduler(
                    state,
                    notifier,
                    interval_seconds=interval_seconds,
                    hour=hour,
                    days_before=days_before,
                    stop_event=stop_event,
                )
            )
        finally:
            loop.close()

    t = threading.Thread(target=runner, name="reminders", daemon=True)
    t.start()

    ready.wait(timeout=5.0)
    loop = holder.get("loop")
    stop_event = holder.get("stop_event")

    if not isinstance(loop, asyncio.AbstractEventLoop) or not isinstance(stop_event, asyncio.Event):
        logger.error("Reminder thread did not initialize properly.")
        return None

    logger.info("Reminder background thread started.")
    return ReminderBackgroundRunner(thread=t, loop=loop, stop_event=stop_event)
