# src/tickbox/tasks/task_list.py

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date

from ..errors import ErrorKind, TaskError
from .task_models import Task

logger = logging.getLogger(__name__)

EMPTY_LIST_TEXT = "No tasks in your list yet!"
NO_MATCHES_TEXT = "No matching tasks found in current list."
NO_UPCOMING_TEXT = "No upcoming tasks!"


class TaskList:
    """
    Ordered in-memory task collection.

    Indexes exposed to callers are 1-based positions in the current order;
    they shift down after a delete.
    """

    def __init__(self, tasks: Iterable[Task] | None = None) -> None:
        self._tasks: list[Task] = list(tasks or [])

    def __len__(self) -> int:
        return len(self._tasks)

    @property
    def tasks(self) -> list[Task]:
        """Shallow copy of the current tasks, in order."""
        return list(self._tasks)

    def get(self, index: int) -> Task:
        self._validate_index(index)
        return self._tasks[index - 1]

    # ---- mutations ----

    def add_task(self, task: Task | None) -> str:
        if task is None:
            raise TaskError(ErrorKind.NULL_TASK, "Cannot add an empty (null) task.")
        self._tasks.append(task)
        logger.debug("Task added kind=%s size=%d", task.kind.value, len(self._tasks))
        return (
            f"Got it. I've added this task:\n  {task}\n"
            f"Now you have {len(self._tasks)} tasks in the list."
        )

    def mark_task_done(self, index: int) -> str:
        task = self.get(index)
        task.mark_done()
        logger.debug("Task marked done index=%d", index)
        return f"Nice! I've marked this task as done:\n  {task}"

    def delete_task(self, index: int) -> str:
        self._validate_index(index)
        removed = self._tasks.pop(index - 1)
        logger.debug("Task deleted index=%d size=%d", index, len(self._tasks))
        return (
            f"Noted. I've removed this task:\n  {removed}\n"
            f"Now you have {len(self._tasks)} tasks in the list."
        )

    # ---- queries ----

    def list_tasks(self) -> str:
        if not self._tasks:
            return EMPTY_LIST_TEXT
        lines = ["Here are the tasks in your list:"]
        lines.extend(f"{i}.{t}" for i, t in enumerate(self._tasks, start=1))
        return "\n".join(lines)

    def find_tasks(self, keyword: str) -> str:
        """Case-insensitive substring search over descriptions only."""
        needle = (keyword or "").strip().lower()
        matches = [t for t in self._tasks if needle in t.description.lower()]
        if not matches:
            return NO_MATCHES_TEXT
        lines = ["Here are the matching tasks in your list:"]
        lines.extend(f"{i}.{t}" for i, t in enumerate(matches, start=1))
        return "\n".join(lines)

    def upcoming(self, today: date | None = None) -> list[Task]:
        """
        Not-done deadlines/events whose primary date is today or later,
        sorted by that date. list.sort is stable, so ties keep list order.
        """
        today = today or date.today()
        found: list[tuple[date, Task]] = []
        for task in self._tasks:
            if task.is_done:
                continue
            when = task.primary_date
            if when is not None and when >= today:
                found.append((when, task))
        found.sort(key=lambda pair: pair[0])
        return [task for _, task in found]

    def list_upcoming_tasks(self, today: date | None = None) -> str:
        tasks = self.upcoming(today)
        if not tasks:
            return NO_UPCOMING_TEXT
        lines = ["Here are your upcoming tasks:"]
        lines.extend(f"{i}.{t}" for i, t in enumerate(tasks, start=1))
        return "\n".join(lines)

    # ---- helpers ----

    def _validate_index(self, index: int) -> None:
        if not self._tasks:
            raise TaskError(ErrorKind.INDEX_OUT_OF_RANGE, "No tasks in list!")
        if index < 1 or index > len(self._tasks):
            raise TaskError(
                ErrorKind.INDEX_OUT_OF_RANGE,
                f"Invalid task number: {index}. "
                f"Please provide a number that is between 1 and {len(self._tasks)}.",
            )
