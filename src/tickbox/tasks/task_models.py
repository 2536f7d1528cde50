# src/tickbox/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import StrEnum

from ..errors import ErrorKind, TaskError
from .dates import When, normalize

FORBIDDEN_DESCRIPTION_CHARS = frozenset("|\r\n")


class TaskKind(StrEnum):
    """Task kind; the value doubles as the storage type tag."""

    TODO = "T"
    DEADLINE = "D"
    EVENT = "E"


@dataclass(frozen=True, slots=True)
class ToDo:
    pass


@dataclass(frozen=True, slots=True)
class Deadline:
    due: When


@dataclass(frozen=True, slots=True)
class Event:
    start: When
    end: When


TaskDetail = ToDo | Deadline | Event


@dataclass(slots=True)
class Task:
    """
    A tracked task.

    Shared fields live here once; kind-specific data lives in `detail`.
    `detail` is never reassigned, so a task's kind is fixed at construction.
    There is deliberately no way to clear `is_done` once set.
    """

    description: str
    detail: TaskDetail
    is_done: bool = False

    # ---- constructors ----

    @classmethod
    def todo(cls, description: str) -> Task:
        return cls(_clean_description(description), ToDo())

    @classmethod
    def deadline(cls, description: str, by: str | When) -> Task:
        desc = _clean_description(description)
        due = by if isinstance(by, When) else normalize(by)
        return cls(desc, Deadline(due))

    @classmethod
    def event(cls, description: str, start: str | When, end: str | When) -> Task:
        desc = _clean_description(description)
        start_w = start if isinstance(start, When) else normalize(start)
        end_w = end if isinstance(end, When) else normalize(end)
        return cls(desc, Event(start_w, end_w))

    # ---- state ----

    def mark_done(self) -> None:
        self.is_done = True

    @property
    def kind(self) -> TaskKind:
        match self.detail:
            case ToDo():
                return TaskKind.TODO
            case Deadline():
                return TaskKind.DEADLINE
            case Event():
                return TaskKind.EVENT

    @property
    def primary_date(self) -> date | None:
        """Due date of a deadline or start date of an event; None for to-dos."""
        match self.detail:
            case ToDo():
                return None
            case Deadline(due=due):
                return due.day
            case Event(start=start):
                return start.day

    @property
    def status_icon(self) -> str:
        return "X" if self.is_done else " "

    def render(self) -> str:
        head = f"[{self.kind.value}][{self.status_icon}] {self.description}"
        match self.detail:
            case ToDo():
                return head
            case Deadline(due=due):
                return f"{head} (by: {due.display()})"
            case Event(start=start, end=end):
                return f"{head} (from: {start.display()} to: {end.display()})"

    def __str__(self) -> str:
        return self.render()


def _clean_description(description: str) -> str:
    desc = (description or "").strip()
    if not desc:
        raise TaskError(ErrorKind.EMPTY_DESCRIPTION, "Task description cannot be empty.")
    # "|" is the storage field separator and records are one per line.
    bad = FORBIDDEN_DESCRIPTION_CHARS.intersection(desc)
    if bad:
        shown = " ".join(repr(c) for c in sorted(bad))
        raise TaskError(
            ErrorKind.MALFORMED_COMMAND,
            f"Task description cannot contain {shown}.",
        )
    return desc
