# src/tickbox/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

Collaborators outside the core (console, reminder delivery, storage backend)
are described as Protocols so tests can plug in fakes.
"""

from collections.abc import Iterable
from typing import Awaitable, Protocol

from ..tasks.task_models import Task


class TaskRepo(Protocol):
    """Whole-snapshot task persistence."""

    def load(self) -> list[Task]: ...
    def save(self, tasks: Iterable[Task]) -> None: ...


class ReminderNotifier(Protocol):
    """
    Delivers reminder text to the user.

    The console implementation prints; a GUI or chat connector could show an
    alert or send a message instead.
    """

    def send_text(self, text: str) -> Awaitable[None]: ...
