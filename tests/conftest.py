# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from tickbox.core.state import AppState
from tickbox.tasks.task_list import TaskList
from tickbox.tasks.task_store import TaskStore


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the bootstrap.

    A SimpleNamespace keeps tests independent of the process environment.
    """
    data_dir = tmp_path / "data"
    return SimpleNamespace(
        app_name="tickbox-test",
        log_level="DEBUG",
        console_enabled=True,
        data_dir=data_dir,
        tasks_path=data_dir / "tasks.txt",
        reminders_enabled=False,
        reminder_hour=9,
        reminder_days_before=1,
        reminder_interval_seconds=0.01,
    )


@pytest.fixture()
def store(settings: SimpleNamespace) -> TaskStore:
    return TaskStore(settings.tasks_path)


@pytest.fixture()
def state(settings: SimpleNamespace, store: TaskStore) -> AppState:
    """
    AppState with an empty task list and a real file-backed TaskStore.

    The real store is used on purpose: every mutating command rewrites the file,
    and tests assert on that file.
    """
    return AppState(settings=settings, tasks=TaskList(), store=store)
