# src/tickbox/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local data directories exist,
- builds the TaskStore and loads the task list into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.state import AppState
from ..errors import TaskError
from ..tasks.task_list import TaskList
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)

LOAD_WARNING = "Error loading task file. Starting with an empty task list."


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.tasks_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    A task file that cannot be read or decoded is not fatal: the app starts with
    an empty list and `state.load_warning` is set for the front-end to show.
    The first successful save then overwrites the unreadable file.
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    store = TaskStore(settings.tasks_path)
    try:
        tasks = TaskList(store.load())
        warning = None
    except TaskError as e:
        logger.warning("Failed to load tasks (%s): %s", e.kind.value, e.detail)
        tasks = TaskList()
        warning = LOAD_WARNING

    return AppState(settings=settings, tasks=tasks, store=store, load_warning=warning)
