# src/tickbox/core/state.py

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any

from ..tasks.task_list import TaskList
from .ports import TaskRepo


@dataclass
class AppState:
    # Settings (or a test SimpleNamespace with the same attributes).
    settings: Any

    tasks: TaskList
    store: TaskRepo

    # Held around "classify -> apply -> persist" and by the reminder scheduler.
    lock: threading.RLock = field(default_factory=threading.RLock)

    # Set when the task file could not be loaded at startup.
    load_warning: str | None = None
