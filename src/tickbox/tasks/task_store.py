# src/tickbox/tasks/task_store.py

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from ..errors import ErrorKind, TaskError
from .codec import decode, encode
from .task_models import Task

logger = logging.getLogger(__name__)


class TaskStore:
    """
    Flat-file task store.

    The file is a full snapshot of the task list:
    - load() reads every record (blank lines skipped)
    - save() truncates and rewrites the whole file

    A failure half-way through save() leaves a partially written file; there is
    no temp-file swap.
    """

    def __init__(self, path: str | Path = "tasks.txt") -> None:
        self._path = Path(path)
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise TaskError(ErrorKind.STORAGE_IO, f"Cannot create {self._path.parent}: {e}") from e
        logger.info("TaskStore ready path=%s", self._path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> list[Task]:
        """
        Read all tasks. A missing file is created empty.

        Raises TaskError(STORAGE_IO) on I/O failure; decode errors are re-raised
        with the offending line number.
        """
        try:
            if not self._path.exists():
                self._path.touch()
                logger.info("Created empty task file %s", self._path)
                return []
            text = self._path.read_text(encoding="utf-8")
        except OSError as e:
            raise TaskError(ErrorKind.STORAGE_IO, f"Error loading tasks: {e}") from e

        tasks: list[Task] = []
        for lineno, line in enumerate(text.split("\n"), start=1):
            if not line.strip():
                continue
            try:
                tasks.append(decode(line))
            except TaskError as e:
                raise TaskError(e.kind, f"{self._path} line {lineno}: {e.detail}") from e

        logger.info("Loaded %d tasks from %s", len(tasks), self._path)
        return tasks

    def save(self, tasks: Iterable[Task]) -> None:
        lines = [encode(t) + "\n" for t in tasks]
        try:
            with open(self._path, "w", encoding="utf-8") as f:
                f.writelines(lines)
        except OSError as e:
            raise TaskError(ErrorKind.STORAGE_IO, f"Error saving tasks: {e}") from e
        logger.debug("Saved %d tasks to %s", len(lines), self._path)
