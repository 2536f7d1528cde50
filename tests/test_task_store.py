# tests/test_task_store.py

from __future__ import annotations

from pathlib import Path

import pytest

from tickbox.errors import ErrorKind, TaskError
from tickbox.tasks.task_models import Task
from tickbox.tasks.task_store import TaskStore


def test_missing_file_and_directory_are_created(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "dir" / "tasks.txt"
    store = TaskStore(path)
    assert store.load() == []
    assert path.exists()
    assert path.read_text("utf-8") == ""


def test_save_rewrites_whole_file(tmp_path: Path) -> None:
    store = TaskStore(tmp_path / "tasks.txt")
    store.save([Task.todo("a"), Task.todo("b")])
    store.save([Task.todo("c")])
    assert store.path.read_text("utf-8") == "T | 0 | c\n"


def test_load_skips_blank_lines(tmp_path: Path) -> None:
    path = tmp_path / "tasks.txt"
    path.write_text("T | 0 | a\u2028b\r\nT | 1 | c\n", "utf-8")
    tasks = TaskStore(path).load()
    assert [str(t) for t in tasks] == ["[T][ ] a", "[D][X] pay rent (by: Mar 05 2024)"]


def test_load_reports_bad_line_number(tmp_path: Path) -> None:
    path = tmp_path / "tasks.txt"
    path.write_text("T | 0 | a\u2028b\r\nT | 1 | c\n", "utf-8")
    with pytest.raises(TaskError) as exc:
        TaskStore(path).load()
    assert exc.value.kind == ErrorKind.UNKNOWN_TASK_TYPE
    assert "line 2" in exc.value.detail


def test_save_io_failure_is_storage_error(tmp_path: Path) -> None:
    store = TaskStore(tmp_path / "tasks.txt")
    store.path.mkdir()  # a directory where the file should be
    with pytest.raises(TaskError) as exc:
        store.save([Task.todo("a")])
    assert exc.value.kind == ErrorKind.STORAGE_IO


def test_save_then_load_round_trip(tmp_path: Path) -> None:
    store = TaskStore(tmp_path / "tasks.txt")
    event = Task.event("trip", "2024-06-01", "2024-06-03")
    event.mark_done()
    store.save([Task.todo("read"), event])
    loaded = store.load()
    assert [str(t) for t in loaded] == ["[T][ ] read", str(event)]


def test_unicode_line_separator_does_not_split_a_record(tmp_path: Path) -> None:
    path = tmp_path / "tasks.txt"
    path.write_text("T | 0 | a\u2028b\r\nT | 1 | c\n", "utf-8")
    tasks = TaskStore(path).load()
    assert [t.description for t in tasks] == ["a\u2028b", "c"]
    assert tasks[1].is_done
