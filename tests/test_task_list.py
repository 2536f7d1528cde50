# tests/test_task_list.py

from __future__ import annotations

from datetime import date

import pytest

from tickbox.errors import ErrorKind, TaskError
from tickbox.tasks.task_list import (
    EMPTY_LIST_TEXT,
    NO_MATCHES_TEXT,
    NO_UPCOMING_TEXT,
    TaskList,
)
from tickbox.tasks.task_models import Task


def _three() -> TaskList:
    return TaskList([Task.todo("read book"), Task.todo("buy milk"), Task.todo("Read paper")])


def test_add_reports_count() -> None:
    tl = TaskList()
    text = tl.add_task(Task.todo("read book"))
    assert "[T][ ] read book" in text
    assert "Now you have 1 tasks in the list." in text


def test_add_none_is_rejected() -> None:
    with pytest.raises(TaskError) as exc:
        TaskList().add_task(None)
    assert exc.value.kind == ErrorKind.NULL_TASK


def test_list_empty_sentinel_and_numbering() -> None:
    assert TaskList().list_tasks() == EMPTY_LIST_TEXT
    assert _three().list_tasks().splitlines() == [
        "Here are the tasks in your list:",
        "1.[T][ ] read book",
        "2.[T][ ] buy milk",
        "3.[T][ ] Read paper",
    ]


def test_mark_twice_is_fine() -> None:
    tl = _three()
    tl.mark_task_done(2)
    text = tl.mark_task_done(2)
    assert "[T][X] buy milk" in text
    assert tl.get(2).is_done


@pytest.mark.parametrize("index", [0, 4, -1])
def test_out_of_range_index(index: int) -> None:
    tl = _three()
    with pytest.raises(TaskError) as exc:
        tl.delete_task(index)
    assert exc.value.kind == ErrorKind.INDEX_OUT_OF_RANGE
    assert "between 1 and 3" in exc.value.detail
    assert len(tl) == 3


def test_empty_list_index_message_differs_but_kind_is_same() -> None:
    with pytest.raises(TaskError) as exc:
        TaskList().mark_task_done(1)
    assert exc.value.kind == ErrorKind.INDEX_OUT_OF_RANGE
    assert exc.value.detail == "No tasks in list!"


def test_delete_shifts_later_tasks_down() -> None:
    tl = _three()
    text = tl.delete_task(1)
    assert "[T][ ] read book" in text
    assert "Now you have 2 tasks in the list." in text
    listing = tl.list_tasks()
    assert "read book" not in listing
    assert "1.[T][ ] buy milk" in listing
    assert "2.[T][ ] Read paper" in listing


def test_find_is_case_insensitive_and_renumbers() -> None:
    tl = TaskList([Task.todo("buy milk"), Task.todo("read book"), Task.todo("READ paper")])
    assert tl.find_tasks("read").splitlines() == [
        "Here are the matching tasks in your list:",
        "1.[T][ ] read book",
        "2.[T][ ] READ paper",
    ]
    assert tl.find_tasks("zebra") == NO_MATCHES_TEXT


def test_find_ignores_dates() -> None:
    tl = TaskList([Task.deadline("pay rent", "2024-03-05")])
    assert tl.find_tasks("Mar") == NO_MATCHES_TEXT


def test_upcoming_filters_and_sorts_stably() -> None:
    today = date(2024, 6, 1)
    done = Task.deadline("done one", "2024-06-02")
    done.mark_done()
    tl = TaskList(
        [
            Task.todo("no date"),
            Task.deadline("past", "2024-05-31"),
            Task.event("later", "2024-06-10", "2024-06-11"),
            Task.deadline("today", "2024-06-01"),
            done,
            Task.deadline("same day first", "2024-06-05"),
            Task.event("same day second", "2024-06-05 0800", "2024-06-05 0900"),
        ]
    )
    assert [t.description for t in tl.upcoming(today)] == [
        "today",
        "same day first",
        "same day second",
        "later",
    ]
    text = tl.list_upcoming_tasks(today)
    assert text.startswith("Here are your upcoming tasks:\n1.[D][ ] today")


def test_upcoming_sentinel() -> None:
    assert TaskList([Task.todo("x")]).list_upcoming_tasks(date(2024, 1, 1)) == NO_UPCOMING_TEXT
