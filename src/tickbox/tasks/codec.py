# src/tickbox/tasks/codec.py

"""
Storage record codec.

Record layout (one task per line, fields joined by " | "):

    T | 0 | read book
    D | 1 | pay rent | Mar 05 2024
    E | 0 | trip | Jun 01 2024 | Jun 03 2024, 18:00

Dates are stored in canonical display form and read back with
dates.parse_canonical. New descriptions cannot contain "|" or line breaks
(see task_models), which keeps every record on one unambiguous line.
Dates are still taken from the end of the record, so older files with
" | " in the middle of a description keep loading.
"""

from __future__ import annotations

from ..errors import ErrorKind, TaskError
from .dates import parse_canonical
from .task_models import Deadline, Event, Task, TaskKind, ToDo

SEPARATOR = " | "

_MIN_FIELDS = {
    TaskKind.TODO: 3,
    TaskKind.DEADLINE: 4,
    TaskKind.EVENT: 5,
}


def encode(task: Task) -> str:
    fields = [task.kind.value, "1" if task.is_done else "0", task.description]
    match task.detail:
        case ToDo():
            pass
        case Deadline(due=due):
            fields.append(due.display())
        case Event(start=start, end=end):
            fields.extend([start.display(), end.display()])
    return SEPARATOR.join(fields)


def decode(line: str) -> Task:
    raw = line.rstrip("\r\n")
    parts = raw.split(SEPARATOR)
    if len(parts) < 3:
        raise TaskError(ErrorKind.MALFORMED_RECORD, f"Invalid task format: {raw}")

    tag = parts[0].strip()
    try:
        kind = TaskKind(tag)
    except ValueError:
        raise TaskError(ErrorKind.UNKNOWN_TASK_TYPE, f"Unknown task type: {tag}") from None

    if len(parts) < _MIN_FIELDS[kind]:
        raise TaskError(ErrorKind.MALFORMED_RECORD, f"Invalid {kind.name.lower()} format: {raw}")

    done = parts[1].strip() == "1"

    match kind:
        case TaskKind.TODO:
            task = Task(SEPARATOR.join(parts[2:]), ToDo())
        case TaskKind.DEADLINE:
            task = Task(SEPARATOR.join(parts[2:-1]), Deadline(parse_canonical(parts[-1])))
        case TaskKind.EVENT:
            task = Task(
                SEPARATOR.join(parts[2:-2]),
                Event(parse_canonical(parts[-2]), parse_canonical(parts[-1])),
            )

    if not task.description.strip():
        raise TaskError(ErrorKind.MALFORMED_RECORD, f"Missing description: {raw}")
    if done:
        task.mark_done()
    return task
