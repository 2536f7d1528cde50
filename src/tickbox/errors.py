# src/tickbox/errors.py

"""
Error taxonomy.

There is exactly one exception type, TaskError. What went wrong is carried by
its ErrorKind; `detail` is the human-readable text shown to the user.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorKind(StrEnum):
    MALFORMED_COMMAND = "malformed_command"
    UNKNOWN_COMMAND = "unknown_command"
    EMPTY_DESCRIPTION = "empty_description"
    EMPTY_KEYWORD = "empty_keyword"
    INVALID_INDEX = "invalid_index"
    INDEX_OUT_OF_RANGE = "index_out_of_range"
    DATE_FORMAT = "date_format"
    MALFORMED_RECORD = "malformed_record"
    UNKNOWN_TASK_TYPE = "unknown_task_type"
    STORAGE_IO = "storage_io"
    NULL_TASK = "null_task"


class TaskError(Exception):
    def __init__(self, kind: ErrorKind, detail: str) -> None:
        super().__init__(detail)
        self.kind = kind
        self.detail = detail

    def __repr__(self) -> str:
        return f"TaskError(kind={self.kind.value!r}, detail={self.detail!r})"
