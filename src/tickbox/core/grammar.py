# src/tickbox/core/grammar.py

"""
Command grammar.

`classify` splits a raw line into (command word, arguments). The parse_*
helpers decompose the arguments of a single command. Everything here is
pure: no task list, no storage.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from ..errors import ErrorKind, TaskError

BASIC_COMMAND = re.compile(r"(?P<word>\S+)(?P<arguments>.*)")
INDEX_ARGS = re.compile(r"[0-9]+")
DEADLINE_ARGS = re.compile(r"(?P<description>[^/]*)/by(?P<by>.*)")
EVENT_ARGS = re.compile(r"(?P<description>[^/]*)/from(?P<start>.*?)/to(?P<end>.*)")
UPCOMING_ARGS = re.compile(r"(?:tasks)?", re.IGNORECASE)

DEADLINE_USAGE = "Format: deadline DESCRIPTION /by DATE"
EVENT_USAGE = "Format: event DESCRIPTION /from DATE /to DATE"


@dataclass(frozen=True, slots=True)
class DeadlineArgs:
    description: str
    by: str


@dataclass(frozen=True, slots=True)
class EventArgs:
    description: str
    start: str
    end: str


def classify(line: str) -> tuple[str, str]:
    text = (line or "").strip()
    m = BASIC_COMMAND.fullmatch(text)
    if not m:
        raise TaskError(ErrorKind.MALFORMED_COMMAND, "Invalid command format. Type 'help' to list commands.")
    return m["word"].lower(), m["arguments"].strip()


def parse_index(args: str, command: str) -> int:
    token = args.strip()
    if not INDEX_ARGS.fullmatch(token):
        raise TaskError(
            ErrorKind.INVALID_INDEX,
            f"Task index must be a number. Format: {command} INDEX",
        )
    return int(token)


def parse_todo(args: str) -> str:
    description = args.strip()
    if not description:
        raise TaskError(
            ErrorKind.EMPTY_DESCRIPTION,
            "Description cannot be empty. Format: todo DESCRIPTION",
        )
    return description


def _require_description(description: str, usage: str) -> str:
    description = description.strip()
    if not description:
        raise TaskError(ErrorKind.EMPTY_DESCRIPTION, f"Missing task description. {usage}")
    return description


def parse_deadline(args: str) -> DeadlineArgs:
    text = args.strip()
    if not text:
        raise TaskError(ErrorKind.EMPTY_DESCRIPTION, f"Description cannot be empty. {DEADLINE_USAGE}")

    m = DEADLINE_ARGS.fullmatch(text)
    if not m:
        raise TaskError(ErrorKind.MALFORMED_COMMAND, f"Invalid deadline command. {DEADLINE_USAGE}")

    description = _require_description(m["description"], DEADLINE_USAGE)
    by = m["by"].strip()
    if not by:
        raise TaskError(ErrorKind.MALFORMED_COMMAND, f"Missing date after /by. {DEADLINE_USAGE}")
    return DeadlineArgs(description=description, by=by)


def parse_event(args: str) -> EventArgs:
    text = args.strip()
    if not text:
        raise TaskError(ErrorKind.EMPTY_DESCRIPTION, f"Description cannot be empty. {EVENT_USAGE}")

    m = EVENT_ARGS.fullmatch(text)
    if not m:
        raise TaskError(ErrorKind.MALFORMED_COMMAND, f"Invalid event command. {EVENT_USAGE}")

    description = _require_description(m["description"], EVENT_USAGE)
    start, end = m["start"].strip(), m["end"].strip()
    if not start or not end:
        raise TaskError(ErrorKind.MALFORMED_COMMAND, f"Missing date after /from or /to. {EVENT_USAGE}")
    return EventArgs(description=description, start=start, end=end)


def parse_keyword(args: str) -> str:
    keyword = args.strip()
    if not keyword:
        raise TaskError(ErrorKind.EMPTY_KEYWORD, "Find command cannot be empty. Format: find KEYWORD")
    return keyword


def parse_upcoming(args: str) -> None:
    """Accepts `upcoming` or `upcoming tasks` (any case)."""
    if not UPCOMING_ARGS.fullmatch(args.strip()):
        raise TaskError(ErrorKind.MALFORMED_COMMAND, "Invalid upcoming command. Format: upcoming")
