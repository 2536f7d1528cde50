# src/tickbox/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from ..core.grammar import (
    classify,
    parse_deadline,
    parse_event,
    parse_index,
    parse_keyword,
    parse_todo,
    parse_upcoming,
)
from ..core.state import AppState
from ..errors import ErrorKind, TaskError
from ..tasks.task_models import Event, Task

CommandHandler = Callable[[AppState, str], str]

FAREWELL_TEXT = "Bye. Hope to see you again soon!"

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CommandResult:
    """
    Outcome of one command.

    ok=False means the command was rejected and the task list is unchanged.
    `warning` is set when the command was applied but saving failed.
    """

    text: str
    ok: bool = True
    error: ErrorKind | None = None
    warning: str | None = None
    command: str | None = None

    @property
    def is_exit(self) -> bool:
        return self.ok and self.command == "bye"

    def display(self) -> str:
        if not self.ok:
            return f"Error: {self.text}"
        if self.warning:
            return f"{self.text}\nWarning: {self.warning}"
        return self.text


class CommandRegistry:
    """Maps command words to handlers and converts TaskError into results."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}
        self._mutating: set[str] = set()

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
        mutates: bool = False,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in [key, *(a.lower() for a in aliases)]:
            self._handlers[alias] = handler
            if mutates:
                self._mutating.add(alias)

    def handle(self, state: AppState, line: str) -> CommandResult:
        """
        Classify, apply and (for mutating commands) persist one input line.

        Never raises TaskError: rejections come back as ok=False results.
        """
        try:
            word, args = classify(line)
        except TaskError as e:
            return CommandResult(text=e.detail, ok=False, error=e.kind)

        handler = self._handlers.get(word)
        if handler is None:
            return CommandResult(
                text=f"Unknown command: {word}. Type 'help' to list commands.",
                ok=False,
                error=ErrorKind.UNKNOWN_COMMAND,
                command=word,
            )

        try:
            text = handler(state, args)
        except TaskError as e:
            logger.debug("Command rejected word=%s kind=%s", word, e.kind.value)
            return CommandResult(text=e.detail, ok=False, error=e.kind, command=word)

        if word not in self._mutating:
            return CommandResult(text=text, command=word)

        try:
            state.store.save(state.tasks.tasks)
        except TaskError as e:
            # The in-memory change stays; the user is told the file is behind.
            logger.warning("Save failed after %s: %s", word, e.detail)
            return CommandResult(text=text, error=e.kind, warning=e.detail, command=word)
        return CommandResult(text=text, command=word)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  {name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def cmd_help(state: AppState, args: str) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: str) -> str:
    return state.tasks.list_tasks()


def cmd_mark(state: AppState, args: str) -> str:
    return state.tasks.mark_task_done(parse_index(args, "mark"))


def cmd_delete(state: AppState, args: str) -> str:
    return state.tasks.delete_task(parse_index(args, "delete"))


def cmd_todo(state: AppState, args: str) -> str:
    return state.tasks.add_task(Task.todo(parse_todo(args)))


def cmd_deadline(state: AppState, args: str) -> str:
    parsed = parse_deadline(args)
    return state.tasks.add_task(Task.deadline(parsed.description, parsed.by))


def cmd_event(state: AppState, args: str) -> str:
    parsed = parse_event(args)
    task = Task.event(parsed.description, parsed.start, parsed.end)
    check_event_order(task)
    return state.tasks.add_task(task)


def check_event_order(task: Task) -> None:
    """When both ends carry a time, the end must be strictly after the start."""
    detail = task.detail
    if not isinstance(detail, Event):
        return
    if detail.start.has_time and detail.end.has_time:
        if detail.end.as_datetime() <= detail.start.as_datetime():
            raise TaskError(
                ErrorKind.MALFORMED_COMMAND,
                f"Event end ({detail.end}) must be after its start ({detail.start}).",
            )


def cmd_find(state: AppState, args: str) -> str:
    return state.tasks.find_tasks(parse_keyword(args))


def cmd_upcoming(state: AppState, args: str) -> str:
    parse_upcoming(args)
    return state.tasks.list_upcoming_tasks()


def cmd_bye(state: AppState, args: str) -> str:
    return FAREWELL_TEXT


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["?"])
registry.register("list", cmd_list, help_text="List all tasks.")
registry.register("todo", cmd_todo, help_text="Add a to-do: todo DESCRIPTION", mutates=True)
registry.register(
    "deadline",
    cmd_deadline,
    help_text="Add a deadline: deadline DESCRIPTION /by DATE [HHmm]",
    mutates=True,
)
registry.register(
    "event",
    cmd_event,
    help_text="Add an event: event DESCRIPTION /from DATE [HHmm] /to DATE [HHmm]",
    mutates=True,
)
registry.register("mark", cmd_mark, help_text="Mark a task as done: mark INDEX", mutates=True)
registry.register("delete", cmd_delete, help_text="Delete a task: delete INDEX", mutates=True)
registry.register("find", cmd_find, help_text="Search descriptions: find KEYWORD")
registry.register("upcoming", cmd_upcoming, help_text="List upcoming deadlines and events.")
registry.register("bye", cmd_bye, help_text="Say goodbye and exit.")
