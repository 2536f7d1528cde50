# src/tickbox/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..cli.commands import registry as command_registry
from ..core.state import AppState

logger = logging.getLogger(__name__)

Reader = Callable[[str], str]
Writer = Callable[[str], None]


class ConsoleNotifier:
    """ReminderNotifier that prints reminders on the console."""

    def __init__(self, write: Writer = print) -> None:
        self._write = write

    async def send_text(self, text: str) -> None:
        self._write(f"\n[Reminder] {text}")


def run_console_loop(
    state: AppState,
    *,
    read: Reader = input,
    write: Writer = print,
) -> None:
    """
    Line-based front-end: one command per line until `bye`, EOF or Ctrl+C.
    """
    app_name = str(getattr(state.settings, "app_name", "tickbox"))
    logger.info("Console connector started (tasks=%d).", len(state.tasks))
    write(f"Hello! I'm {app_name}.\nWhat can I do for you? (type 'help' for commands)")

    while True:
        try:
            line = read("> ")
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            write("")
            break

        if not line.strip():
            continue

        try:
            with state.lock:
                result = command_registry.handle(state, line)
        except Exception:
            logger.exception("Command handler crashed.")
            write("Error: internal error while handling the command.")
            continue

        write(result.display())
        if result.is_exit:
            logger.info("Console exit command received.")
            break

    logger.info("Console connector finished.")
