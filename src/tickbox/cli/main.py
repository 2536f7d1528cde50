# src/tickbox/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then starts:
- the reminder scheduler in a background thread (optional),
- the console REPL in the main thread.
"""

from __future__ import annotations

import logging

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import ConsoleNotifier, run_console_loop
from ..logging_setup import setup_logging
from ..tasks.task_scheduler import ReminderBackgroundRunner, start_reminders_in_background

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    file_level = getattr(logging, level_name, logging.INFO)
    setup_logging(log_dir=settings.data_dir, file_level=file_level)

    logger.info("Starting %s...", settings.app_name)

    state = create_initial_state(settings=settings)
    if state.load_warning:
        print(state.load_warning)

    reminders: ReminderBackgroundRunner | None = None
    if settings.reminders_enabled:
        reminders = start_reminders_in_background(
            state,
            ConsoleNotifier(),
            interval_seconds=settings.reminder_interval_seconds,
            hour=settings.reminder_hour,
            days_before=settings.reminder_days_before,
        )

    try:
        if settings.console_enabled:
            run_console_loop(state)
        else:
            logger.info("Console disabled; nothing to run.")
    finally:
        if reminders is not None:
            reminders.stop()
            reminders.join(timeout=5.0)
        logger.info("Bye.")


if __name__ == "__main__":
    main()
