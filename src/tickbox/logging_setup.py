# src/tickbox/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FILE_NAME = "tickbox.log"

_SCHEDULER_LOGGER = "tickbox.tasks.task_scheduler"


class ConsoleFilter(logging.Filter):
    """
    Decide what reaches stderr while the REPL is using stdout.

    - tickbox loggers: everything the handler level allows
    - reminder scheduler: WARNING+ only; the reminders themselves go through the notifier
    - asyncio (the reminder thread's event loop): WARNING+
    - captured warnings ('py.warnings'): file only
    - anything else: ERROR+
    """

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name

        if name == "py.warnings":
            return False

        if name.startswith(_SCHEDULER_LOGGER) or name == "asyncio":
            return record.levelno >= logging.WARNING

        if name == "tickbox" or name.startswith("tickbox."):
            return True

        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path = "data",
    console_level: int = logging.WARNING,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Send filtered logs to stderr and full logs to <log_dir>/tickbox.log.

    Replaces any handlers already on the root logger, so calling it twice does
    not duplicate output. Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(min(console_level, file_level))
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(fmt)
    console.addFilter(ConsoleFilter())
    root.addHandler(console)

    to_file = logging.FileHandler(str(log_file), encoding="utf-8")
    to_file.setLevel(file_level)
    to_file.setFormatter(fmt)
    root.addHandler(to_file)

    logging.captureWarnings(True)
    return log_file
