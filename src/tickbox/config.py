# src/tickbox/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Every value has a usable default; nothing is required at import time.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TICKBOX"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


# Values already present in the environment win over .env.
load_dotenv(override=False)


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Front-ends ----
    console_enabled: bool

    # ---- Local data paths ----
    data_dir: Path
    tasks_path: Path

    # ---- Reminders ----
    reminders_enabled: bool
    reminder_hour: int
    reminder_days_before: int
    reminder_interval_seconds: float

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "tickbox")
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        console_enabled = _env_bool(_k("CONSOLE_ENABLED"), True)

        data_dir = _env_path(_k("DATA_DIR"), Path("data"))
        tasks_path = _env_path(_k("TASKS_PATH"), data_dir / "tasks.txt")

        reminders_enabled = _env_bool(_k("REMINDERS_ENABLED"), True)
        reminder_hour = min(23, max(0, _env_int(_k("REMINDER_HOUR"), 9)))
        reminder_days_before = max(0, _env_int(_k("REMINDER_DAYS_BEFORE"), 1))
        reminder_interval_seconds = max(1.0, _env_float(_k("REMINDER_INTERVAL_SECONDS"), 30.0))

        return Settings(
            app_name=app_name,
            log_level=log_level,
            console_enabled=console_enabled,
            data_dir=data_dir,
            tasks_path=tasks_path,
            reminders_enabled=reminders_enabled,
            reminder_hour=reminder_hour,
            reminder_days_before=reminder_days_before,
            reminder_interval_seconds=reminder_interval_seconds,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
