# src/tickbox/tasks/dates.py

"""
Date normalization.

Two separate grammars live here:
- the input grammar (`normalize`) used for dates typed by the user:
    d/M/yyyy or yyyy-MM-dd, optionally followed by an HHmm time
- the canonical grammar (`parse_canonical`) used only when reading records
  back from storage:
    MMM dd yyyy or MMM dd yyyy, HH:mm

The input grammar does not accept canonical strings and vice versa.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, time

from ..errors import ErrorKind, TaskError

# Fixed English abbreviations; strftime("%b") would follow the process locale.
MONTH_ABBRS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
_MONTH_BY_ABBR = {abbr: i for i, abbr in enumerate(MONTH_ABBRS, start=1)}

_SLASH_DATE = re.compile(r"(?P<day>\d{1,2})/(?P<month>\d{1,2})/(?P<year>\d{4})", re.ASCII)
_ISO_DATE = re.compile(r"(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})", re.ASCII)
_TIME_24H = re.compile(r"(?P<hour>\d{2})(?P<minute>\d{2})", re.ASCII)
_CANONICAL = re.compile(
    r"(?P<mon>[A-Z][a-z]{2}) (?P<day>\d{2}) (?P<year>\d{4})(?:, (?P<hour>\d{2}):(?P<minute>\d{2}))?",
    re.ASCII,
)

INPUT_FORMAT_HINT = "Use d/M/yyyy or yyyy-MM-dd, optionally followed by HHmm (e.g. 2025-02-20 1800)."


@dataclass(frozen=True, slots=True)
class When:
    """A calendar date with an optional time of day (minute precision)."""

    day: date
    at: time | None = None

    @property
    def has_time(self) -> bool:
        return self.at is not None

    def as_datetime(self) -> datetime:
        return datetime.combine(self.day, self.at or time(0, 0))

    def display(self) -> str:
        text = f"{MONTH_ABBRS[self.day.month - 1]} {self.day.day:02d} {self.day.year:04d}"
        if self.at is not None:
            text += f", {self.at.hour:02d}:{self.at.minute:02d}"
        return text

    def __str__(self) -> str:
        return self.display()


def _date_error(raw: str) -> TaskError:
    return TaskError(ErrorKind.DATE_FORMAT, f"Invalid date: '{raw}'. {INPUT_FORMAT_HINT}")


def _build_date(raw: str, year: str, month: str, day: str) -> date:
    try:
        return date(int(year), int(month), int(day))
    except ValueError:
        raise _date_error(raw) from None


def _build_time(raw: str, hour: str, minute: str) -> time:
    h, m = int(hour), int(minute)
    if not (0 <= h <= 23 and 0 <= m <= 59):
        raise TaskError(
            ErrorKind.DATE_FORMAT,
            f"Invalid time in '{raw}': hour must be 00-23 and minute 00-59.",
        )
    return time(h, m)


def _parse_input_date(raw: str, token: str) -> date:
    for pattern in (_SLASH_DATE, _ISO_DATE):
        m = pattern.fullmatch(token)
        if m:
            return _build_date(raw, m["year"], m["month"], m["day"])
    raise _date_error(raw)


def normalize(raw: str) -> When:
    """Parse a user-supplied date (and optional time) into a When."""
    if raw is None:
        raise _date_error("")
    text = raw.strip()
    parts = text.split()
    if not parts or len(parts) > 2:
        raise _date_error(text)

    day = _parse_input_date(text, parts[0])
    if len(parts) == 1:
        return When(day)

    m = _TIME_24H.fullmatch(parts[1])
    if not m:
        raise TaskError(
            ErrorKind.DATE_FORMAT,
            f"Invalid time in '{text}'. Expected a 24-hour HHmm time (e.g. 1800).",
        )
    return When(day, _build_time(text, m["hour"], m["minute"]))


def parse_canonical(text: str) -> When:
    """Parse the canonical display form back into a When (storage direction)."""
    raw = (text or "").strip()
    m = _CANONICAL.fullmatch(raw)
    if not m or m["mon"] not in _MONTH_BY_ABBR:
        raise TaskError(
            ErrorKind.DATE_FORMAT,
            f"Invalid stored date: '{raw}'. Expected 'MMM dd yyyy' or 'MMM dd yyyy, HH:mm'.",
        )

    day = _build_date(raw, m["year"], str(_MONTH_BY_ABBR[m["mon"]]), m["day"])
    if m["hour"] is None:
        return When(day)
    return When(day, _build_time(raw, m["hour"], m["minute"]))
