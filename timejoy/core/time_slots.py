"""Time-of-day arithmetic on the 30-minute logging grid."""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import TimeEntry

SLOT_MINUTES = 30
DAY_MINUTES = 24 * 60
DEFAULT_START_TIME = "09:00"

_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


def parse_time(value: str | None) -> int | None:
    """Convert ``HH:MM`` to minutes since midnight, returning None on invalid input.

    ``24:00`` is accepted as the end of the day (1440).
    """
    if not value:
        return None
    match = _TIME_RE.match(value.strip())
    if not match:
        return None
    hours, minutes = int(match.group(1)), int(match.group(2))
    if minutes > 59:
        return None
    total = hours * 60 + minutes
    if total > DAY_MINUTES:
        return None
    return total


def format_time(minutes: int) -> str:
    """Render minutes since midnight as ``HH:MM``."""
    if minutes < 0 or minutes > DAY_MINUTES:
        raise ValueError(f"Minutes out of range: {minutes}")
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def canonical_time(value: str) -> str:
    """Zero-padded ``HH:MM`` form of ``value``; unparseable input is returned as is."""
    minutes = parse_time(value)
    return value if minutes is None else format_time(minutes)


def time_slots() -> list[str]:
    """All selectable slot values, ``00:00`` through ``24:00`` inclusive."""
    return [format_time(m) for m in range(0, DAY_MINUTES + 1, SLOT_MINUTES)]


def next_slot(value: str) -> str | None:
    """Return the slot after ``value``, or None for ``24:00`` and off-grid times."""
    minutes = parse_time(value)
    if minutes is None or minutes % SLOT_MINUTES or minutes >= DAY_MINUTES:
        return None
    return format_time(minutes + SLOT_MINUTES)


def duration_minutes(start_time: str, end_time: str) -> int:
    """Minutes between two times; 0 when either is invalid or the range is empty."""
    start = parse_time(start_time)
    end = parse_time(end_time)
    if start is None or end is None or end <= start:
        return 0
    return end - start


def default_start_time(entries: Iterable[TimeEntry], user_id: str, today: str) -> str:
    """Suggest a start time: where the user's last entry today ended."""
    todays = [e for e in entries if e.user_id == user_id and e.date == today]
    if not todays:
        return DEFAULT_START_TIME
    latest = max(todays, key=lambda e: parse_time(e.end_time) or 0)
    return canonical_time(latest.end_time)
