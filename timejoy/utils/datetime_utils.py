"""Shared date utilities."""

from __future__ import annotations

from datetime import date


def parse_date(value: str | None) -> date | None:
    """Parse a ``YYYY-MM-DD`` calendar date, returning None on invalid input."""
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def today_iso() -> str:
    """Today's local date as ``YYYY-MM-DD``."""
    return date.today().isoformat()
