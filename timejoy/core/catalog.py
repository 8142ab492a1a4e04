"""Shared activity/mood catalogs and their administration."""

from __future__ import annotations

import secrets
import string
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, replace
from typing import Generic, TypeVar

from .models import ActivityType, MoodOption

UNKNOWN_LABEL = "Unknown"
FALLBACK_COLOR = "gray"

# Order matters: cycle_color walks this list.
PALETTE = ("blue", "green", "purple", "red", "orange", "yellow", "pink", "indigo", "gray")

HEX_COLORS = {
    "blue": "#3b82f6",
    "green": "#22c55e",
    "purple": "#a855f7",
    "orange": "#f97316",
    "red": "#ef4444",
    "yellow": "#eab308",
    "pink": "#ec4899",
    "indigo": "#6366f1",
    "gray": "#94a3b8",
}

T = TypeVar("T", ActivityType, MoodOption)


@dataclass(frozen=True)
class CatalogLabel:
    """What a view needs to draw a catalog reference."""

    label: str
    color: str

    @property
    def hex_color(self) -> str:
        return hex_color(self.color)


FALLBACK_LABEL = CatalogLabel(label=UNKNOWN_LABEL, color=FALLBACK_COLOR)


class Catalog(Generic[T]):
    """Ordered id -> record mapping with explicit fallback lookup."""

    def __init__(self, records: Iterable[T] = ()):
        self._records: dict[str, T] = {}
        for record in records:
            self._records.setdefault(record.id, record)

    def __iter__(self) -> Iterator[T]:
        return iter(self._records.values())

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, record_id: object) -> bool:
        return record_id in self._records

    def get(self, record_id: str | None) -> T | None:
        if record_id is None:
            return None
        return self._records.get(record_id)

    def resolve(self, record_id: str | None) -> CatalogLabel:
        """Label and color for ``record_id``; dangling ids get the Unknown/gray fallback."""
        record = self.get(record_id)
        if record is None:
            return FALLBACK_LABEL
        return CatalogLabel(label=record.label, color=record.color or FALLBACK_COLOR)


def hex_color(token: str | None) -> str:
    return HEX_COLORS.get(token or "", HEX_COLORS[FALLBACK_COLOR])


def new_catalog_id() -> str:
    alphabet = string.ascii_lowercase + string.digits
    return "".join(secrets.choice(alphabet) for _ in range(9))


def add_activity_type(types: list[ActivityType], label: str = "New Activity") -> list[ActivityType]:
    return [*types, ActivityType(id=new_catalog_id(), label=label, color=FALLBACK_COLOR)]


def add_mood_option(moods: list[MoodOption], label: str = "New Mood") -> list[MoodOption]:
    mood = MoodOption(id=new_catalog_id(), label=label, value=5, icon="meh", color=FALLBACK_COLOR)
    return [*moods, mood]


def rename(records: list[T], record_id: str, label: str) -> list[T]:
    label = label.strip()
    if not label:
        raise ValueError("Label cannot be empty.")
    _require(records, record_id)
    return [replace(r, label=label) if r.id == record_id else r for r in records]


def recolor(records: list[T], record_id: str, color: str) -> list[T]:
    if color not in PALETTE:
        raise ValueError(f"Unknown color '{color}'.")
    _require(records, record_id)
    return [replace(r, color=color) if r.id == record_id else r for r in records]


def cycle_color(records: list[T], record_id: str) -> list[T]:
    """Advance one record to the next palette color."""
    record = _require(records, record_id)
    try:
        index = PALETTE.index(record.color)
    except ValueError:
        index = -1
    return recolor(records, record_id, PALETTE[(index + 1) % len(PALETTE)])


def remove(records: list[T], record_id: str) -> list[T]:
    """Drop a record. Entries that reference it keep the dangling id."""
    _require(records, record_id)
    return [r for r in records if r.id != record_id]


def _require(records: list[T], record_id: str) -> T:
    for record in records:
        if record.id == record_id:
            return record
    raise KeyError(record_id)
