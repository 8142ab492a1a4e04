"""Well-formedness and overlap checks for a proposed time entry."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from .catalog import Catalog
from .models import ActivityType, TimeEntry
from .time_slots import parse_time


class ValidationErrorKind(Enum):
    """Why a candidate entry was rejected."""

    INVALID_RANGE = "invalid_range"
    MISSING_WORK_TYPE = "missing_work_type"
    OVERLAP_CONFLICT = "overlap_conflict"


MESSAGES = {
    ValidationErrorKind.INVALID_RANGE: "End time must be after start time.",
    ValidationErrorKind.MISSING_WORK_TYPE: "Please select a work type.",
    ValidationErrorKind.OVERLAP_CONFLICT: (
        "This time slot overlaps with an existing entry. Please choose a different time."
    ),
}


@dataclass(frozen=True)
class EntryCandidate:
    """Form input for a new entry."""

    date: str
    start_time: str
    end_time: str
    work_type_id: str | None


@dataclass(frozen=True)
class ValidationResult:
    """Go/no-go decision for a candidate."""

    duration_minutes: int = 0
    error: ValidationErrorKind | None = None
    conflict: TimeEntry | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def message(self) -> str:
        return MESSAGES[self.error] if self.error else ""

    @classmethod
    def failure(cls, kind: ValidationErrorKind, conflict: TimeEntry | None = None) -> ValidationResult:
        return cls(error=kind, conflict=conflict)


class TimeSlotValidator:
    """Decide whether a candidate fits among a user's recorded entries.

    The validator never mutates anything; persisting an accepted entry is
    the caller's job.
    """

    def __init__(self, activity_types: Iterable[ActivityType] | None = None):
        self.activity_types = Catalog(activity_types) if activity_types is not None else None

    def validate(
        self,
        candidate: EntryCandidate,
        existing_entries: Iterable[TimeEntry],
    ) -> ValidationResult:
        """Validate ``candidate`` against entries already logged by the same user.

        Checks run in order: time range, activity type, overlap. Intervals are
        half-open, so an entry ending at 10:00 does not conflict with one
        starting at 10:00.
        """
        start = parse_time(candidate.start_time)
        end = parse_time(candidate.end_time)
        if start is None or end is None or end <= start:
            return ValidationResult.failure(ValidationErrorKind.INVALID_RANGE)

        if not candidate.work_type_id:
            return ValidationResult.failure(ValidationErrorKind.MISSING_WORK_TYPE)
        if self.activity_types is not None and candidate.work_type_id not in self.activity_types:
            return ValidationResult.failure(ValidationErrorKind.MISSING_WORK_TYPE)

        conflict = find_overlap(start, end, candidate.date, existing_entries)
        if conflict is not None:
            return ValidationResult.failure(ValidationErrorKind.OVERLAP_CONFLICT, conflict=conflict)

        return ValidationResult(duration_minutes=end - start)


def find_overlap(
    start: int,
    end: int,
    date: str,
    existing_entries: Iterable[TimeEntry],
) -> TimeEntry | None:
    """Return an entry on ``date`` whose interval intersects ``[start, end)``."""
    for entry in existing_entries:
        if entry.date != date:
            continue
        existing_start = parse_time(entry.start_time)
        existing_end = parse_time(entry.end_time)
        if existing_start is None or existing_end is None:
            continue
        if existing_start < end and existing_end > start:
            return entry
    return None


def validate(
    candidate: EntryCandidate,
    existing_entries: Iterable[TimeEntry],
    activity_types: Iterable[ActivityType] | None = None,
) -> ValidationResult:
    """Shortcut for ``TimeSlotValidator(activity_types).validate(...)``."""
    return TimeSlotValidator(activity_types).validate(candidate, existing_entries)
