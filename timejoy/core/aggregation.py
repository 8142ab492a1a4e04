"""Chart-ready summaries derived from logged entries."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from .catalog import Catalog
from .models import ActivityType, MoodOption, TimeEntry, User

HAPPY_COLOR = "green"
RECENT_LIMIT = 10
# Stand-in for a real previous-week query.
PREVIOUS_WEEK_FACTOR = 0.8


@dataclass(frozen=True)
class BreakdownRow:
    activity_label: str
    hours: float
    color: str

    def to_dict(self) -> dict:
        return {"activityLabel": self.activity_label, "hours": self.hours, "colorToken": self.color}


@dataclass(frozen=True)
class ComparisonRow:
    activity_label: str
    current_hours: float
    previous_hours: float

    def to_dict(self) -> dict:
        return {
            "activityLabel": self.activity_label,
            "currentHours": self.current_hours,
            "previousHours": self.previous_hours,
        }


@dataclass(frozen=True)
class MoodSlice:
    mood_label: str
    total_minutes: int
    color: str

    def to_dict(self) -> dict:
        return {"moodLabel": self.mood_label, "totalMinutes": self.total_minutes, "colorToken": self.color}


@dataclass(frozen=True)
class Summary:
    total_hours: float
    happy_hours: float
    active_user_count: int

    def to_dict(self) -> dict:
        return {
            "totalHours": self.total_hours,
            "happyHours": self.happy_hours,
            "activeUserCount": self.active_user_count,
        }


@dataclass(frozen=True)
class DashboardView:
    """Everything one viewer's dashboard shows.

    ``recent_activity`` is None in privacy mode: administrators never get
    individual entries.
    """

    privacy_mode: bool
    today_breakdown: list[BreakdownRow]
    weekly_comparison: list[ComparisonRow]
    mood_distribution: list[MoodSlice]
    summary: Summary
    recent_activity: list[TimeEntry] | None

    def to_dict(self) -> dict:
        return {
            "privacyMode": self.privacy_mode,
            "todayBreakdown": [row.to_dict() for row in self.today_breakdown],
            "weeklyComparison": [row.to_dict() for row in self.weekly_comparison],
            "moodDistribution": [row.to_dict() for row in self.mood_distribution],
            "summary": self.summary.to_dict(),
            "recentActivity": (
                [entry.to_dict() for entry in self.recent_activity]
                if self.recent_activity is not None
                else None
            ),
        }


def round_hours(minutes: float) -> float:
    """Minutes to hours, rounded half away from zero to one decimal."""
    hours = Decimal(str(minutes)) / Decimal(60)
    return float(hours.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def _minutes_by_key(entries: Iterable[TimeEntry], key) -> dict[str, int]:
    totals: dict[str, int] = {}
    for entry in entries:
        k = key(entry)
        totals[k] = totals.get(k, 0) + entry.duration_minutes
    return totals


class EntryAggregator:
    """Read-only projections over an entry collection and the current catalogs."""

    def __init__(self, activity_types: Iterable[ActivityType], mood_options: Iterable[MoodOption]):
        self.activity_types: Catalog[ActivityType] = Catalog(activity_types)
        self.mood_options: Catalog[MoodOption] = Catalog(mood_options)

    def today_breakdown(self, entries: Iterable[TimeEntry], today: str) -> list[BreakdownRow]:
        """Hours logged today per activity type, one row per catalog entry."""
        totals = _minutes_by_key((e for e in entries if e.date == today), lambda e: e.work_type_id)
        return [
            BreakdownRow(activity_label=t.label, hours=round_hours(totals.get(t.id, 0)), color=t.color)
            for t in self.activity_types
        ]

    def weekly_comparison(self, entries: Iterable[TimeEntry]) -> list[ComparisonRow]:
        totals = _minutes_by_key(entries, lambda e: e.work_type_id)
        rows = []
        for activity in self.activity_types:
            minutes = totals.get(activity.id, 0)
            rows.append(
                ComparisonRow(
                    activity_label=activity.label,
                    current_hours=round_hours(minutes),
                    previous_hours=round_hours(minutes * PREVIOUS_WEEK_FACTOR),
                )
            )
        return rows

    def mood_distribution(self, entries: Iterable[TimeEntry]) -> list[MoodSlice]:
        """Minutes per mood in first-seen order, skipping empty groups."""
        totals = _minutes_by_key(entries, lambda e: e.mood_id)
        slices = []
        for mood_id, minutes in totals.items():
            if minutes <= 0:
                continue
            resolved = self.mood_options.resolve(mood_id)
            slices.append(MoodSlice(mood_label=resolved.label, total_minutes=minutes, color=resolved.color))
        return slices

    def summary(self, entries: Sequence[TimeEntry]) -> Summary:
        total = sum(e.duration_minutes for e in entries)
        happy = sum(
            e.duration_minutes
            for e in entries
            if self.mood_options.resolve(e.mood_id).color == HAPPY_COLOR
        )
        return Summary(
            total_hours=round_hours(total),
            happy_hours=round_hours(happy),
            active_user_count=len({e.user_id for e in entries}),
        )

    def dashboard(
        self,
        viewer: User,
        all_entries: Sequence[TimeEntry],
        today: str,
    ) -> DashboardView:
        """Build the dashboard for ``viewer``.

        Administrators get aggregates over everyone's entries and no listing.
        Everyone else sees only their own entries.
        """
        if viewer.is_admin:
            chart_entries = list(all_entries)
        else:
            chart_entries = [e for e in all_entries if e.user_id == viewer.id]

        return DashboardView(
            privacy_mode=viewer.is_admin,
            today_breakdown=self.today_breakdown(chart_entries, today),
            weekly_comparison=self.weekly_comparison(chart_entries),
            mood_distribution=self.mood_distribution(chart_entries),
            summary=self.summary(chart_entries),
            recent_activity=None if viewer.is_admin else recent_activity(chart_entries),
        )


def recent_activity(entries: Iterable[TimeEntry], limit: int = RECENT_LIMIT) -> list[TimeEntry]:
    """Newest entries first by ``(date, start time)``."""
    return sorted(entries, key=lambda e: e.sort_key, reverse=True)[:limit]


def today_breakdown(
    entries: Iterable[TimeEntry], activity_types: Iterable[ActivityType], today: str
) -> list[BreakdownRow]:
    return EntryAggregator(activity_types, ()).today_breakdown(entries, today)


def weekly_comparison(
    entries: Iterable[TimeEntry], activity_types: Iterable[ActivityType]
) -> list[ComparisonRow]:
    return EntryAggregator(activity_types, ()).weekly_comparison(entries)


def mood_distribution(entries: Iterable[TimeEntry], mood_options: Iterable[MoodOption]) -> list[MoodSlice]:
    return EntryAggregator((), mood_options).mood_distribution(entries)


def summary(entries: Sequence[TimeEntry], mood_options: Iterable[MoodOption]) -> Summary:
    return EntryAggregator((), mood_options).summary(entries)


def build_dashboard(
    viewer: User,
    entries: Sequence[TimeEntry],
    activity_types: Iterable[ActivityType],
    mood_options: Iterable[MoodOption],
    today: str,
) -> DashboardView:
    return EntryAggregator(activity_types, mood_options).dashboard(viewer, entries, today)
