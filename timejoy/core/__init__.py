"""Core business logic for TimeJoy."""

from .aggregation import (
    BreakdownRow,
    ComparisonRow,
    DashboardView,
    EntryAggregator,
    MoodSlice,
    Summary,
    build_dashboard,
    recent_activity,
)
from .catalog import Catalog, CatalogLabel
from .models import ActivityType, MoodOption, Role, TimeEntry, User
from .notifications import render_weekly_report, send_weekly_report
from .profiles import register_profile, sign_out, switch_profile, update_profile
from .reflection import build_prompt, reflect
from .state import AppState, add_entry, entries_for, import_document, initial_state
from .store import StateStore
from .time_slots import default_start_time, next_slot, parse_time, time_slots
from .validation import (
    EntryCandidate,
    TimeSlotValidator,
    ValidationErrorKind,
    ValidationResult,
    validate,
)

__all__ = [
    "ActivityType",
    "MoodOption",
    "Role",
    "TimeEntry",
    "User",
    "Catalog",
    "CatalogLabel",
    "parse_time",
    "time_slots",
    "next_slot",
    "default_start_time",
    "EntryCandidate",
    "TimeSlotValidator",
    "ValidationErrorKind",
    "ValidationResult",
    "validate",
    "EntryAggregator",
    "BreakdownRow",
    "ComparisonRow",
    "MoodSlice",
    "Summary",
    "DashboardView",
    "build_dashboard",
    "recent_activity",
    "AppState",
    "initial_state",
    "add_entry",
    "entries_for",
    "import_document",
    "register_profile",
    "switch_profile",
    "sign_out",
    "update_profile",
    "StateStore",
    "build_prompt",
    "reflect",
    "render_weekly_report",
    "send_weekly_report",
]
