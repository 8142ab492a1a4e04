"""Tests for dashboard aggregation."""

from timejoy.core.aggregation import (
    EntryAggregator,
    build_dashboard,
    mood_distribution,
    recent_activity,
    round_hours,
    summary,
    today_breakdown,
    weekly_comparison,
)
from timejoy.core.models import TimeEntry

TODAY = "2024-01-01"


def test_today_breakdown_has_one_row_per_activity(make_entry, activity_types):
    entries = [
        make_entry("09:00", "10:00", work_type_id="A"),
        make_entry("10:00", "10:30", work_type_id="A"),
        make_entry("11:00", "12:30", work_type_id="B"),
    ]
    rows = today_breakdown(entries, activity_types, TODAY)
    assert [(r.activity_label, r.hours) for r in rows] == [
        ("Deep Work", 1.5),
        ("Family", 1.5),
        ("Learning", 0.0),
    ]
    assert [r.color for r in rows] == ["blue", "green", "purple"]


def test_today_breakdown_ignores_other_days(make_entry, activity_types):
    entries = [
        make_entry("09:00", "10:00", work_type_id="A"),
        make_entry("09:00", "12:00", work_type_id="A", date="2023-12-31"),
    ]
    rows = today_breakdown(entries, activity_types, TODAY)
    assert rows[0].hours == 1.0


def test_today_breakdown_skips_deleted_activity(make_entry, activity_types):
    entries = [make_entry("09:00", "10:00", work_type_id="gone")]
    rows = today_breakdown(entries, activity_types, TODAY)
    assert len(rows) == 3
    assert all(r.hours == 0.0 for r in rows)


def test_weekly_comparison_uses_whole_collection(make_entry, activity_types):
    entries = [
        make_entry("09:00", "11:00", work_type_id="A"),
        make_entry("09:00", "10:00", work_type_id="A", date="2023-12-28"),
        make_entry("09:00", "09:30", work_type_id="C"),
    ]
    rows = weekly_comparison(entries, activity_types)
    assert [(r.activity_label, r.current_hours, r.previous_hours) for r in rows] == [
        ("Deep Work", 3.0, 2.4),
        ("Family", 0.0, 0.0),
        ("Learning", 0.5, 0.4),
    ]


def test_mood_distribution_groups_and_falls_back(make_entry, mood_options):
    entries = [
        make_entry("09:00", "10:00", mood_id="m2"),
        make_entry("10:00", "10:30", mood_id="m1"),
        make_entry("11:00", "12:00", mood_id="m2"),
        make_entry("13:00", "13:30", mood_id="deleted"),
    ]
    slices = mood_distribution(entries, mood_options)
    assert [(s.mood_label, s.total_minutes, s.color) for s in slices] == [
        ("OK", 120, "yellow"),
        ("Happy", 30, "green"),
        ("Unknown", 30, "gray"),
    ]


def test_mood_distribution_has_no_empty_rows(make_entry, mood_options):
    assert mood_distribution([], mood_options) == []

    empty = TimeEntry.from_dict(
        {
            "id": "zero",
            "userId": "u-alice",
            "date": TODAY,
            "startTime": "11:00",
            "endTime": "11:00",
            "durationMinutes": 0,
            "workTypeId": "A",
            "moodId": "m3",
        }
    )
    assert empty.duration_minutes == 0
    slices = mood_distribution([empty, make_entry("09:00", "10:00", mood_id="m1")], mood_options)
    assert [(s.mood_label, s.total_minutes) for s in slices] == [("Happy", 60)]


def test_summary_counts_happy_time_and_users(make_entry, mood_options):
    entries = [
        make_entry("09:00", "10:00", mood_id="m1", user_id="u1"),
        make_entry("10:00", "11:30", mood_id="m3", user_id="u2"),
        make_entry("12:00", "12:30", mood_id="m1", user_id="u1"),
        make_entry("13:00", "14:00", mood_id="unknown", user_id="u3"),
    ]
    result = summary(entries, mood_options)
    assert result.total_hours == 4.0
    assert result.happy_hours == 1.5
    assert result.active_user_count == 3


def test_round_hours_rounds_half_away_from_zero():
    assert round_hours(3) == 0.1  # 0.05 h
    assert round_hours(9) == 0.2  # 0.15 h
    assert round_hours(0) == 0.0
    assert round_hours(100) == 1.7


def test_recent_activity_newest_first_and_limited(make_entry):
    entries = [make_entry(f"{h:02d}:00", f"{h:02d}:30") for h in range(8, 20)]
    entries.append(make_entry("07:00", "07:30", date="2024-01-02"))
    recent = recent_activity(entries)
    assert len(recent) == 10
    assert recent[0].date == "2024-01-02"
    assert recent[1].start_time == "19:00"
    assert recent[-1].start_time == "11:00"


def test_recent_activity_orders_by_clock_time_not_text():
    raw = [
        TimeEntry(
            id=f"r{i}", user_id="u-alice", date=TODAY, start_time=start, end_time=end,
            duration_minutes=30, work_type_id="A", mood_id="m1",
        )
        for i, (start, end) in enumerate([("9:00", "9:30"), ("10:00", "10:30")])
    ]
    assert [e.id for e in recent_activity(raw)] == ["r1", "r0"]


def test_dashboard_for_member_only_uses_own_entries(make_entry, alice, activity_types, mood_options):
    entries = [
        make_entry("09:00", "10:00", user_id=alice.id, comment="mine"),
        make_entry("09:00", "12:00", user_id="u-bob", comment="bob's"),
    ]
    view = build_dashboard(alice, entries, activity_types, mood_options, TODAY)
    assert not view.privacy_mode
    assert view.summary.total_hours == 1.0
    assert view.summary.active_user_count == 1
    assert [e.comment for e in view.recent_activity] == ["mine"]


def test_dashboard_for_admin_aggregates_everyone_without_rows(make_entry, admin, activity_types, mood_options):
    entries = [
        make_entry("09:00", "10:00", user_id="u1"),
        make_entry("09:00", "10:00", user_id="u2", work_type_id="B"),
        make_entry("10:00", "11:00", user_id="u3", mood_id="m2"),
    ]
    view = build_dashboard(admin, entries, activity_types, mood_options, TODAY)
    assert view.privacy_mode
    assert view.summary.active_user_count == 3
    assert view.summary.total_hours == 3.0
    assert view.recent_activity is None
    assert view.to_dict()["recentActivity"] is None
    assert [r.hours for r in view.today_breakdown] == [2.0, 1.0, 0.0]


def test_aggregation_is_repeatable(make_entry, alice, activity_types, mood_options):
    entries = [
        make_entry("09:00", "10:00", mood_id="m1"),
        make_entry("10:00", "12:00", mood_id="m2", work_type_id="B"),
    ]
    aggregator = EntryAggregator(activity_types, mood_options)
    first = aggregator.dashboard(alice, entries, TODAY)
    second = aggregator.dashboard(alice, entries, TODAY)
    assert first == second
    assert first.to_dict() == second.to_dict()
