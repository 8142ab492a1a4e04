"""Tests for the state document and its transitions."""

import pytest

from timejoy.core.aggregation import recent_activity
from timejoy.core.models import TimeEntry
from timejoy.core.state import (
    AppState,
    add_entry,
    entries_for,
    import_document,
    initial_state,
    replace_work_types,
)
from timejoy.core.validation import ValidationErrorKind


def test_initial_state_defaults():
    state = initial_state()
    assert state.user is None
    assert [u.username for u in state.users] == ["Admin"]
    assert state.users[0].is_admin
    assert [t.label for t in state.work_types] == [
        "Daily Project Work",
        "Life & Family",
        "Long-Term Investment",
    ]
    assert [m.id for m in state.mood_options] == ["m1", "m2", "m3"]
    assert state.entries == []


def test_round_trip_uses_document_keys(alice):
    state = AppState(user=alice, users=[alice])
    state, _ = add_entry(state, "2024-01-01", "09:00", "10:00", "1", "m1", comment="notes")
    document = state.to_dict()
    assert set(document) == {"user", "users", "workTypes", "moodOptions", "entries"}
    assert document["entries"][0]["durationMinutes"] == 60
    assert document["entries"][0]["userId"] == alice.id
    assert AppState.from_dict(document) == state


def test_add_entry_appends_for_current_user(alice):
    state = AppState(user=alice, users=[alice])
    new_state, result = add_entry(state, "2024-01-01", "09:00", "10:30", "1", "m2", comment=" hi ")
    assert result.ok
    assert result.duration_minutes == 90
    assert state.entries == []
    entry = new_state.entries[0]
    assert entry.user_id == alice.id
    assert entry.duration_minutes == 90
    assert entry.comment == "hi"


def test_add_entry_stores_zero_padded_times(alice):
    state = AppState(user=alice, users=[alice])
    state, _ = add_entry(state, "2024-01-01", "9:00", "9:30", "1", "m1")
    state, _ = add_entry(state, "2024-01-01", "10:00", "10:30", "1", "m1")
    assert [(e.start_time, e.end_time) for e in state.entries] == [("09:00", "09:30"), ("10:00", "10:30")]
    assert [e.start_time for e in recent_activity(state.entries)] == ["10:00", "09:00"]


def test_add_entry_rejects_overlap_and_keeps_state(alice):
    state = AppState(user=alice, users=[alice])
    state, _ = add_entry(state, "2024-01-01", "09:00", "10:00", "1", "m1")
    same, result = add_entry(state, "2024-01-01", "09:30", "10:30", "1", "m1")
    assert result.error is ValidationErrorKind.OVERLAP_CONFLICT
    assert same is state


def test_add_entry_only_checks_own_entries(alice, admin):
    state = AppState(user=admin, users=[alice, admin])
    state, _ = add_entry(state, "2024-01-01", "09:00", "10:00", "1", "m1")
    state = AppState(user=alice, users=state.users, entries=state.entries)
    _, result = add_entry(state, "2024-01-01", "09:00", "10:00", "1", "m1")
    assert result.ok


def test_add_entry_rejects_deleted_work_type(alice):
    state = AppState(user=alice, users=[alice])
    _, result = add_entry(state, "2024-01-01", "09:00", "10:00", "gone", "m1")
    assert result.error is ValidationErrorKind.MISSING_WORK_TYPE


def test_add_entry_requires_a_profile():
    with pytest.raises(PermissionError):
        add_entry(initial_state(), "2024-01-01", "09:00", "10:00", "1", "m1")


def test_entries_for(alice, make_entry):
    state = AppState(entries=[make_entry(user_id=alice.id), make_entry(user_id="other")])
    assert [e.user_id for e in entries_for(state, alice.id)] == [alice.id]


def test_catalog_replacement_is_admin_only(alice, admin, activity_types):
    with pytest.raises(PermissionError):
        replace_work_types(AppState(user=alice), activity_types)
    updated = replace_work_types(AppState(user=admin), activity_types)
    assert [t.id for t in updated.work_types] == ["A", "B", "C"]


def test_stored_duration_is_rederived(caplog):
    entry = TimeEntry.from_dict(
        {
            "id": "e1",
            "userId": "u1",
            "date": "2024-01-01",
            "startTime": "09:00",
            "endTime": "10:00",
            "durationMinutes": 999,
            "workTypeId": "1",
            "moodId": "m1",
        }
    )
    assert entry.duration_minutes == 60
    assert "using derived value" in caplog.text


def test_stale_session_user_is_resolved_against_users(alice):
    document = AppState(users=[alice]).to_dict()
    document["user"] = {**alice.to_dict(), "username": "stale"}
    assert AppState.from_dict(document).user == alice
    document["user"] = {"id": "ghost", "username": "x", "email": "x", "role": "USER"}
    assert AppState.from_dict(document).user is None


@pytest.mark.parametrize("missing", ["users", "entries", "workTypes"])
def test_import_requires_core_keys(missing):
    payload = initial_state().to_dict()
    payload[missing] = None
    with pytest.raises(ValueError, match=missing):
        import_document(payload)


def test_import_rejects_non_objects():
    with pytest.raises(ValueError):
        import_document(["not", "a", "document"])


def test_import_keeps_current_user_only_if_present(alice, admin):
    payload = AppState(users=[alice, admin]).to_dict()
    del payload["moodOptions"]
    imported = import_document(payload, current=admin)
    assert imported.user == admin
    assert [m.id for m in imported.mood_options] == ["m1", "m2", "m3"]

    other = import_document(AppState(users=[alice]).to_dict(), current=admin)
    assert other.user is None
