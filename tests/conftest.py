"""Pytest configuration and shared fixtures."""

import pytest
from pathlib import Path
import tempfile
import shutil

from timejoy.core.models import ActivityType, MoodOption, Role, TimeEntry, User


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    path = Path(tempfile.mkdtemp())
    yield path
    shutil.rmtree(path, ignore_errors=True)


@pytest.fixture
def activity_types():
    return [
        ActivityType(id="A", label="Deep Work", color="blue"),
        ActivityType(id="B", label="Family", color="green"),
        ActivityType(id="C", label="Learning", color="purple"),
    ]


@pytest.fixture
def mood_options():
    return [
        MoodOption(id="m1", label="Happy", value=10, icon="smile", color="green"),
        MoodOption(id="m2", label="OK", value=5, icon="meh", color="yellow"),
        MoodOption(id="m3", label="Not so good", value=1, icon="frown", color="red"),
    ]


@pytest.fixture
def alice():
    return User(id="u-alice", username="alice", email="alice@example.com")


@pytest.fixture
def admin():
    return User(id="u-admin", username="Admin", email="admin@example.com", role=Role.ADMIN)


@pytest.fixture
def make_entry():
    """Build entries with sensible defaults."""
    counter = {"n": 0}

    def _make(
        start="09:00",
        end="10:00",
        date="2024-01-01",
        user_id="u-alice",
        work_type_id="A",
        mood_id="m1",
        comment="",
    ):
        counter["n"] += 1
        return TimeEntry.create(
            id=f"e{counter['n']}",
            user_id=user_id,
            date=date,
            start_time=start,
            end_time=end,
            work_type_id=work_type_id,
            mood_id=mood_id,
            comment=comment,
        )

    return _make
