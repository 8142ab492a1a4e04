"""The application state document and its transitions.

Every transition takes an :class:`AppState` and returns a new one; nothing
here touches the disk. :mod:`timejoy.core.store` owns persistence.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field, replace

from .models import ActivityType, MoodOption, Role, TimeEntry, User
from .validation import EntryCandidate, TimeSlotValidator, ValidationResult

logger = logging.getLogger(__name__)

REQUIRED_IMPORT_KEYS = ("users", "entries", "workTypes")


def default_work_types() -> list[ActivityType]:
    return [
        ActivityType(id="1", label="Daily Project Work", color="blue"),
        ActivityType(id="2", label="Life & Family", color="green"),
        ActivityType(id="3", label="Long-Term Investment", color="purple"),
    ]


def default_mood_options() -> list[MoodOption]:
    return [
        MoodOption(id="m1", label="Happy", value=10, icon="smile", color="green"),
        MoodOption(id="m2", label="OK", value=5, icon="meh", color="yellow"),
        MoodOption(id="m3", label="Not so good", value=1, icon="frown", color="red"),
    ]


def default_users() -> list[User]:
    return [
        User(id="admin-default-id", username="Admin", email="admin@timejoy.com", role=Role.ADMIN),
    ]


@dataclass(frozen=True)
class AppState:
    """Whole-document state: current profile, profiles, catalogs and entries."""

    user: User | None = None
    users: list[User] = field(default_factory=default_users)
    work_types: list[ActivityType] = field(default_factory=default_work_types)
    mood_options: list[MoodOption] = field(default_factory=default_mood_options)
    entries: list[TimeEntry] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "user": self.user.to_dict() if self.user else None,
            "users": [u.to_dict() for u in self.users],
            "workTypes": [t.to_dict() for t in self.work_types],
            "moodOptions": [m.to_dict() for m in self.mood_options],
            "entries": [e.to_dict() for e in self.entries],
        }

    @classmethod
    def from_dict(cls, data: dict) -> AppState:
        users = [User.from_dict(u) for u in data.get("users") or []]
        moods = data.get("moodOptions")
        current = data.get("user")
        current_user = None
        if isinstance(current, dict) and current.get("id"):
            # Resolve against the catalog so a stale session copy never wins.
            current_user = next((u for u in users if u.id == str(current["id"])), None)
        return cls(
            user=current_user,
            users=users,
            work_types=[ActivityType.from_dict(t) for t in data.get("workTypes") or []],
            mood_options=(
                [MoodOption.from_dict(m) for m in moods] if moods is not None else default_mood_options()
            ),
            entries=[TimeEntry.from_dict(e) for e in data.get("entries") or []],
        )


def initial_state() -> AppState:
    return AppState()


def entries_for(state: AppState, user_id: str) -> list[TimeEntry]:
    return [e for e in state.entries if e.user_id == user_id]


def add_entry(
    state: AppState,
    date: str,
    start_time: str,
    end_time: str,
    work_type_id: str | None,
    mood_id: str,
    comment: str = "",
) -> tuple[AppState, ValidationResult]:
    """Validate and append an entry for the current profile.

    On a failed validation the original state is returned unchanged with the
    failing result.
    """
    if state.user is None:
        raise PermissionError("No profile selected.")

    candidate = EntryCandidate(
        date=date,
        start_time=start_time,
        end_time=end_time,
        work_type_id=work_type_id,
    )
    result = TimeSlotValidator(state.work_types).validate(candidate, entries_for(state, state.user.id))
    if not result.ok:
        logger.info("Rejected entry for %s on %s: %s", state.user.id, date, result.error.value)
        return state, result

    entry = TimeEntry.create(
        id=str(uuid.uuid4()),
        user_id=state.user.id,
        date=date,
        start_time=start_time,
        end_time=end_time,
        work_type_id=work_type_id,
        mood_id=mood_id,
        comment=comment.strip(),
    )
    return replace(state, entries=[*state.entries, entry]), result


def replace_work_types(state: AppState, work_types: list[ActivityType]) -> AppState:
    _require_admin(state)
    return replace(state, work_types=list(work_types))


def replace_mood_options(state: AppState, mood_options: list[MoodOption]) -> AppState:
    _require_admin(state)
    return replace(state, mood_options=list(mood_options))


def import_document(payload: object, current: User | None = None) -> AppState:
    """Build state from an exported document.

    Only the shape is checked: ``users``, ``entries`` and ``workTypes`` must
    be present and non-null. ``current`` stays signed in if the imported
    profiles still contain it.
    """
    if not isinstance(payload, dict):
        raise ValueError("Invalid backup file format.")
    missing = [key for key in REQUIRED_IMPORT_KEYS if payload.get(key) is None]
    if missing:
        raise ValueError(f"Invalid backup file format: missing {', '.join(missing)}.")

    try:
        imported = AppState.from_dict({**payload, "user": None})
    except (KeyError, TypeError, AttributeError) as exc:
        raise ValueError(f"Invalid backup file format: {exc}") from exc

    if current is not None:
        kept = next((u for u in imported.users if u.id == current.id), None)
        imported = replace(imported, user=kept)
    return imported


def _require_admin(state: AppState) -> None:
    if state.user is None or not state.user.is_admin:
        raise PermissionError("Administrator profile required.")
