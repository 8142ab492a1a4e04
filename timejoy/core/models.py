"""Records stored in the TimeJoy state document."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from .time_slots import canonical_time, duration_minutes, parse_time

logger = logging.getLogger(__name__)

MOOD_ICONS = ("smile", "meh", "frown", "angry", "excited", "tired")


class Role(Enum):
    """Profile role."""

    USER = "USER"
    ADMIN = "ADMIN"


@dataclass(frozen=True)
class ActivityType:
    """Activity catalog record (the document calls these work types)."""

    id: str
    label: str
    color: str = "gray"

    def to_dict(self) -> dict:
        return {"id": self.id, "label": self.label, "color": self.color}

    @classmethod
    def from_dict(cls, data: dict) -> ActivityType:
        return cls(
            id=str(data["id"]),
            label=str(data.get("label", "")),
            color=str(data.get("color") or "gray"),
        )


@dataclass(frozen=True)
class MoodOption:
    """Mood catalog record. ``value`` is a 1-10 satisfaction score."""

    id: str
    label: str
    value: int = 5
    icon: str = "meh"
    color: str = "gray"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "label": self.label,
            "value": self.value,
            "icon": self.icon,
            "color": self.color,
        }

    @classmethod
    def from_dict(cls, data: dict) -> MoodOption:
        icon = str(data.get("icon") or "meh")
        if icon not in MOOD_ICONS:
            icon = "meh"
        try:
            value = int(data.get("value", 5))
        except (TypeError, ValueError):
            value = 5
        return cls(
            id=str(data["id"]),
            label=str(data.get("label", "")),
            value=value,
            icon=icon,
            color=str(data.get("color") or "gray"),
        )


@dataclass(frozen=True)
class User:
    """A local profile."""

    id: str
    username: str
    email: str
    role: Role = Role.USER

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "role": self.role.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> User:
        try:
            role = Role(data.get("role", Role.USER.value))
        except ValueError:
            role = Role.USER
        return cls(
            id=str(data["id"]),
            username=str(data.get("username", "")),
            email=str(data.get("email", "")),
            role=role,
        )


@dataclass(frozen=True)
class TimeEntry:
    """One logged activity.

    ``duration_minutes`` is always derived from the start and end times, so
    it cannot drift from them. Use :meth:`create` to build a new entry.
    """

    id: str
    user_id: str
    date: str
    start_time: str
    end_time: str
    duration_minutes: int
    work_type_id: str
    mood_id: str
    comment: str = ""

    @classmethod
    def create(
        cls,
        id: str,
        user_id: str,
        date: str,
        start_time: str,
        end_time: str,
        work_type_id: str,
        mood_id: str,
        comment: str = "",
    ) -> TimeEntry:
        """Build an entry with canonical ``HH:MM`` times and a derived duration."""
        start_time = canonical_time(start_time)
        end_time = canonical_time(end_time)
        return cls(
            id=id,
            user_id=user_id,
            date=date,
            start_time=start_time,
            end_time=end_time,
            duration_minutes=duration_minutes(start_time, end_time),
            work_type_id=work_type_id,
            mood_id=mood_id,
            comment=comment,
        )

    @property
    def sort_key(self) -> tuple[str, int]:
        """Orderable ``(date, start minute)`` timestamp."""
        return (self.date, parse_time(self.start_time) or 0)

    def to_dict(self) -> dict:
        payload = {
            "id": self.id,
            "userId": self.user_id,
            "date": self.date,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "durationMinutes": self.duration_minutes,
            "workTypeId": self.work_type_id,
            "moodId": self.mood_id,
        }
        if self.comment:
            payload["comment"] = self.comment
        return payload

    @classmethod
    def from_dict(cls, data: dict) -> TimeEntry:
        entry = cls.create(
            id=str(data["id"]),
            user_id=str(data.get("userId", "")),
            date=str(data.get("date", "")),
            start_time=str(data.get("startTime", "")),
            end_time=str(data.get("endTime", "")),
            work_type_id=str(data.get("workTypeId") or ""),
            mood_id=str(data.get("moodId") or ""),
            comment=str(data.get("comment") or ""),
        )
        stored = data.get("durationMinutes")
        if stored is not None and stored != entry.duration_minutes:
            logger.warning(
                "Entry %s stored durationMinutes=%s but %s-%s is %s minutes; using derived value",
                entry.id,
                stored,
                entry.start_time,
                entry.end_time,
                entry.duration_minutes,
            )
        return entry
