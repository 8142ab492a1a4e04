"""
Time entry API routes
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from timejoy.core.aggregation import recent_activity
from timejoy.core.models import TimeEntry, User
from timejoy.core.state import add_entry, entries_for
from timejoy.core.store import StateStore
from timejoy.core.time_slots import default_start_time, next_slot, time_slots
from timejoy.utils import parse_date, today_iso

from ..dependencies import commit, current_user, get_store, member_user, write_lock

router = APIRouter()
logger = logging.getLogger(__name__)


class EntryRequest(BaseModel):
    """Form input for a new entry."""

    date: str
    startTime: str
    endTime: str
    workTypeId: str | None = None
    moodId: str
    comment: str = ""


class EntryResponse(BaseModel):
    id: str
    userId: str
    date: str
    startTime: str
    endTime: str
    durationMinutes: int
    workTypeId: str
    moodId: str
    comment: str = ""

    @classmethod
    def from_entry(cls, entry: TimeEntry) -> "EntryResponse":
        return cls(
            id=entry.id,
            userId=entry.user_id,
            date=entry.date,
            startTime=entry.start_time,
            endTime=entry.end_time,
            durationMinutes=entry.duration_minutes,
            workTypeId=entry.work_type_id,
            moodId=entry.mood_id,
            comment=entry.comment,
        )


class SlotsResponse(BaseModel):
    """Selectable times plus a suggested next interval."""

    slots: list[str]
    suggestedStart: str
    suggestedEnd: str | None = None


@router.get("/slots")
def get_slots(
    today: str | None = Query(None, description="YYYY-MM-DD, defaults to the local date"),
    user: User = Depends(current_user),
    store: StateStore = Depends(get_store),
) -> SlotsResponse:
    day = today or today_iso()
    if parse_date(day) is None:
        raise HTTPException(status_code=422, detail=f"Invalid date: {day}")
    start = default_start_time(store.load().entries, user.id, day)
    return SlotsResponse(slots=time_slots(), suggestedStart=start, suggestedEnd=next_slot(start))


@router.post("", status_code=201)
def create_entry(
    request: EntryRequest,
    user: User = Depends(current_user),
    store: StateStore = Depends(get_store),
) -> EntryResponse:
    """Validate and record an entry for the current profile."""
    if parse_date(request.date) is None:
        raise HTTPException(status_code=422, detail=f"Invalid date: {request.date}")

    with write_lock:
        state = store.load()
        try:
            new_state, result = add_entry(
                state,
                date=request.date,
                start_time=request.startTime,
                end_time=request.endTime,
                work_type_id=request.workTypeId,
                mood_id=request.moodId,
                comment=request.comment,
            )
        except PermissionError as e:
            raise HTTPException(status_code=401, detail=str(e))
        if not result.ok:
            raise HTTPException(status_code=400, detail={"kind": result.error.value, "message": result.message})
        commit(store, new_state)

    entry = new_state.entries[-1]
    logger.info("Recorded %s-%s on %s for %s", entry.start_time, entry.end_time, entry.date, user.id)
    return EntryResponse.from_entry(entry)


@router.get("/recent")
def get_recent(
    limit: int = Query(10, ge=1, le=100),
    user: User = Depends(member_user),
    store: StateStore = Depends(get_store),
) -> list[EntryResponse]:
    """The current profile's newest entries."""
    entries = entries_for(store.load(), user.id)
    return [EntryResponse.from_entry(e) for e in recent_activity(entries, limit=limit)]
