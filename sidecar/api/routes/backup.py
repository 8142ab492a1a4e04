"""
Backup API routes - export and import the whole state document
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException
from pydantic import BaseModel

from timejoy.core.models import User
from timejoy.core.state import import_document
from timejoy.core.store import StateStore

from ..dependencies import admin_user, commit, get_store, write_lock

router = APIRouter()
logger = logging.getLogger(__name__)


class ImportResponse(BaseModel):
    users: int
    entries: int
    workTypes: int
    moodOptions: int
    currentUserKept: bool


@router.get("/export")
def export_state(
    admin: User = Depends(admin_user),
    store: StateStore = Depends(get_store),
) -> dict[str, Any]:
    """Return the full document, ready to be saved as a backup file."""
    return store.load().to_dict()


@router.post("/import")
def import_state(
    payload: dict[str, Any] = Body(...),
    admin: User = Depends(admin_user),
    store: StateStore = Depends(get_store),
) -> ImportResponse:
    """Overwrite the stored document with ``payload``."""
    with write_lock:
        try:
            state = import_document(payload, current=admin)
        except ValueError as e:
            raise HTTPException(status_code=422, detail=str(e))
        commit(store, state)

    logger.info("Imported backup with %d entries", len(state.entries))
    return ImportResponse(
        users=len(state.users),
        entries=len(state.entries),
        workTypes=len(state.work_types),
        moodOptions=len(state.mood_options),
        currentUserKept=state.user is not None,
    )
