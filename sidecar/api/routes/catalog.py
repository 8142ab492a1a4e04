"""
Catalog administration API routes (activity types and moods)
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from timejoy.core import catalog
from timejoy.core.models import ActivityType, MoodOption, User
from timejoy.core.state import replace_mood_options, replace_work_types
from timejoy.core.store import StateStore

from ..dependencies import admin_user, commit, get_store, write_lock

router = APIRouter()
logger = logging.getLogger(__name__)


class ActivityTypeResponse(BaseModel):
    id: str
    label: str
    color: str


class MoodOptionResponse(BaseModel):
    id: str
    label: str
    value: int
    icon: str
    color: str


class CatalogResponse(BaseModel):
    workTypes: list[ActivityTypeResponse]
    moodOptions: list[MoodOptionResponse]
    palette: list[str]


class AddRequest(BaseModel):
    label: str | None = None


class UpdateRequest(BaseModel):
    """Rename and/or recolor. ``cycleColor`` advances to the next palette color."""

    label: str | None = None
    color: str | None = None
    cycleColor: bool = False


def _catalog_response(work_types: list[ActivityType], moods: list[MoodOption]) -> CatalogResponse:
    return CatalogResponse(
        workTypes=[ActivityTypeResponse(**t.to_dict()) for t in work_types],
        moodOptions=[MoodOptionResponse(**m.to_dict()) for m in moods],
        palette=list(catalog.PALETTE),
    )


def _apply_update(records: list, record_id: str, request: UpdateRequest) -> list:
    try:
        if request.label is not None:
            records = catalog.rename(records, record_id, request.label)
        if request.color is not None:
            records = catalog.recolor(records, record_id, request.color)
        elif request.cycleColor:
            records = catalog.cycle_color(records, record_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Catalog entry '{record_id}' not found")
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return records


def _remove(records: list, record_id: str) -> list:
    try:
        return catalog.remove(records, record_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Catalog entry '{record_id}' not found")


@router.get("")
def get_catalog(store: StateStore = Depends(get_store)) -> CatalogResponse:
    state = store.load()
    return _catalog_response(state.work_types, state.mood_options)


@router.post("/work-types", status_code=201)
def add_work_type(
    request: AddRequest,
    admin: User = Depends(admin_user),
    store: StateStore = Depends(get_store),
) -> CatalogResponse:
    with write_lock:
        state = store.load()
        types = catalog.add_activity_type(state.work_types, label=request.label or "New Activity")
        state = commit(store, replace_work_types(state, types))
    return _catalog_response(state.work_types, state.mood_options)


@router.put("/work-types/{type_id}")
def update_work_type(
    type_id: str,
    request: UpdateRequest,
    admin: User = Depends(admin_user),
    store: StateStore = Depends(get_store),
) -> CatalogResponse:
    with write_lock:
        state = store.load()
        types = _apply_update(state.work_types, type_id, request)
        state = commit(store, replace_work_types(state, types))
    return _catalog_response(state.work_types, state.mood_options)


@router.delete("/work-types/{type_id}")
def delete_work_type(
    type_id: str,
    admin: User = Depends(admin_user),
    store: StateStore = Depends(get_store),
) -> CatalogResponse:
    """Remove an activity type. Entries keep the id and show as Unknown."""
    with write_lock:
        state = store.load()
        state = commit(store, replace_work_types(state, _remove(state.work_types, type_id)))
    logger.info("Removed activity type %s", type_id)
    return _catalog_response(state.work_types, state.mood_options)


@router.post("/moods", status_code=201)
def add_mood(
    request: AddRequest,
    admin: User = Depends(admin_user),
    store: StateStore = Depends(get_store),
) -> CatalogResponse:
    with write_lock:
        state = store.load()
        moods = catalog.add_mood_option(state.mood_options, label=request.label or "New Mood")
        state = commit(store, replace_mood_options(state, moods))
    return _catalog_response(state.work_types, state.mood_options)


@router.put("/moods/{mood_id}")
def update_mood(
    mood_id: str,
    request: UpdateRequest,
    admin: User = Depends(admin_user),
    store: StateStore = Depends(get_store),
) -> CatalogResponse:
    with write_lock:
        state = store.load()
        moods = _apply_update(state.mood_options, mood_id, request)
        state = commit(store, replace_mood_options(state, moods))
    return _catalog_response(state.work_types, state.mood_options)


@router.delete("/moods/{mood_id}")
def delete_mood(
    mood_id: str,
    admin: User = Depends(admin_user),
    store: StateStore = Depends(get_store),
) -> CatalogResponse:
    with write_lock:
        state = store.load()
        state = commit(store, replace_mood_options(state, _remove(state.mood_options, mood_id)))
    logger.info("Removed mood %s", mood_id)
    return _catalog_response(state.work_types, state.mood_options)
