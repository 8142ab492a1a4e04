"""
Profile switch API routes
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from timejoy.core import profiles
from timejoy.core.models import User
from timejoy.core.store import StateStore

from ..dependencies import commit, get_store, write_lock

router = APIRouter()
logger = logging.getLogger(__name__)


class UserResponse(BaseModel):
    id: str
    username: str
    email: str
    role: str

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(id=user.id, username=user.username, email=user.email, role=user.role.value)


class SessionResponse(BaseModel):
    """Currently selected profile, if any."""

    user: UserResponse | None = None


class ProfileRequest(BaseModel):
    username: str
    email: str


class ProfileUpdateRequest(BaseModel):
    username: str | None = None
    email: str | None = None


def _session(user: User | None) -> SessionResponse:
    return SessionResponse(user=UserResponse.from_user(user) if user else None)


@router.get("")
def get_session(store: StateStore = Depends(get_store)) -> SessionResponse:
    return _session(store.load().user)


@router.post("/register", status_code=201)
def register(request: ProfileRequest, store: StateStore = Depends(get_store)) -> SessionResponse:
    with write_lock:
        try:
            state = profiles.register_profile(store.load(), request.username, request.email)
        except ValueError as e:
            raise HTTPException(status_code=409, detail=str(e))
        commit(store, state)
    return _session(state.user)


@router.post("/switch")
def switch(request: ProfileRequest, store: StateStore = Depends(get_store)) -> SessionResponse:
    with write_lock:
        try:
            state = profiles.switch_profile(store.load(), request.username, request.email)
        except LookupError as e:
            raise HTTPException(status_code=404, detail=str(e))
        except ValueError as e:
            raise HTTPException(status_code=409, detail=str(e))
        commit(store, state)
    return _session(state.user)


@router.post("/sign-out")
def sign_out(store: StateStore = Depends(get_store)) -> SessionResponse:
    with write_lock:
        state = commit(store, profiles.sign_out(store.load()))
    return _session(state.user)


@router.put("/profile")
def update_profile(request: ProfileUpdateRequest, store: StateStore = Depends(get_store)) -> SessionResponse:
    with write_lock:
        try:
            state = profiles.update_profile(store.load(), username=request.username, email=request.email)
        except PermissionError as e:
            raise HTTPException(status_code=401, detail=str(e))
        except ValueError as e:
            raise HTTPException(status_code=409, detail=str(e))
        commit(store, state)
    return _session(state.user)
