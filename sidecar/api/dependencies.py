"""Shared state access for route handlers."""

import threading

from fastapi import Depends, HTTPException

from timejoy.core.models import User
from timejoy.core.state import AppState
from timejoy.core.store import StateStore

from . import view_cache

_store: StateStore | None = None
_store_lock = threading.Lock()

# Serializes load-modify-save cycles within this process.
write_lock = threading.RLock()


def get_store() -> StateStore:
    """Return the process-wide store rooted at the runtime home."""
    global _store
    with _store_lock:
        if _store is None:
            _store = StateStore()
        return _store


def commit(store: StateStore, state: AppState) -> AppState:
    """Persist ``state`` and drop cached views."""
    store.save(state)
    view_cache.invalidate()
    return state


def current_user(store: StateStore = Depends(get_store)) -> User:
    user = store.load().user
    if user is None:
        raise HTTPException(status_code=401, detail="No profile selected")
    return user


def admin_user(user: User = Depends(current_user)) -> User:
    if not user.is_admin:
        raise HTTPException(status_code=403, detail="Administrator profile required")
    return user


def member_user(user: User = Depends(current_user)) -> User:
    """A non-admin profile; privacy mode hides personal views from admins."""
    if user.is_admin:
        raise HTTPException(status_code=403, detail="Not available in privacy mode")
    return user
