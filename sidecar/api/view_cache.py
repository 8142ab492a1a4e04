"""Short-lived cache of rendered dashboards, keyed by profile and day.

Every write bumps a generation counter; a view computed under an older
generation is dropped instead of stored.
"""

import threading
import time
from typing import Any

DEFAULT_TTL = 5  # seconds

_lock = threading.Lock()
_views: dict[tuple[str, str], tuple[float, Any]] = {}
_generation = 0


def generation() -> int:
    with _lock:
        return _generation


def get_view(user_id: str, day: str) -> Any | None:
    """Return the cached dashboard for ``user_id`` on ``day`` if still fresh."""
    key = (user_id, day)
    with _lock:
        cached = _views.get(key)
        if cached is None:
            return None
        expires_at, view = cached
        if time.monotonic() > expires_at:
            del _views[key]
            return None
        return view


def put_view(user_id: str, day: str, view: Any, built_at: int, ttl: float = DEFAULT_TTL) -> bool:
    """Store ``view`` unless the state changed since generation ``built_at``."""
    with _lock:
        if built_at != _generation:
            return False
        _views[(user_id, day)] = (time.monotonic() + ttl, view)
        return True


def invalidate() -> None:
    """Forget every cached view and start a new generation."""
    global _generation
    with _lock:
        _views.clear()
        _generation += 1
