"""Shared utilities for TimeJoy."""

from .datetime_utils import parse_date, today_iso


# Lazy import keeps watchdog out of plain core usage
def __getattr__(name):
    if name == "StateFileWatcher":
        from . import file_watcher
        return file_watcher.StateFileWatcher
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

__all__ = [
    "StateFileWatcher",
    "parse_date",
    "today_iso",
]
