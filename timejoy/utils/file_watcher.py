"""Notice when the state document is rewritten by another process."""

import logging
import threading
from collections.abc import Callable
from pathlib import Path

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

logger = logging.getLogger(__name__)


class _StateFileHandler(FileSystemEventHandler):
    """Coalesces bursts of events on one file into a single callback."""

    def __init__(self, target: Path, on_change: Callable[[Path], None], debounce_ms: int):
        super().__init__()
        self.target = target
        self.on_change = on_change
        self.debounce_ms = debounce_ms
        self._timer: threading.Timer | None = None
        self._lock = threading.Lock()

    def touches_target(self, event: FileSystemEvent) -> bool:
        if event.is_directory:
            return False
        paths = [event.src_path, getattr(event, "dest_path", "")]
        return any(p and Path(p).resolve() == self.target for p in paths)

    def on_any_event(self, event: FileSystemEvent) -> None:
        if event.event_type in ("opened", "closed", "closed_no_write"):
            return
        if not self.touches_target(event):
            return
        with self._lock:
            if self._timer:
                self._timer.cancel()
            self._timer = threading.Timer(self.debounce_ms / 1000.0, self.fire)
            self._timer.daemon = True
            self._timer.start()

    def fire(self) -> None:
        with self._lock:
            self._timer = None
        try:
            self.on_change(self.target)
        except Exception:
            logger.exception("State change callback failed for %s", self.target)

    def cancel(self) -> None:
        with self._lock:
            if self._timer:
                self._timer.cancel()
                self._timer = None


class StateFileWatcher:
    """Calls ``on_change`` once per burst of writes to ``state_file``.

    Usage:
        watcher = StateFileWatcher(store.state_file, on_change=lambda p: reload())
        watcher.start()
        # ... later
        watcher.stop()
    """

    def __init__(self, state_file: Path, on_change: Callable[[Path], None], debounce_ms: int = 250):
        self.state_file = Path(state_file).resolve()
        self.handler = _StateFileHandler(self.state_file, on_change, debounce_ms)
        self._observer: Observer | None = None

    def start(self) -> None:
        if self._observer is not None:
            return
        self.state_file.parent.mkdir(parents=True, exist_ok=True)
        self._observer = Observer()
        self._observer.schedule(self.handler, str(self.state_file.parent), recursive=False)
        self._observer.start()

    def stop(self) -> None:
        if self._observer is None:
            return
        self.handler.cancel()
        self._observer.stop()
        self._observer.join(timeout=5.0)
        self._observer = None

    def is_running(self) -> bool:
        return self._observer is not None

    def __enter__(self) -> "StateFileWatcher":
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.stop()
