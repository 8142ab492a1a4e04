"""File-backed persistence for the state document."""

from __future__ import annotations

import fcntl
import json
import logging
from pathlib import Path

from .runtime import state_path
from .state import AppState, import_document, initial_state

logger = logging.getLogger(__name__)


class StateStore:
    """Load and save the whole state document as one JSON file."""

    def __init__(self, base_dir: Path | None = None):
        self.state_file = state_path(base_dir)

    def load(self) -> AppState:
        """Read the document, falling back to the default state."""
        raw = self._load_raw()
        if raw is None:
            return initial_state()
        try:
            return AppState.from_dict(raw)
        except (KeyError, TypeError, AttributeError) as e:
            logger.warning("Malformed state document %s: %s", self.state_file, e)
            return initial_state()

    def save(self, state: AppState) -> None:
        """Write the document under an exclusive lock."""
        payload = json.dumps(state.to_dict(), indent=2)
        with open(self.state_file, "a+") as f:
            fcntl.flock(f.fileno(), fcntl.LOCK_EX)
            try:
                f.seek(0)
                f.truncate()
                f.write(payload)
            finally:
                fcntl.flock(f.fileno(), fcntl.LOCK_UN)

    def export_to(self, path: Path) -> Path:
        """Write a backup of the current document to ``path``."""
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(self.load().to_dict(), indent=2))
        return path

    def import_from(self, path: Path) -> AppState:
        """Replace the stored document with a backup file.

        The current profile stays selected if it exists in the backup.
        """
        try:
            payload = json.loads(path.read_text())
        except json.JSONDecodeError as e:
            raise ValueError(f"Error parsing file: {e}") from e
        state = import_document(payload, current=self.load().user)
        self.save(state)
        logger.info("Imported %d entries from %s", len(state.entries), path)
        return state

    def _load_raw(self) -> dict | None:
        if not self.state_file.exists():
            return None
        try:
            with open(self.state_file) as f:
                fcntl.flock(f.fileno(), fcntl.LOCK_SH)
                try:
                    content = f.read()
                finally:
                    fcntl.flock(f.fileno(), fcntl.LOCK_UN)
        except OSError as e:
            logger.warning("Failed to read state document: %s", e)
            return None
        if not content.strip():
            return None
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            logger.warning("Failed to parse state document: %s", e)
            return None
        return data if isinstance(data, dict) else None
