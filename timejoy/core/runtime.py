"""Where TimeJoy keeps its state, and other environment settings."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)

HOME_ENV = "TIMEJOY_HOME"
CLI_ENV = "TIMEJOY_GEMINI_CLI"
DEFAULT_CLI = "gemini"
STATE_FILENAME = "state.json"


def _home_candidates() -> list[Path]:
    candidates = []
    configured = os.environ.get(HOME_ENV, "").strip()
    if configured:
        candidates.append(Path(configured).expanduser())
    candidates.append(Path.home() / ".timejoy")
    candidates.append(Path(tempfile.gettempdir()) / "timejoy-runtime")
    return candidates


def _usable(directory: Path) -> bool:
    try:
        directory.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(dir=directory, prefix=".timejoy-probe-"):
            pass
    except OSError:
        return False
    return True


def resolve_runtime_home() -> Path:
    """First writable directory among $TIMEJOY_HOME, ~/.timejoy and the temp dir."""
    candidates = _home_candidates()
    for directory in candidates:
        if _usable(directory):
            return directory
        logger.warning("Runtime directory %s is not writable, trying next", directory)
    last = candidates[-1]
    last.mkdir(parents=True, exist_ok=True)
    return last


def runtime_dir(base_dir: Path | None = None) -> Path:
    """Return (and create) the directory holding the state document."""
    target = Path(base_dir) if base_dir is not None else resolve_runtime_home()
    target.mkdir(parents=True, exist_ok=True)
    return target


def state_path(base_dir: Path | None = None) -> Path:
    return runtime_dir(base_dir) / STATE_FILENAME


def reflection_cli() -> str:
    return os.environ.get(CLI_ENV, "").strip() or DEFAULT_CLI
