"""Coach-style reflection over a user's entries via the Gemini CLI."""

from __future__ import annotations

import logging
import subprocess
import threading
import time
from collections.abc import Iterable, Sequence

from .catalog import Catalog
from .models import ActivityType, MoodOption, TimeEntry
from .runtime import reflection_cli

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 120
POLL_INTERVAL_SECONDS = 0.2

NO_ENTRIES_MESSAGE = "No entries found for analysis. Log some time to get insights!"
UNAVAILABLE_MESSAGE = "Sorry, I couldn't connect to the reflection engine right now."
EMPTY_MESSAGE = "Could not generate insights."
CANCELLED_MESSAGE = "Reflection cancelled."

PROMPT_TEMPLATE = """You are a compassionate productivity coach named "TimeJoy Coach".
Analyze the following time logs for the user.

Data:
{data}

Your goal is to help the user align their time with their happiness.
Provide a concise 3-bullet point reflection:
1. Where they found the most joy.
2. Where they might be overworking or feeling less positive.
3. A gentle suggestion for next week.

Keep the tone encouraging and simple.
"""


def build_prompt(
    entries: Iterable[TimeEntry],
    activity_types: Iterable[ActivityType],
    mood_options: Iterable[MoodOption],
) -> str:
    types = Catalog(activity_types)
    moods = Catalog(mood_options)
    lines = [
        f'- {e.date}: {e.duration_minutes} mins on "{types.resolve(e.work_type_id).label}" '
        f'feeling "{moods.resolve(e.mood_id).label}". Comment: {e.comment or "N/A"}'
        for e in entries
    ]
    return PROMPT_TEMPLATE.format(data="\n".join(lines))


def reflect(
    entries: Sequence[TimeEntry],
    activity_types: Iterable[ActivityType],
    mood_options: Iterable[MoodOption],
    cli_path: str | None = None,
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    cancel_event: threading.Event | None = None,
) -> str:
    """Return a short reflection on ``entries``.

    Failures never raise: a missing CLI, a timeout, a non-zero exit or a
    cancellation all come back as a readable message.
    """
    if not entries:
        return NO_ENTRIES_MESSAGE

    prompt = build_prompt(entries, activity_types, mood_options)
    command = [cli_path or reflection_cli(), "-p", prompt]

    try:
        proc = subprocess.Popen(
            command,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
        )
    except FileNotFoundError:
        logger.warning("Reflection CLI not found at '%s'", command[0])
        return UNAVAILABLE_MESSAGE
    except OSError as e:
        logger.warning("Failed to start reflection CLI: %s", e)
        return UNAVAILABLE_MESSAGE

    deadline = time.monotonic() + timeout_seconds
    while True:
        if cancel_event is not None and cancel_event.is_set():
            _terminate(proc)
            return CANCELLED_MESSAGE
        if time.monotonic() >= deadline:
            _terminate(proc)
            logger.warning("Reflection CLI timed out after %ss", timeout_seconds)
            return UNAVAILABLE_MESSAGE
        try:
            stdout, stderr = proc.communicate(timeout=POLL_INTERVAL_SECONDS)
            break
        except subprocess.TimeoutExpired:
            continue

    if proc.returncode != 0:
        logger.warning("Reflection CLI exited with %s: %s", proc.returncode, (stderr or "").strip()[:200])
        return UNAVAILABLE_MESSAGE

    text = (stdout or "").strip()
    return text or EMPTY_MESSAGE


def _terminate(proc: subprocess.Popen) -> None:
    proc.kill()
    try:
        proc.communicate(timeout=5)
    except subprocess.TimeoutExpired:
        pass
