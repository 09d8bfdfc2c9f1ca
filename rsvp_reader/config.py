"""Configuration constants, WPM bounds, and .env loading.

WHY: Centralizes all configurable values so they are easy to find,
update, and override. Reading-speed bounds, the preference key, file
locations, and server defaults are plain data, not buried in logic,
so the GUI, CLI, and HTTP API agree on them.

HOW: python-dotenv loads the .env file on import. Constants are defined
at module level. clamp_wpm() and interval_ms_for_wpm() are the only
places where a words-per-minute value is turned into something usable.

RULES:
- WPM is always clamped to [MIN_WPM, MAX_WPM] at the state-update boundary
- Out-of-range input is silently corrected, never rejected
- WPM_STEP is a UI step size only, not a core invariant
- All defaults can be overridden via environment variables
"""

from __future__ import annotations

import math
import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

# Load .env from the project root (where the script is run from)
load_dotenv()

# ---------------------------------------------------------------------------
# Reading speed
# ---------------------------------------------------------------------------

MIN_WPM = 50
MAX_WPM = 1200
WPM_STEP = 10

WPM_STORAGE_KEY = "rsvp-wpm"
"""Fixed key under which the WPM preference is persisted."""

MS_PER_MINUTE = 60_000


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


DEFAULT_WPM = min(MAX_WPM, max(MIN_WPM, _env_int("RSVP_DEFAULT_WPM", 300)))


def clamp_wpm(value: Any) -> int:
    """Coerce any input into a valid words-per-minute value.

    WHY: WPM arrives from spinboxes, CLI flags, JSON bodies, and the
    preference file. None of those sources may push the reader outside
    its supported range, and none of them should surface an error.

    HOW: Converts to float, rounds, then clamps to [MIN_WPM, MAX_WPM].

    RULES:
    - Values below MIN_WPM (including negatives) become MIN_WPM
    - Values above MAX_WPM (including infinity) become MAX_WPM
    - Non-numeric input and NaN fall back to DEFAULT_WPM
    - Numeric strings such as "450" are accepted
    """
    if isinstance(value, bool):
        return DEFAULT_WPM
    try:
        number = float(value)
    except (TypeError, ValueError):
        return DEFAULT_WPM
    if math.isnan(number):
        return DEFAULT_WPM
    if number <= MIN_WPM:
        return MIN_WPM
    if number >= MAX_WPM:
        return MAX_WPM
    return int(round(number))


def interval_ms_for_wpm(wpm: Any) -> float:
    """Milliseconds each word stays on screen at the given rate."""
    return MS_PER_MINUTE / clamp_wpm(wpm)


# ---------------------------------------------------------------------------
# Preference storage
# ---------------------------------------------------------------------------

PREFERENCES_PATH = Path(
    os.getenv("RSVP_PREFERENCES_PATH", str(Path.home() / ".rsvp_reader.json"))
).expanduser()
"""JSON file backing the key-value preference store."""

# ---------------------------------------------------------------------------
# Text sources and HTTP server
# ---------------------------------------------------------------------------

URL_FETCH_TIMEOUT_S = float(os.getenv("RSVP_URL_FETCH_TIMEOUT_S", "20"))
SERVER_HOST = os.getenv("RSVP_SERVER_HOST", "127.0.0.1")
SERVER_PORT = _env_int("RSVP_SERVER_PORT", 8000)

# ---------------------------------------------------------------------------
# Sample text shown in the editor and read by ``--demo``
# ---------------------------------------------------------------------------

SAMPLE_TEXT = (
    "Rapid Serial Visual Presentation (RSVP) is a reading technique where words "
    "are shown one at a time in the same position on the screen. Instead of "
    "moving your eyes across lines of text, the text comes to you. This reduces "
    "eye movement and allows you to focus entirely on recognition and "
    "comprehension.\n\n"
    "Many RSVP systems highlight a specific letter inside each word. This letter "
    "is often placed near the center of the word and is called the Optimal "
    "Recognition Point. By anchoring your attention to a consistent position, "
    "recognition becomes faster and more stable, especially at higher speeds.\n\n"
    "The speed of presentation is usually measured in words per minute. "
    "Beginners might start around two hundred to three hundred words per minute. "
    "With practice, readers often increase the speed significantly.\n\n"
    "RSVP works in multiple languages, including English and Finnish. As long "
    "as the system handles special characters correctly, such as ä, ö, and å, "
    "the experience remains smooth and readable.\n\n"
    "In practice, RSVP becomes a rhythm. You hold a key, the words flow forward, "
    "and your mind follows the narrative in a steady stream. When you release "
    "the key, the motion stops instantly, giving you full control over the pace."
)
