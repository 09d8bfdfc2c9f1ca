"""Preference persistence behind a small key-value port.

WHY: The only thing the reader remembers between sessions is the reading
speed. Hiding storage behind get/set keeps the GUI, CLI, and HTTP API
independent of where that value lives, and lets tests use memory.
"""

from rsvp_reader.storage.preferences import (
    JsonFilePreferenceStore,
    MemoryPreferenceStore,
    PreferenceStore,
    WpmPreference,
    load_wpm,
    save_wpm,
)

__all__ = [
    "JsonFilePreferenceStore",
    "MemoryPreferenceStore",
    "PreferenceStore",
    "WpmPreference",
    "load_wpm",
    "save_wpm",
]
