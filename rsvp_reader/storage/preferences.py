"""Key-value preference stores and WPM persistence.

WHY: The reading speed should survive restarts, but a broken or full
preferences file must never stop anyone from reading. Storage problems
are logged and absorbed; the reader carries on with an in-memory value.

HOW: PreferenceStore is the port: ``get(key)`` / ``set(key, value)``
over JSON-serializable values. Two adapters implement it:
  MemoryPreferenceStore    dict in memory (tests, HTTP API default)
  JsonFilePreferenceStore  one JSON object file on disk
load_wpm()/save_wpm() apply the fallback and clamping policy on top,
and WpmPreference keeps the in-memory value the UI reads.

RULES:
- Stores raise their natural errors (OSError, ValueError, TypeError)
- load_wpm() returns DEFAULT_WPM when the value is absent or unparsable
- save_wpm() swallows write failures after logging a warning
- Values are always clamped to [MIN_WPM, MAX_WPM] before use or storage
- The WPM lives under WPM_STORAGE_KEY as a JSON integer
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional, Union

from rsvp_reader.config import DEFAULT_WPM, WPM_STORAGE_KEY, clamp_wpm

logger = logging.getLogger(__name__)


class PreferenceStore(ABC):
    """Abstract key-value store for JSON-serializable preference values."""

    @abstractmethod
    def get(self, key: str) -> Any:
        """Return the stored value, or None when the key is absent."""

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key``."""


class MemoryPreferenceStore(PreferenceStore):
    """In-memory store. Values are copied through JSON like a real store."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None) -> None:
        self._values: Dict[str, str] = {}
        for key, value in (initial or {}).items():
            self.set(key, value)

    def get(self, key: str) -> Any:
        raw = self._values.get(key)
        if raw is None:
            return None
        return json.loads(raw)

    def set(self, key: str, value: Any) -> None:
        self._values[key] = json.dumps(value)


class JsonFilePreferenceStore(PreferenceStore):
    """Store preferences as a single JSON object in ``path``.

    WHY: A plain JSON file in the home directory is the simplest durable
    store a desktop reader can have, and users can edit it by hand.

    HOW: Every get() re-reads the file; every set() reads, updates, and
    atomically replaces it via a temp file in the same directory.

    RULES:
    - A missing file reads as empty
    - get() on a file that is not a JSON object raises ValueError
    - set() on such a file logs a warning and rewrites it from scratch
    - Writes are atomic (os.replace) and serialized by a lock
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()

    def _read_all(self) -> Dict[str, Any]:
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        if not isinstance(data, dict):
            raise ValueError("Preferences file {} is not a JSON object".format(self.path))
        return data

    def get(self, key: str) -> Any:
        return self._read_all().get(key)

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            try:
                data = self._read_all()
            except ValueError as exc:
                logger.warning("Replacing unreadable preferences file: %s", exc)
                data = {}
            data[key] = value
            content = json.dumps(data, indent=2, ensure_ascii=False)
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=str(self.path.parent), prefix=".prefs-", suffix=".json"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(content)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise


def load_wpm(store: PreferenceStore, default: int = DEFAULT_WPM) -> int:
    """Read the persisted WPM, falling back to ``default`` on any problem."""
    try:
        value = store.get(WPM_STORAGE_KEY)
    except (OSError, ValueError) as exc:
        logger.warning("Could not read saved reading speed: %s", exc)
        return clamp_wpm(default)
    if value is None or isinstance(value, bool) or not isinstance(value, (int, float)):
        return clamp_wpm(default)
    return clamp_wpm(value)


def save_wpm(store: PreferenceStore, wpm: Any) -> int:
    """Clamp and persist ``wpm``; returns the clamped value even if saving fails."""
    clamped = clamp_wpm(wpm)
    try:
        store.set(WPM_STORAGE_KEY, clamped)
    except (OSError, ValueError, TypeError) as exc:
        logger.warning("Could not save reading speed: %s", exc)
    return clamped


class WpmPreference:
    """The current reading speed, backed by a store when the store works.

    The in-memory value always reflects the last set(), whether or not
    the store accepted it.
    """

    def __init__(self, store: PreferenceStore, default: int = DEFAULT_WPM) -> None:
        self._store = store
        self.value = load_wpm(store, default)

    def set(self, wpm: Any) -> int:
        self.value = save_wpm(self._store, wpm)
        return self.value
