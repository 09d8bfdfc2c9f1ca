"""Tests for preference stores and WPM persistence.

WHY: A lost or corrupted preference must never block reading, and a
saved speed must come back exactly as clamped.

HOW: Uses MemoryPreferenceStore for policy tests and JsonFilePreferenceStore
on tmp_path for disk behaviour. Failing stores are small subclasses that
raise on purpose.

RULES:
- No test touches the real home directory
"""

import json

import pytest

from rsvp_reader.config import DEFAULT_WPM, MAX_WPM, MIN_WPM, WPM_STORAGE_KEY
from rsvp_reader.storage.preferences import (
    JsonFilePreferenceStore,
    MemoryPreferenceStore,
    PreferenceStore,
    WpmPreference,
    load_wpm,
    save_wpm,
)


class FailingStore(PreferenceStore):
    """Store whose reads and writes always fail."""

    def get(self, key):
        raise OSError("disk unavailable")

    def set(self, key, value):
        raise OSError("disk unavailable")


class TestMemoryStore:

    def test_absent_key_is_none(self, memory_store):
        assert memory_store.get("missing") is None

    def test_set_then_get(self, memory_store):
        memory_store.set("k", {"a": [1, 2]})
        assert memory_store.get("k") == {"a": [1, 2]}

    def test_values_are_copies(self, memory_store):
        value = [1, 2]
        memory_store.set("k", value)
        value.append(3)
        assert memory_store.get("k") == [1, 2]

    def test_initial_values(self):
        store = MemoryPreferenceStore({WPM_STORAGE_KEY: 450})
        assert store.get(WPM_STORAGE_KEY) == 450

    def test_unserializable_value_raises(self, memory_store):
        with pytest.raises(TypeError):
            memory_store.set("k", object())


class TestJsonFileStore:

    def test_missing_file_reads_empty(self, tmp_path):
        store = JsonFilePreferenceStore(tmp_path / "prefs.json")
        assert store.get(WPM_STORAGE_KEY) is None

    def test_set_writes_json_object(self, tmp_path):
        path = tmp_path / "nested" / "prefs.json"
        store = JsonFilePreferenceStore(path)
        store.set(WPM_STORAGE_KEY, 420)
        assert json.loads(path.read_text(encoding="utf-8")) == {WPM_STORAGE_KEY: 420}

    def test_set_keeps_other_keys(self, tmp_path):
        path = tmp_path / "prefs.json"
        path.write_text(json.dumps({"theme": "dark"}), encoding="utf-8")
        store = JsonFilePreferenceStore(path)
        store.set(WPM_STORAGE_KEY, 500)
        assert json.loads(path.read_text(encoding="utf-8")) == {
            "theme": "dark",
            WPM_STORAGE_KEY: 500,
        }

    def test_no_temp_files_left(self, tmp_path):
        store = JsonFilePreferenceStore(tmp_path / "prefs.json")
        store.set("a", 1)
        store.set("b", 2)
        assert [p.name for p in tmp_path.iterdir()] == ["prefs.json"]

    def test_non_object_file_raises(self, tmp_path):
        path = tmp_path / "prefs.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(ValueError):
            JsonFilePreferenceStore(path).get(WPM_STORAGE_KEY)

    def test_corrupt_file_raises(self, tmp_path):
        path = tmp_path / "prefs.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ValueError):
            JsonFilePreferenceStore(path).get(WPM_STORAGE_KEY)

    @pytest.mark.parametrize("content", ["{not json", "[1, 2]", "\"just a string\""])
    def test_set_repairs_unreadable_file(self, tmp_path, content):
        path = tmp_path / "prefs.json"
        path.write_text(content, encoding="utf-8")
        store = JsonFilePreferenceStore(path)
        store.set(WPM_STORAGE_KEY, 450)
        assert json.loads(path.read_text(encoding="utf-8")) == {WPM_STORAGE_KEY: 450}
        assert store.get(WPM_STORAGE_KEY) == 450


class TestLoadWpm:
    """load_wpm fallback and clamping policy."""

    def test_absent_value_gives_default(self, memory_store):
        assert load_wpm(memory_store) == DEFAULT_WPM

    def test_stored_value_returned(self, memory_store):
        memory_store.set(WPM_STORAGE_KEY, 480)
        assert load_wpm(memory_store) == 480

    @pytest.mark.parametrize("stored, expected", [(10, MIN_WPM), (5000, MAX_WPM), (333.6, 334)])
    def test_stored_value_clamped(self, memory_store, stored, expected):
        memory_store.set(WPM_STORAGE_KEY, stored)
        assert load_wpm(memory_store) == expected

    @pytest.mark.parametrize("stored", ["fast", "450", True, [300], {"wpm": 300}])
    def test_non_numeric_value_gives_default(self, memory_store, stored):
        memory_store.set(WPM_STORAGE_KEY, stored)
        assert load_wpm(memory_store) == DEFAULT_WPM

    def test_corrupt_file_gives_default(self, tmp_path):
        path = tmp_path / "prefs.json"
        path.write_text("{oops", encoding="utf-8")
        assert load_wpm(JsonFilePreferenceStore(path)) == DEFAULT_WPM

    def test_failing_store_gives_default(self):
        assert load_wpm(FailingStore()) == DEFAULT_WPM

    def test_explicit_default(self, memory_store):
        assert load_wpm(memory_store, default=250) == 250


class TestSaveWpm:
    """save_wpm clamps and never raises on storage failure."""

    def test_saves_clamped_integer(self, memory_store):
        assert save_wpm(memory_store, 2000) == MAX_WPM
        assert memory_store.get(WPM_STORAGE_KEY) == MAX_WPM

    def test_failing_store_swallowed(self):
        assert save_wpm(FailingStore(), 30) == MIN_WPM

    def test_unwritable_path_swallowed(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("x", encoding="utf-8")
        store = JsonFilePreferenceStore(blocker / "prefs.json")
        assert save_wpm(store, 400) == 400

    def test_save_after_corrupt_file_is_remembered(self, tmp_path):
        path = tmp_path / "prefs.json"
        path.write_text("{not json", encoding="utf-8")
        store = JsonFilePreferenceStore(path)
        assert load_wpm(store) == DEFAULT_WPM
        assert save_wpm(store, 450) == 450
        assert load_wpm(store) == 450

    def test_round_trip_through_file(self, tmp_path):
        path = tmp_path / "prefs.json"
        save_wpm(JsonFilePreferenceStore(path), 640)
        assert load_wpm(JsonFilePreferenceStore(path)) == 640


class TestWpmPreference:

    def test_loads_on_construction(self, memory_store):
        memory_store.set(WPM_STORAGE_KEY, 700)
        assert WpmPreference(memory_store).value == 700

    def test_set_updates_value_and_store(self, memory_store):
        pref = WpmPreference(memory_store)
        assert pref.set(35) == MIN_WPM
        assert pref.value == MIN_WPM
        assert memory_store.get(WPM_STORAGE_KEY) == MIN_WPM

    def test_value_survives_failing_store(self):
        pref = WpmPreference(FailingStore())
        assert pref.value == DEFAULT_WPM
        pref.set(900)
        assert pref.value == 900
