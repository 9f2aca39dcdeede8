"""Tests for the key/value backends and the saved-target store."""

import json
from datetime import datetime, timedelta, timezone

import pytest

from countclock.database.db import get_session
from countclock.database.models import StorageEntry
from countclock.exceptions import ConfigurationError, InvalidTargetError
from countclock.storage.backends import (
    DatabaseStore, JsonFileStore, MemoryStore, open_store,
)
from countclock.storage.targets import STORAGE_KEY, SavedTarget, SavedTargetStore
from countclock.timer.target import TargetCountdown


# ═══════════════════════════════════════════════════════════════════════════
#  BACKENDS
# ═══════════════════════════════════════════════════════════════════════════


class TestBackends:

    def test_memory_store(self):
        s = MemoryStore()
        assert s.get("k") is None
        s.set("k", "v")
        assert s.get("k") == "v"

    def test_json_file_store_round_trip(self, tmp_path):
        path = tmp_path / "nested" / "storage.json"
        JsonFileStore(path).set("k", "v")
        assert JsonFileStore(path).get("k") == "v"
        assert json.loads(path.read_text()) == {"k": "v"}

    def test_json_file_store_keeps_other_keys(self, tmp_path):
        s = JsonFileStore(tmp_path / "s.json")
        s.set("a", "1")
        s.set("b", "2")
        assert s.get("a") == "1"

    @pytest.mark.parametrize("content", ["{not json", "[1, 2]", '"text"'])
    def test_json_file_store_unreadable_is_empty(self, tmp_path, content):
        path = tmp_path / "s.json"
        path.write_text(content)
        assert JsonFileStore(path).get("k") is None

    def test_database_store(self):
        s = DatabaseStore()
        assert s.get("k") is None
        s.set("k", "v1")
        s.set("k", "v2")
        assert s.get("k") == "v2"
        with get_session() as db:
            assert db.query(StorageEntry).count() == 1

    def test_open_store_kinds(self, tmp_path):
        assert isinstance(open_store("memory"), MemoryStore)
        assert isinstance(open_store("database"), DatabaseStore)
        json_store = open_store("json", tmp_path / "x.json")
        assert isinstance(json_store, JsonFileStore)
        assert json_store.path == tmp_path / "x.json"

    def test_open_store_unknown(self):
        with pytest.raises(ConfigurationError):
            open_store("cloud")


# ═══════════════════════════════════════════════════════════════════════════
#  SAVED TARGETS
# ═══════════════════════════════════════════════════════════════════════════


class TestSavedTargetStore:

    def test_empty_store(self):
        store = SavedTargetStore(MemoryStore())
        assert len(store) == 0
        assert store.targets == []

    def test_save_load_round_trip(self):
        store = SavedTargetStore(MemoryStore())
        saved = store.save("Launch", "2026-12-31T23:59")
        loaded = store.load(saved.id)
        assert loaded.name == "Launch"
        assert loaded.date == "2026-12-31T23:59"
        assert loaded.target_time == datetime(2026, 12, 31, 23, 59)

    def test_save_datetime(self):
        store = SavedTargetStore(MemoryStore())
        when = datetime(2027, 1, 1, 9, 30)
        saved = store.save("Standup", when)
        assert store.load(saved.id).target_time == when

    def test_save_aware_datetime(self):
        store = SavedTargetStore(MemoryStore())
        when = datetime(2027, 1, 1, 9, 30, tzinfo=timezone(timedelta(hours=5)))
        saved = store.save("Standup", when)
        loaded = store.load(saved.id)
        assert loaded.date == "2027-01-01T09:30:00+05:00"
        assert loaded.target_time == when.astimezone().replace(tzinfo=None)

    def test_utc_date_loads_into_countdown(self, qapp):
        raw = json.dumps([{"id": 1, "name": "NYE", "date": "2026-12-31T23:59:00Z"}])
        store = SavedTargetStore(MemoryStore({STORAGE_KEY: raw}))
        target = store.load(1)
        assert target.target_time.tzinfo is None
        countdown = TargetCountdown(now=lambda: datetime(2026, 10, 17, 12, 0))
        countdown.set_target(target.date, target.name)
        assert countdown.has_target
        assert countdown.remaining > 0
        countdown.shutdown()

    def test_delete_then_load_is_none(self):
        store = SavedTargetStore(MemoryStore())
        saved = store.save("Launch", "2026-12-31T23:59")
        assert store.delete(saved.id) is True
        assert store.load(saved.id) is None
        assert saved.id not in store

    def test_delete_unknown(self):
        store = SavedTargetStore(MemoryStore())
        assert store.delete(123) is False

    def test_ids_are_unique(self):
        store = SavedTargetStore(MemoryStore())
        ids = {store.save(f"t{i}", "2026-12-31T23:59").id for i in range(20)}
        assert len(ids) == 20

    def test_persisted_format(self):
        backend = MemoryStore()
        store = SavedTargetStore(backend)
        saved = store.save("Launch", "2026-12-31T23:59")
        data = json.loads(backend.get(STORAGE_KEY))
        assert data == [{"id": saved.id, "name": "Launch", "date": "2026-12-31T23:59"}]

    def test_save_and_delete_rewrite_collection(self):
        backend = MemoryStore()
        store = SavedTargetStore(backend)
        a = store.save("A", "2026-01-01T00:00")
        b = store.save("B", "2026-01-02T00:00")
        store.delete(a.id)
        data = json.loads(backend.get(STORAGE_KEY))
        assert [d["id"] for d in data] == [b.id]

    def test_reopen_reads_collection(self):
        backend = MemoryStore()
        saved = SavedTargetStore(backend).save("Launch", "2026-12-31T23:59")
        reopened = SavedTargetStore(backend)
        assert reopened.load(saved.id) == saved

    def test_database_backed_round_trip(self):
        saved = SavedTargetStore(DatabaseStore()).save("Launch", "2026-12-31T23:59")
        assert SavedTargetStore(DatabaseStore()).load(saved.id) == saved

    @pytest.mark.parametrize("raw", ["{oops", '{"id": 1}', '"str"', "42"])
    def test_malformed_data_is_empty(self, raw):
        store = SavedTargetStore(MemoryStore({STORAGE_KEY: raw}))
        assert len(store) == 0

    def test_malformed_entries_dropped(self):
        raw = json.dumps([
            {"id": 1, "name": "ok", "date": "2026-01-01T00:00"},
            {"id": "2", "name": "bad id", "date": "2026-01-01T00:00"},
            {"id": 3, "name": "no date"},
            "junk",
            {"id": True, "name": "bool id", "date": "2026-01-01T00:00"},
        ])
        store = SavedTargetStore(MemoryStore({STORAGE_KEY: raw}))
        assert [t.id for t in store] == [1]

    def test_save_requires_name_and_date(self):
        store = SavedTargetStore(MemoryStore())
        with pytest.raises(InvalidTargetError):
            store.save("   ", "2026-01-01T00:00")
        with pytest.raises(InvalidTargetError):
            store.save("Launch", "")
        assert len(store) == 0

    def test_name_is_stripped(self):
        store = SavedTargetStore(MemoryStore())
        assert store.save("  Launch  ", "2026-01-01T00:00").name == "Launch"

    def test_targets_snapshot_is_a_copy(self):
        store = SavedTargetStore(MemoryStore())
        store.save("A", "2026-01-01T00:00")
        store.targets.clear()
        assert len(store) == 1

    def test_saved_target_from_dict(self):
        t = SavedTarget.from_dict({"id": 5, "name": "n", "date": "d"})
        assert t == SavedTarget(5, "n", "d")
        assert t.target_time is None
        assert t.to_dict() == {"id": 5, "name": "n", "date": "d"}
