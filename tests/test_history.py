"""Unit tests for HistoryStore

These tests validate:
- Entries are kept most-recent-first and never mutated
- Individual delete and bulk clear
- JSON persistence round trip (in memory and on disk)
- Corrupt persisted history is discarded wholesale
"""

import json

import pytest
from pydantic import ValidationError

from chartgen.history import HistoryStore
from chartgen.models.chart import ChartConfig, ChartKind


def make_config(title: str) -> ChartConfig:
    return ChartConfig(title=title, chart_kind=ChartKind.DIAGRAM, diagram_source="graph TD\nA-->B")


@pytest.fixture
def store():
    history = HistoryStore()
    history.add("first prompt", make_config("First"))
    history.add("second prompt", make_config("Second"), image="data:image/png;base64,AAAA")
    return history


class TestHistoryOperations:
    """Test add, get, delete and clear"""

    def test_most_recent_first(self, store):
        assert [e.prompt for e in store] == ["second prompt", "first prompt"]

    def test_unique_ids(self, store):
        ids = [e.id for e in store]
        assert len(set(ids)) == 2

    def test_get(self, store):
        entry = store.entries[1]
        assert store.get(entry.id) is entry
        assert store.get("missing") is None

    def test_delete(self, store):
        entry = store.entries[0]
        assert store.delete(entry.id) is True
        assert [e.prompt for e in store] == ["first prompt"]
        assert store.delete(entry.id) is False

    def test_clear(self, store):
        store.clear()
        assert len(store) == 0

    def test_entries_are_frozen(self, store):
        with pytest.raises(ValidationError):
            store.entries[0].prompt = "changed"


class TestHistoryPersistence:
    """Test JSON serialization and file persistence"""

    def test_json_round_trip(self, store):
        restored = HistoryStore.from_json(store.to_json())
        assert restored.entries == store.entries

    def test_canonical_keys(self, store):
        data = json.loads(store.to_json())
        assert set(data[0]) == {"id", "createdAt", "prompt", "config", "image"}
        assert data[0]["config"]["chartKind"] == "diagram"
        assert "image" not in data[1]

    def test_unparseable_history_discarded(self):
        assert len(HistoryStore.from_json("{not json")) == 0

    def test_partially_invalid_history_discarded_wholesale(self, store):
        data = json.loads(store.to_json())
        data[1]["config"]["chartKind"] = "bar"
        restored = HistoryStore.from_json(json.dumps(data))
        assert len(restored) == 0

    def test_save_and_load(self, store, tmp_path):
        path = tmp_path / "nested" / "history.json"
        store.path = path
        store.save()

        loaded = HistoryStore(path)
        loaded.load()
        assert loaded.entries == store.entries

    def test_load_missing_file(self, tmp_path):
        history = HistoryStore(tmp_path / "absent.json")
        history.load()
        assert len(history) == 0

    def test_load_corrupt_file(self, tmp_path):
        path = tmp_path / "history.json"
        path.write_text("[{\"id\": 1", encoding="utf-8")
        history = HistoryStore(path)
        history.load()
        assert len(history) == 0
