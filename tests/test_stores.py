"""Tests for the key-value storage backends."""

import pytest

from training.db.stores import MemoryStore, SqliteStore, create_store


@pytest.fixture(params=["memory", "sqlite"])
def store(request, tmp_path):
    if request.param == "memory":
        return MemoryStore()
    return SqliteStore(tmp_path / "db" / "training.db")


class TestKeyValueStore:
    """Behaviour shared by every backend."""

    def test_get_missing(self, store):
        assert store.get("users", "1") is None

    def test_put_then_get(self, store):
        store.put("users", "1", {"name": "Ana"})
        assert store.get("users", "1") == {"name": "Ana"}

    def test_put_replaces(self, store):
        store.put("users", "1", {"name": "Ana"})
        store.put("users", "1", {"name": "Bea"})
        assert store.get("users", "1") == {"name": "Bea"}

    def test_insert_refuses_taken_key(self, store):
        assert store.insert("users", "1", {"name": "Ana"}) is True
        assert store.insert("users", "1", {"name": "Bea"}) is False
        assert store.get("users", "1") == {"name": "Ana"}

    def test_namespaces_are_separate(self, store):
        store.put("users", "1", {"kind": "user"})
        store.put("progress", "1", {"kind": "progress"})
        assert store.get("users", "1") == {"kind": "user"}
        assert store.count("users") == 1
        assert store.count("progress") == 1

    def test_values_and_count(self, store):
        store.put("users", "1", {"n": 1})
        store.put("users", "2", {"n": 2})
        assert sorted(v["n"] for v in store.values("users")) == [1, 2]
        assert store.count("users") == 2
        assert store.count("other") == 0

    def test_reads_are_copies(self, store):
        store.put("users", "1", {"tags": ["a"]})
        value = store.get("users", "1")
        value["tags"].append("b")
        assert store.get("users", "1") == {"tags": ["a"]}


class TestCreateStore:
    def test_memory(self):
        assert isinstance(create_store("memory"), MemoryStore)

    def test_sqlite_creates_file(self, tmp_path):
        path = tmp_path / "nested" / "training.db"
        store = create_store("sqlite", path)
        assert isinstance(store, SqliteStore)
        assert path.exists()

    def test_unknown_backend(self):
        with pytest.raises(ValueError, match="redis"):
            create_store("redis")
