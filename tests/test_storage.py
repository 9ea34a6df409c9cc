"""Unit tests for the key-value storage backends."""

import sqlite3

from studyflow import config, storage as storage_module
from studyflow.storage import SQLiteStorage, MemoryStorage, get_storage


def test_sqlite_storage_creates_db(tmp_path):
    """Test database file creation."""
    db_path = tmp_path / "data" / "studyflow.db"
    SQLiteStorage(db_path=db_path)
    assert db_path.exists()


def test_sqlite_storage_roundtrip(tmp_path):
    """Test SQLite set and get."""
    store = SQLiteStorage(db_path=tmp_path / "studyflow.db")
    store.set("studyflow_sessions", [{"id": "a", "day": "monday"}])
    assert store.get("studyflow_sessions") == [{"id": "a", "day": "monday"}]


def test_sqlite_storage_overwrites(tmp_path):
    """Test overwriting a key."""
    store = SQLiteStorage(db_path=tmp_path / "studyflow.db")
    store.set("flag", False)
    store.set("flag", True)
    assert store.get("flag") is True


def test_sqlite_storage_lookup_miss(tmp_path):
    """Test reading a missing key."""
    store = SQLiteStorage(db_path=tmp_path / "studyflow.db")
    assert store.get("nonexistent") is None
    assert store.get("nonexistent", []) == []


def test_sqlite_storage_corrupt_value_returns_default(tmp_path):
    """Test reading a corrupt value."""
    db_path = tmp_path / "studyflow.db"
    store = SQLiteStorage(db_path=db_path)
    conn = sqlite3.connect(db_path)
    conn.execute(
        "INSERT INTO kv_store (key, value_json, timestamp) VALUES (?, ?, ?)",
        ("studyflow_sessions", "{broken", "2026-10-19T09:00:00")
    )
    conn.commit()
    conn.close()
    assert store.get("studyflow_sessions", []) == []


def test_sqlite_storage_shared_between_instances(tmp_path):
    """Test two instances on one file."""
    db_path = tmp_path / "studyflow.db"
    SQLiteStorage(db_path=db_path).set("key", {"a": 1})
    assert SQLiteStorage(db_path=db_path).get("key") == {"a": 1}


def test_sqlite_storage_delete(tmp_path):
    """Test deleting a key."""
    store = SQLiteStorage(db_path=tmp_path / "studyflow.db")
    store.set("key", 1)
    store.delete("key")
    assert store.get("key") is None


def test_memory_storage_copies_values():
    """Test MemoryStorage isolation."""
    store = MemoryStorage()
    value = [{"id": "a"}]
    store.set("key", value)
    value.append({"id": "b"})
    assert store.get("key") == [{"id": "a"}]


def test_get_storage_selects_backend(tmp_path, monkeypatch):
    """Test backend selection."""
    monkeypatch.setattr(config, "STORAGE_BACKEND", "memory")
    assert isinstance(get_storage(), MemoryStorage)

    monkeypatch.setattr(config, "STORAGE_BACKEND", "sqlite")
    backend = storage_module.get_storage(tmp_path / "x.db")
    assert isinstance(backend, SQLiteStorage)
    assert backend.db_path == tmp_path / "x.db"
