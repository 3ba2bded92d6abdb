"""Tests for the key-value persistence backends."""

import sqlite3

import pytest

from savingsflow.persistence.backends import JSONFileBackend, MemoryBackend, SQLiteBackend


@pytest.fixture(params=["memory", "json", "sqlite"])
def backend(request, tmp_path):
    if request.param == "memory":
        return MemoryBackend()
    if request.param == "json":
        return JSONFileBackend(tmp_path / "slots")
    return SQLiteBackend(tmp_path / "nested" / "slots.db")


def test_missing_slot_reads_as_none(backend):
    assert backend.get("transactions") is None


def test_set_then_get_returns_value(backend):
    backend.set("transactions", "[1, 2]")
    assert backend.get("transactions") == "[1, 2]"


def test_set_overwrites_existing_value(backend):
    backend.set("transactions", "old")
    backend.set("transactions", "new")
    assert backend.get("transactions") == "new"


def test_delete_is_idempotent(backend):
    backend.set("transactions", "[]")
    backend.delete("transactions")
    backend.delete("transactions")
    assert backend.get("transactions") is None


def test_slots_are_independent(backend):
    backend.set("a", "1")
    backend.set("b", "2")
    backend.delete("a")
    assert backend.get("b") == "2"


def test_json_backend_writes_one_file_per_slot(tmp_path):
    backend = JSONFileBackend(tmp_path)
    backend.set("savings-app-transactions", "[]")

    slot_file = tmp_path / "savings-app-transactions.json"
    assert slot_file.read_text(encoding="utf-8") == "[]"
    assert not list(tmp_path.glob("*.tmp"))


def test_sqlite_backend_creates_slots_table(tmp_path):
    db_path = tmp_path / "savingsflow.db"
    backend = SQLiteBackend(db_path)
    backend.set("savings-app-transactions", "[]")

    with sqlite3.connect(db_path) as conn:
        rows = conn.execute("SELECT key, value, updated_at FROM slots").fetchall()

    assert len(rows) == 1
    assert rows[0][0] == "savings-app-transactions"
    assert rows[0][1] == "[]"
    assert rows[0][2].endswith("Z")


def test_sqlite_backend_survives_reopen(tmp_path):
    db_path = tmp_path / "savingsflow.db"
    SQLiteBackend(db_path).set("slot", "value")

    assert SQLiteBackend(db_path).get("slot") == "value"
