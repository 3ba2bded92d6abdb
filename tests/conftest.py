"""Pytest configuration and fixtures."""

import pytest

from savingsflow.persistence import storage as storage_module
from savingsflow.persistence.backends import MemoryBackend
from savingsflow.persistence.storage import TransactionStore


@pytest.fixture(autouse=True)
def isolated_persistence(tmp_path, monkeypatch):
    """Point the default store at a per-test SQLite database and reset caches."""

    monkeypatch.setenv(storage_module.DB_ENV_VAR, str(tmp_path / "savingsflow.db"))
    monkeypatch.delenv(storage_module.BACKEND_ENV_VAR, raising=False)
    storage_module.get_store.cache_clear()
    yield
    storage_module.get_store.cache_clear()


@pytest.fixture
def memory_store() -> TransactionStore:
    """Store backed by an in-memory slot."""
    return TransactionStore(MemoryBackend())
