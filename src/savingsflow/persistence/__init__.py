"""Persistence utilities for SavingsFlow."""

from .backends import JSONFileBackend, MemoryBackend, PersistenceBackend, SQLiteBackend
from .storage import (
    DeserializationError,
    TransactionStore,
    create_backend,
    get_store,
)

__all__ = [
    "DeserializationError",
    "JSONFileBackend",
    "MemoryBackend",
    "PersistenceBackend",
    "SQLiteBackend",
    "TransactionStore",
    "create_backend",
    "get_store",
]
