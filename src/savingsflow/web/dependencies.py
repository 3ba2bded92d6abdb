"""Common dependency providers for the web application."""

from __future__ import annotations

from ..persistence import TransactionStore
from ..persistence import get_store as _get_default_store


def get_store() -> TransactionStore:
    """
    FastAPI dependency that yields the transaction store.

    Tests can override this dependency to supply an in-memory store.
    """
    return _get_default_store()
