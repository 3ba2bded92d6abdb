"""Slot-backed transaction store for savingsflow."""

from __future__ import annotations

import json
import os
import threading
from datetime import datetime
from decimal import Decimal
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from pydantic import ValidationError

from ..core.models import Transaction, TransactionType, epoch_millis, utcnow
from ..logging_setup import get_logger
from .backends import JSONFileBackend, MemoryBackend, PersistenceBackend, SQLiteBackend

logger = get_logger(__name__)

STORAGE_KEY = "savings-app-transactions"
DEFAULT_DB_PATH = Path.home() / ".savingsflow" / "savingsflow.db"
DB_ENV_VAR = "SAVINGSFLOW_DB_PATH"
BACKEND_ENV_VAR = "SAVINGSFLOW_BACKEND"
BACKEND_CHOICES = ("sqlite", "json", "memory")

NumberLike = Union[Decimal, float, int, str]


class DeserializationError(ValueError):
    """Raised when a stored payload exists but is not a valid transaction list."""

    def __init__(self, key: str, reason: str) -> None:
        self.key = key
        self.reason = reason
        super().__init__(f"Stored transactions in slot {key!r} are corrupted: {reason}")


def _determine_db_path() -> Path:
    override = os.environ.get(DB_ENV_VAR)
    if override:
        return Path(override).expanduser().resolve()
    return DEFAULT_DB_PATH


def _determine_backend_name() -> str:
    name = (os.environ.get(BACKEND_ENV_VAR) or "sqlite").strip().lower()
    if name not in BACKEND_CHOICES:
        raise ValueError(
            f"Unsupported {BACKEND_ENV_VAR} value {name!r}; expected one of "
            + ", ".join(BACKEND_CHOICES)
        )
    return name


def create_backend(name: Optional[str] = None, db_path: Optional[Path] = None) -> PersistenceBackend:
    """Build the configured persistence backend."""
    name = name or _determine_backend_name()
    path = Path(db_path) if db_path is not None else _determine_db_path()
    if name == "memory":
        return MemoryBackend()
    if name == "json":
        return JSONFileBackend(path.parent)
    return SQLiteBackend(path)


def _format_timestamp(value: datetime) -> str:
    return value.isoformat(timespec="milliseconds") + "Z"


def _decimal_to_number(value: Decimal) -> Union[int, float]:
    if value == value.to_integral_value():
        return int(value)
    return float(value)


def _transaction_to_record(txn: Transaction) -> Dict[str, Any]:
    record: Dict[str, Any] = {
        "id": txn.id,
        "date": _format_timestamp(txn.date),
        "amount": _decimal_to_number(txn.amount),
        "type": txn.type,
    }
    if txn.description is not None:
        record["description"] = txn.description
    return record


class TransactionStore:
    """Durable home of the transaction list, kept in one backend slot.

    Every write replaces the whole payload. ``lock`` guards each
    read-modify-write and is re-entrant so callers can hold it across
    several store operations.
    """

    def __init__(self, backend: PersistenceBackend, key: str = STORAGE_KEY) -> None:
        self._backend = backend
        self._key = key
        self.lock = threading.RLock()

    @property
    def backend(self) -> PersistenceBackend:
        return self._backend

    @property
    def key(self) -> str:
        return self._key

    def list(self) -> List[Transaction]:
        """Return every stored transaction in storage order."""
        with self.lock:
            payload = self._backend.get(self._key)
        if payload is None:
            return []
        return self._decode(payload)

    def append(
        self,
        amount: NumberLike,
        type: TransactionType,
        description: Optional[str] = None,
        date: Optional[datetime] = None,
    ) -> Transaction:
        """Create a transaction, persist the updated list and return the record."""
        with self.lock:
            transactions = self.list()
            existing_ids = {txn.id for txn in transactions}
            candidate = epoch_millis(utcnow())
            while str(candidate) in existing_ids:
                candidate += 1
            transaction = Transaction(
                id=str(candidate),
                date=date if date is not None else utcnow(),
                amount=amount,
                type=type,
                description=description,
            )
            transactions.append(transaction)
            self.replace_all(transactions)
        logger.info(
            "Recorded %s transaction %s for %s", transaction.type, transaction.id, transaction.amount
        )
        return transaction

    def replace_all(self, transactions: Sequence[Transaction]) -> None:
        """Persist ``transactions`` as the complete collection."""
        payload = json.dumps([_transaction_to_record(txn) for txn in transactions], allow_nan=False)
        with self.lock:
            self._backend.set(self._key, payload)
        logger.debug("Persisted %d transaction(s) to slot %s", len(transactions), self._key)

    def clear(self) -> None:
        """Remove the stored payload. Safe to call when nothing is stored."""
        with self.lock:
            self._backend.delete(self._key)
        logger.info("Cleared stored transactions")

    def _decode(self, payload: str) -> List[Transaction]:
        try:
            records = json.loads(payload, parse_float=Decimal)
        except json.JSONDecodeError as exc:
            raise DeserializationError(self._key, f"invalid JSON ({exc})") from exc
        if not isinstance(records, list):
            raise DeserializationError(self._key, "payload is not a JSON array")

        transactions: List[Transaction] = []
        seen_ids = set()
        for index, record in enumerate(records):
            if not isinstance(record, dict):
                raise DeserializationError(self._key, f"element {index} is not an object")
            try:
                transaction = Transaction.model_validate(record)
            except ValidationError as exc:
                raise DeserializationError(self._key, f"element {index}: {exc}") from exc
            if transaction.id in seen_ids:
                raise DeserializationError(self._key, f"element {index} repeats id {transaction.id!r}")
            seen_ids.add(transaction.id)
            transactions.append(transaction)
        return transactions


@lru_cache(maxsize=1)
def get_store() -> TransactionStore:
    """Return a cached store bound to the configured backend."""
    return TransactionStore(create_backend())
