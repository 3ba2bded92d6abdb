"""Entry points the presentation layer calls, bound to the default store."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Sequence

from ..core import csv_codec
from ..core.csv_codec import ImportResult
from ..core.models import Transaction, TransactionType, utcnow
from ..persistence.storage import NumberLike, get_store


def sort_by_date(transactions: Sequence[Transaction]) -> List[Transaction]:
    """Stable ascending sort by transaction date."""
    return sorted(transactions, key=lambda txn: txn.date)


def list_transactions() -> List[Transaction]:
    """Return stored transactions in storage order."""
    return get_store().list()


def record_transaction(
    amount: NumberLike,
    type: TransactionType,
    description: Optional[str] = None,
    date: Optional[datetime] = None,
) -> Transaction:
    """Append one transaction to the default store."""
    return get_store().append(amount, type, description=description, date=date)


def clear_all_transactions() -> None:
    """Delete every stored transaction."""
    get_store().clear()


def export_csv(transactions: Optional[Sequence[Transaction]] = None) -> str:
    """Serialize ``transactions``, or the stored list sorted by date when omitted."""
    if transactions is None:
        transactions = sort_by_date(get_store().list())
    return csv_codec.serialize_transactions(transactions)


def import_csv(text: str) -> ImportResult:
    """Import CSV text into the default store."""
    return csv_codec.import_csv(text, get_store())


def export_filename() -> str:
    """Default download name for an export, e.g. ``savings-data-2024-01-31.csv``."""
    return f"savings-data-{utcnow():%Y-%m-%d}.csv"
