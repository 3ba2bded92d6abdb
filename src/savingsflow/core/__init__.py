"""Core data models and CSV interchange."""

from .csv_codec import ImportResult, import_csv, parse_transactions, serialize_transactions
from .models import Transaction

__all__ = [
    "ImportResult",
    "Transaction",
    "import_csv",
    "parse_transactions",
    "serialize_transactions",
]
