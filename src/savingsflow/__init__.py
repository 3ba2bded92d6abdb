"""
SavingsFlow - personal savings and spend tracker.

Records savings and spend transactions in local storage and exchanges them
with other tools through a simple CSV format.
"""

__version__ = "0.1.0"

from .core.csv_codec import ImportResult, serialize_transactions
from .core.models import Transaction
from .persistence.storage import DeserializationError, TransactionStore, get_store
from .services.transactions import (
    clear_all_transactions,
    export_csv,
    import_csv,
    list_transactions,
    record_transaction,
)

__all__ = [
    "DeserializationError",
    "ImportResult",
    "Transaction",
    "TransactionStore",
    "clear_all_transactions",
    "export_csv",
    "get_store",
    "import_csv",
    "list_transactions",
    "record_transaction",
    "serialize_transactions",
]
