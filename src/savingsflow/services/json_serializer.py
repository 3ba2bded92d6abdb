"""JSON serialization helpers for transactions and summaries."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Iterable, List

from ..core.models import Transaction
from .summary import BalancePoint, SavingsSummary


def serialize_decimal(value: Decimal) -> str:
    """Serialize a Decimal without exponent or trailing zeros."""
    normalized = value.normalize()
    if normalized == normalized.to_integral_value():
        normalized = normalized.quantize(Decimal("1"))
    return format(normalized, "f")


def serialize_transaction(txn: Transaction) -> Dict[str, Any]:
    return {
        "id": txn.id,
        "date": txn.date.isoformat(timespec="milliseconds") + "Z",
        "amount": serialize_decimal(txn.amount),
        "type": txn.type,
        "description": txn.description,
    }


def serialize_transactions(transactions: Iterable[Transaction]) -> List[Dict[str, Any]]:
    return [serialize_transaction(txn) for txn in transactions]


def serialize_summary(summary: SavingsSummary) -> Dict[str, Any]:
    return {
        "total_savings": serialize_decimal(summary.total_savings),
        "total_spend": serialize_decimal(summary.total_spend),
        "net_savings": serialize_decimal(summary.net_savings),
        "transaction_count": summary.transaction_count,
    }


def serialize_balance_point(point: BalancePoint) -> Dict[str, Any]:
    return {
        "date": point.date.date().isoformat(),
        "savings": serialize_decimal(point.savings),
        "spend": serialize_decimal(point.spend),
        "balance": serialize_decimal(point.balance),
    }
