"""Totals and running-balance aggregation for stored transactions."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Iterable, List

from ..core.models import Transaction
from .transactions import sort_by_date

ZERO = Decimal("0")


@dataclass(frozen=True)
class SavingsSummary:
    """Aggregate totals across a set of transactions."""

    total_savings: Decimal
    total_spend: Decimal
    transaction_count: int

    @property
    def net_savings(self) -> Decimal:
        return self.total_savings - self.total_spend


@dataclass(frozen=True)
class BalancePoint:
    """Running balance right after one transaction, in date order."""

    date: datetime
    savings: Decimal
    spend: Decimal
    balance: Decimal


def summarize(transactions: Iterable[Transaction]) -> SavingsSummary:
    total_savings = ZERO
    total_spend = ZERO
    count = 0
    for txn in transactions:
        count += 1
        if txn.type == "savings":
            total_savings += txn.amount
        else:
            total_spend += txn.amount
    return SavingsSummary(total_savings=total_savings, total_spend=total_spend, transaction_count=count)


def running_balance(transactions: Iterable[Transaction]) -> List[BalancePoint]:
    """One point per transaction, sorted by date, carrying the net balance so far."""
    points: List[BalancePoint] = []
    balance = ZERO
    for txn in sort_by_date(list(transactions)):
        balance += txn.signed_amount
        points.append(
            BalancePoint(
                date=txn.date,
                savings=txn.amount if txn.type == "savings" else ZERO,
                spend=txn.amount if txn.type == "spend" else ZERO,
                balance=balance,
            )
        )
    return points
