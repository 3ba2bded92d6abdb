"""Tests for totals and running balance aggregation."""

from datetime import datetime
from decimal import Decimal

from savingsflow.core.models import Transaction
from savingsflow.services.json_serializer import (
    serialize_balance_point,
    serialize_decimal,
    serialize_summary,
    serialize_transaction,
)
from savingsflow.services.summary import running_balance, summarize


def _make_transaction(txn_id: str, day: int, amount: str, txn_type: str) -> Transaction:
    return Transaction(
        id=txn_id,
        date=datetime(2024, 1, day),
        amount=Decimal(amount),
        type=txn_type,
    )


def test_summarize_totals():
    transactions = [
        _make_transaction("1", 1, "100.50", "savings"),
        _make_transaction("2", 2, "25.25", "spend"),
        _make_transaction("3", 3, "10", "savings"),
    ]

    summary = summarize(transactions)

    assert summary.total_savings == Decimal("110.50")
    assert summary.total_spend == Decimal("25.25")
    assert summary.net_savings == Decimal("85.25")
    assert summary.transaction_count == 3


def test_summarize_empty():
    summary = summarize([])

    assert summary.total_savings == Decimal("0")
    assert summary.net_savings == Decimal("0")
    assert summary.transaction_count == 0


def test_running_balance_sorts_by_date():
    transactions = [
        _make_transaction("late", 9, "5", "spend"),
        _make_transaction("early", 1, "20", "savings"),
        _make_transaction("mid", 4, "30", "spend"),
    ]

    points = running_balance(transactions)

    assert [point.date.day for point in points] == [1, 4, 9]
    assert [point.balance for point in points] == [Decimal("20"), Decimal("-10"), Decimal("-15")]
    assert points[0].savings == Decimal("20")
    assert points[0].spend == Decimal("0")
    assert points[1].spend == Decimal("30")


def test_serialize_decimal_is_plain():
    assert serialize_decimal(Decimal("100.50")) == "100.5"
    assert serialize_decimal(Decimal("100")) == "100"
    assert serialize_decimal(Decimal("1E+3")) == "1000"
    assert serialize_decimal(Decimal("0.00")) == "0"


def test_serialize_summary_and_points():
    transactions = [_make_transaction("1", 1, "10", "savings"), _make_transaction("2", 2, "2.5", "spend")]

    assert serialize_summary(summarize(transactions)) == {
        "total_savings": "10",
        "total_spend": "2.5",
        "net_savings": "7.5",
        "transaction_count": 2,
    }
    assert serialize_balance_point(running_balance(transactions)[1]) == {
        "date": "2024-01-02",
        "savings": "0",
        "spend": "2.5",
        "balance": "7.5",
    }


def test_serialize_transaction():
    txn = _make_transaction("1", 15, "100.50", "savings")

    assert serialize_transaction(txn) == {
        "id": "1",
        "date": "2024-01-15T00:00:00.000Z",
        "amount": "100.5",
        "type": "savings",
        "description": None,
    }
