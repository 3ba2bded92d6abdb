"""Tests for the Transaction model and timestamp helpers."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from pydantic import ValidationError

from savingsflow.core.models import (
    Transaction,
    epoch_millis,
    is_storable_amount,
    normalize_description,
    to_naive_utc,
)


def _make_transaction(**overrides) -> Transaction:
    values = {
        "id": "1705276800000",
        "date": datetime(2024, 1, 15, 9, 30),
        "amount": Decimal("100.50"),
        "type": "savings",
        "description": "Monthly deposit",
    }
    values.update(overrides)
    return Transaction(**values)


def test_transaction_accepts_valid_values():
    txn = _make_transaction()

    assert txn.amount == Decimal("100.50")
    assert txn.type == "savings"
    assert txn.description == "Monthly deposit"


@pytest.mark.parametrize("description", ["", "   ", "\t\n", None])
def test_blank_description_becomes_none(description):
    assert _make_transaction(description=description).description is None


def test_description_is_trimmed():
    assert _make_transaction(description="  rent  ").description == "rent"


@pytest.mark.parametrize("txn_type", ["transfer", "Savings", ""])
def test_type_must_be_savings_or_spend(txn_type):
    with pytest.raises(ValidationError):
        _make_transaction(type=txn_type)


@pytest.mark.parametrize("amount", [Decimal("NaN"), Decimal("Infinity"), Decimal("-1")])
def test_amount_must_be_finite_and_non_negative(amount):
    with pytest.raises(ValidationError):
        _make_transaction(amount=amount)


def test_aware_dates_are_stored_as_naive_utc():
    aware = datetime(2024, 1, 15, 12, 0, tzinfo=timezone(timedelta(hours=2)))

    txn = _make_transaction(date=aware)

    assert txn.date == datetime(2024, 1, 15, 10, 0)
    assert txn.date.tzinfo is None


def test_signed_amount():
    assert _make_transaction(type="savings").signed_amount == Decimal("100.50")
    assert _make_transaction(type="spend").signed_amount == Decimal("-100.50")


def test_epoch_millis_treats_naive_as_utc():
    assert epoch_millis(datetime(2024, 1, 15)) == 1705276800000
    assert epoch_millis(datetime(1970, 1, 1, 0, 0, 1, 500000)) == 1500
    assert epoch_millis(datetime(2024, 1, 15, tzinfo=timezone.utc)) == 1705276800000


def test_to_naive_utc_leaves_naive_values_alone():
    value = datetime(2024, 1, 15, 8, 0)
    assert to_naive_utc(value) is value


def test_normalize_description():
    assert normalize_description(None) is None
    assert normalize_description("  ") is None
    assert normalize_description(" note ") == "note"


def test_dates_are_truncated_to_milliseconds():
    txn = _make_transaction(date=datetime(2024, 1, 15, 9, 30, 0, 123456))
    assert txn.date == datetime(2024, 1, 15, 9, 30, 0, 123000)


@pytest.mark.parametrize(
    "amount",
    [Decimal("12345678901234567.89"), Decimal("1" + "0" * 400 + ".5"), Decimal("1E-400")],
)
def test_amount_must_survive_storage(amount):
    with pytest.raises(ValidationError):
        _make_transaction(amount=amount)


@pytest.mark.parametrize(
    "amount, expected",
    [
        (Decimal("100.50"), True),
        (Decimal("0.1"), True),
        (Decimal("12345678901234567"), True),
        (Decimal("1" + "0" * 400), True),
        (Decimal("12345678901234567.89"), False),
        (Decimal("1" + "0" * 400 + ".5"), False),
        (Decimal("Infinity"), False),
        (Decimal("NaN"), False),
    ],
)
def test_is_storable_amount(amount, expected):
    assert is_storable_amount(amount) is expected
