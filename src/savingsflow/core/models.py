"""
Core data model for savings tracking.

This module defines the Pydantic model for a single savings or spend
transaction along with the timestamp helpers used to derive identifiers.
"""

import math
from datetime import datetime, timezone
from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

TransactionType = Literal["savings", "spend"]
TRANSACTION_TYPES = ("savings", "spend")

_EPOCH = datetime(1970, 1, 1)


def utcnow() -> datetime:
    """Current time as a naive UTC timestamp."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
    """Convert aware timestamps to naive UTC; naive values are returned as-is."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def epoch_millis(value: datetime) -> int:
    """Milliseconds since the Unix epoch, treating naive values as UTC."""
    delta = to_naive_utc(value) - _EPOCH
    return (delta.days * 86_400 + delta.seconds) * 1000 + delta.microseconds // 1000


def is_storable_amount(value: Decimal) -> bool:
    """True when ``value`` is finite and survives storage as a JSON number."""
    if not value.is_finite():
        return False
    if value == value.to_integral_value():
        return True
    as_float = float(value)
    return math.isfinite(as_float) and Decimal(repr(as_float)) == value


def normalize_description(value: Optional[str]) -> Optional[str]:
    """Trim a description, collapsing blank input to ``None``."""
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


class Transaction(BaseModel):
    """A single savings deposit or spend."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Unique identifier")
    date: datetime = Field(..., description="When the transaction happened (naive UTC, ms precision)")
    amount: Decimal = Field(..., description="Non-negative amount, currency agnostic")
    type: TransactionType = Field(..., description="'savings' or 'spend'")
    description: Optional[str] = Field(None, description="Optional free-text note")

    @field_validator("date")
    @classmethod
    def validate_date(cls, v: datetime) -> datetime:
        # Stored timestamps carry millisecond precision.
        v = to_naive_utc(v)
        return v.replace(microsecond=v.microsecond // 1000 * 1000)

    @field_validator("amount")
    @classmethod
    def validate_amount(cls, v: Decimal) -> Decimal:
        if not v.is_finite():
            raise ValueError("amount must be a finite number")
        if v < 0:
            raise ValueError("amount must be non-negative")
        if not is_storable_amount(v):
            raise ValueError("amount has more precision than can be stored")
        return v

    @field_validator("description", mode="before")
    @classmethod
    def validate_description(cls, v):
        if isinstance(v, str):
            return normalize_description(v)
        return v

    @property
    def signed_amount(self) -> Decimal:
        """Amount as a balance delta (negative for spend)."""
        return self.amount if self.type == "savings" else -self.amount
