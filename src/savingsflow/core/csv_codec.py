"""
CSV interchange for savings transactions.

Export writes a ``Date,Amount,Type,Description`` table. Import reads the same
layout back, skipping rows that fail validation, dropping rows whose derived
id is already known, and merging the survivors into the store.
"""

from __future__ import annotations

import csv
import io
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Literal, Optional, Union

from ..logging_setup import get_logger
from .models import TRANSACTION_TYPES, Transaction, epoch_millis, is_storable_amount, to_naive_utc

if TYPE_CHECKING:
    from ..persistence.storage import TransactionStore

logger = get_logger(__name__)

CSV_HEADER = ("Date", "Amount", "Type", "Description")
MIN_COLUMNS = 3
FALLBACK_DATE_FORMATS = ("%m/%d/%Y",)

EMPTY_OR_HEADER_ONLY_MESSAGE = "CSV file must have at least a header and one data row"
NO_VALID_ROWS_MESSAGE = "No valid transactions found in CSV file"

ImportFailure = Literal["empty_or_header_only", "no_valid_rows", "unexpected_failure"]


@dataclass(frozen=True)
class ValidRow:
    """A data row that produced a transaction."""

    transaction: Transaction


@dataclass(frozen=True)
class InvalidRow:
    """A data row rejected during validation."""

    row_index: int
    reason: str


RowResult = Union[ValidRow, InvalidRow]


@dataclass
class ParsedCsv:
    """Outcome of parsing CSV text, before anything is persisted."""

    transactions: List[Transaction] = field(default_factory=list)
    skipped: List[InvalidRow] = field(default_factory=list)
    duplicates: int = 0
    failure: Optional[ImportFailure] = None


@dataclass(frozen=True)
class ImportResult:
    """Structured result of ``import_csv``; import never raises."""

    ok: bool
    message: str
    imported_count: int
    failure: Optional[ImportFailure] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ok": self.ok,
            "message": self.message,
            "imported_count": self.imported_count,
            "failure": self.failure,
        }


def format_amount(amount: Decimal) -> str:
    """Plain decimal string: no currency symbol, separators or exponent."""
    return format(amount, "f")


def serialize_transactions(transactions: Iterable[Transaction]) -> str:
    """Render transactions as CSV text in the order given."""
    output = io.StringIO()
    writer = csv.writer(output, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for txn in transactions:
        writer.writerow(
            (
                txn.date.strftime("%Y-%m-%d"),
                format_amount(txn.amount),
                txn.type,
                txn.description or "",
            )
        )
    # No trailing newline after the last row.
    return output.getvalue()[:-1]


def split_csv_line(line: str) -> List[str]:
    """
    Split a single CSV line into trimmed fields.

    A double quote toggles quoted mode, and commas inside quotes do not split.
    A doubled quote inside a quoted field yields one literal quote, matching
    the escaping used by ``serialize_transactions``.
    """

    fields: List[str] = []
    current: List[str] = []
    in_quotes = False
    index = 0
    length = len(line)

    while index < length:
        char = line[index]
        if char == '"':
            if in_quotes and index + 1 < length and line[index + 1] == '"':
                current.append('"')
                index += 2
                continue
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(char)
        index += 1

    fields.append("".join(current).strip())
    return fields


def content_lines(text: str) -> List[str]:
    """Split text into lines, dropping blank and whitespace-only ones."""
    return [line.strip() for line in text.split("\n") if line.strip()]


def parse_date(value: str) -> Optional[datetime]:
    """Parse an ISO-8601 date or date-time (or M/D/YYYY); ``None`` when invalid."""
    text = value.strip()
    if not text:
        return None
    iso_text = text[:-1] + "+00:00" if text.endswith(("Z", "z")) else text
    try:
        return to_naive_utc(datetime.fromisoformat(iso_text))
    except ValueError:
        pass
    for fmt in FALLBACK_DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def parse_amount(value: str) -> Optional[Decimal]:
    """Parse a finite, storable decimal amount, tolerating ``$`` and thousands separators."""
    cleaned = value.replace("$", "").replace(",", "").strip()
    if not cleaned:
        return None
    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        return None
    if not is_storable_amount(amount):
        return None
    return amount


def validate_row(columns: List[str], row_index: int) -> RowResult:
    """
    Validate one split data row.

    Parameters
    ----------
    columns:
        Fields produced by ``split_csv_line``.
    row_index:
        0-based position of the row among the data rows of this import;
        becomes the suffix of the derived id.

    Returns
    -------
    RowResult
        ``ValidRow`` carrying the transaction, or ``InvalidRow`` with a reason.
    """

    if len(columns) < MIN_COLUMNS:
        return InvalidRow(row_index, f"expected at least {MIN_COLUMNS} columns, got {len(columns)}")

    date_text, amount_text, type_text = columns[:MIN_COLUMNS]
    description = columns[MIN_COLUMNS] if len(columns) > MIN_COLUMNS else None

    date = parse_date(date_text)
    if date is None:
        return InvalidRow(row_index, f"invalid date {date_text!r}")

    amount = parse_amount(amount_text)
    if amount is None:
        return InvalidRow(row_index, f"invalid amount {amount_text!r}")
    if amount < 0:
        return InvalidRow(row_index, f"negative amount {amount_text!r}")

    txn_type = type_text.strip().lower()
    if txn_type not in TRANSACTION_TYPES:
        return InvalidRow(row_index, f"unknown type {type_text!r}")

    transaction = Transaction(
        id=f"{epoch_millis(date)}-{row_index}",
        date=date,
        amount=amount,
        type=txn_type,
        description=description,
    )
    return ValidRow(transaction)


def parse_transactions(text: str, existing_ids: Iterable[str] = ()) -> ParsedCsv:
    """Parse CSV text into new transactions without touching storage."""

    lines = content_lines(text)
    if len(lines) < 2:
        return ParsedCsv(failure="empty_or_header_only")

    header = split_csv_line(lines[0])
    if [column.lower() for column in header] != [column.lower() for column in CSV_HEADER]:
        logger.warning("Unexpected CSV header %r; columns are read as %s", header, CSV_HEADER)

    parsed = ParsedCsv()
    seen = set(existing_ids)
    for row_index, line in enumerate(lines[1:]):
        result = validate_row(split_csv_line(line), row_index)
        if isinstance(result, InvalidRow):
            logger.debug("Skipping CSV row %d: %s", row_index, result.reason)
            parsed.skipped.append(result)
            continue
        transaction = result.transaction
        if transaction.id in seen:
            parsed.duplicates += 1
            continue
        seen.add(transaction.id)
        parsed.transactions.append(transaction)

    if not parsed.transactions:
        parsed.failure = "no_valid_rows"
    return parsed


def import_csv(text: str, store: "TransactionStore") -> ImportResult:
    """Parse ``text``, merge new rows into ``store`` sorted by date, and report."""

    try:
        if len(content_lines(text)) < 2:
            return ImportResult(False, EMPTY_OR_HEADER_ONLY_MESSAGE, 0, "empty_or_header_only")

        with store.lock:
            existing = store.list()
            parsed = parse_transactions(text, (txn.id for txn in existing))
            if parsed.failure is not None:
                logger.info(
                    "CSV import found no new rows (%d skipped, %d duplicate)",
                    len(parsed.skipped),
                    parsed.duplicates,
                )
                return ImportResult(False, NO_VALID_ROWS_MESSAGE, 0, "no_valid_rows")

            merged = sorted([*existing, *parsed.transactions], key=lambda txn: txn.date)
            store.replace_all(merged)
    except Exception as exc:
        logger.exception("CSV import failed")
        return ImportResult(False, f"Error importing CSV: {exc}", 0, "unexpected_failure")

    count = len(parsed.transactions)
    logger.info(
        "Imported %d transaction(s) (%d skipped, %d duplicate)",
        count,
        len(parsed.skipped),
        parsed.duplicates,
    )
    return ImportResult(True, f"Successfully imported {count} transaction(s)", count)
