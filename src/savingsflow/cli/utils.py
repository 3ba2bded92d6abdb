"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import Iterable, List

import click
from rich.table import Table

from ..core.csv_codec import format_amount
from ..core.models import Transaction
from ..persistence import DeserializationError, get_store


def load_transactions() -> List[Transaction]:
    """Read the stored list, converting corruption into a click error."""
    try:
        return get_store().list()
    except DeserializationError as exc:
        raise click.ClickException(str(exc)) from exc


def format_money(value) -> str:
    """Render an amount with two decimals and thousands separators."""
    return f"{value:,.2f}"


def build_transaction_table(transactions: Iterable[Transaction], *, title: str) -> Table:
    table = Table(title=title, expand=True)
    table.add_column("Date", style="cyan")
    table.add_column("Type", style="magenta")
    table.add_column("Amount", justify="right")
    table.add_column("Description", style="yellow")
    table.add_column("ID", style="dim")

    for txn in transactions:
        style = "green" if txn.type == "savings" else "red"
        table.add_row(
            txn.date.strftime("%Y-%m-%d %H:%M"),
            txn.type,
            f"[{style}]{format_amount(txn.amount)}[/{style}]",
            txn.description or "—",
            txn.id,
        )

    return table
