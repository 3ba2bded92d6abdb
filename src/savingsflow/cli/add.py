"""
Add command for savingsflow CLI.

Records a single savings deposit or spend.
"""

from __future__ import annotations

import click
from pydantic import ValidationError
from rich.console import Console

from ..core.csv_codec import format_amount, parse_amount
from ..persistence import DeserializationError, get_store


@click.command()
@click.argument("amount")
@click.option(
    "--type",
    "txn_type",
    type=click.Choice(["savings", "spend"], case_sensitive=False),
    required=True,
    help="Whether the amount was saved or spent",
)
@click.option("--description", help="Optional note stored with the transaction")
@click.option(
    "--date",
    "txn_date",
    type=click.DateTime(formats=["%Y-%m-%d", "%Y-%m-%dT%H:%M:%S", "%Y-%m-%d %H:%M:%S"]),
    help="Transaction date (defaults to now, UTC)",
)
def add(amount, txn_type, description, txn_date):
    """Record a savings or spend transaction."""
    console = Console()

    value = parse_amount(amount)
    if value is None:
        raise click.BadParameter(f"Invalid amount: {amount}", param_hint="AMOUNT")
    if value < 0:
        raise click.BadParameter("Amount must be non-negative.", param_hint="AMOUNT")

    try:
        transaction = get_store().append(
            value, txn_type.lower(), description=description, date=txn_date
        )
    except DeserializationError as exc:
        raise click.ClickException(str(exc)) from exc
    except ValidationError as exc:
        raise click.BadParameter(str(exc), param_hint="AMOUNT") from exc

    console.print(
        f"[green]Recorded {transaction.type} of {format_amount(transaction.amount)}[/green] "
        f"on {transaction.date:%Y-%m-%d} (id {transaction.id})"
    )
