"""
List command for savingsflow CLI.

Shows stored transactions as a table or JSON.
"""

from __future__ import annotations

import click
from rich.console import Console

from ..services.json_serializer import serialize_transactions
from ..services.transactions import sort_by_date
from .utils import build_transaction_table, load_transactions


@click.command("list")
@click.option("--limit", type=click.IntRange(min=1), help="Maximum number of rows to display.")
@click.option(
    "--offset",
    type=click.IntRange(min=0),
    default=0,
    show_default=True,
    help="Rows to skip before listing.",
)
@click.option(
    "--order",
    type=click.Choice(["asc", "desc"], case_sensitive=False),
    default="desc",
    show_default=True,
    help="Sort order by transaction date.",
)
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
def list_command(limit, offset, order, json_output):
    """List stored transactions."""
    console = Console()

    transactions = sort_by_date(load_transactions())
    if (order or "desc").lower() == "desc":
        transactions.reverse()
    end = offset + limit if limit is not None else None
    page = transactions[offset:end]

    if json_output:
        console.print_json(
            data={"total": len(transactions), "transactions": serialize_transactions(page)}
        )
        return

    if not page:
        console.print("[yellow]No transactions recorded.[/yellow]")
        return

    console.print(build_transaction_table(page, title=f"Transactions ({len(transactions)} total)"))
