"""
Summary command for savingsflow CLI.

Reports total savings, total spend and the net balance.
"""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

from ..services.json_serializer import serialize_balance_point, serialize_summary
from ..services.summary import running_balance, summarize
from .utils import format_money, load_transactions


@click.command()
@click.option("--history", is_flag=True, help="Include the running balance per transaction")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
def summary(history, json_output):
    """Show savings totals."""
    console = Console()

    transactions = load_transactions()
    totals = summarize(transactions)
    points = running_balance(transactions) if history else []

    if json_output:
        payload = serialize_summary(totals)
        if history:
            payload["history"] = [serialize_balance_point(point) for point in points]
        console.print_json(data=payload)
        return

    table = Table(title="Savings Summary")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Total Savings", f"[green]{format_money(totals.total_savings)}[/green]")
    table.add_row("Total Spend", f"[red]{format_money(totals.total_spend)}[/red]")
    net_style = "green" if totals.net_savings >= 0 else "red"
    table.add_row("Net Savings", f"[{net_style}]{format_money(totals.net_savings)}[/{net_style}]")
    table.add_row("Transactions", str(totals.transaction_count))
    console.print(table)

    if history and points:
        history_table = Table(title="Running Balance")
        history_table.add_column("Date", style="cyan")
        history_table.add_column("Savings", justify="right")
        history_table.add_column("Spend", justify="right")
        history_table.add_column("Balance", justify="right")
        for point in points:
            history_table.add_row(
                f"{point.date:%Y-%m-%d}",
                format_money(point.savings),
                format_money(point.spend),
                format_money(point.balance),
            )
        console.print(history_table)
