"""
Export command for savingsflow CLI.

Writes stored transactions, sorted by date, as CSV.
"""

from __future__ import annotations

from pathlib import Path

import click

from ..core.csv_codec import serialize_transactions
from ..services.transactions import export_filename, sort_by_date
from .utils import load_transactions


@click.command()
@click.option(
    "--output",
    "output_path",
    type=click.Path(path_type=Path),
    help="File or directory to write (prints to stdout when omitted)",
)
def export(output_path):
    """Export transactions as CSV."""

    content = serialize_transactions(sort_by_date(load_transactions()))

    if output_path is None:
        click.echo(content)
        return

    if output_path.is_dir():
        output_path = output_path / export_filename()
    output_path.write_text(content, encoding="utf-8")
    click.echo(f"Exported transactions to {output_path}")
