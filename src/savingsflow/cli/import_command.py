"""
Import command for savingsflow CLI.

Merges transactions from a CSV file into the store.
"""

from __future__ import annotations

from pathlib import Path

import click
from rich.console import Console

from ..services.transactions import import_csv


@click.command("import")
@click.argument("csv_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def import_command(csv_file: Path) -> None:
    """Import transactions from a Date,Amount,Type,Description CSV file."""
    console = Console()

    console.print(f"[blue]Importing {csv_file.name}[/blue]")
    try:
        text = csv_file.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError as exc:
        raise click.ClickException("Error importing CSV: file is not valid UTF-8") from exc
    result = import_csv(text)
    if not result.ok:
        raise click.ClickException(result.message)
    console.print(f"[green]{result.message}[/green]")
