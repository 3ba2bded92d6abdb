"""Clear command for savingsflow CLI."""

from __future__ import annotations

import click

from ..persistence import get_store


@click.command()
@click.option("--yes", "confirm_clear", is_flag=True, help="Clear without confirmation.")
def clear(confirm_clear: bool) -> None:
    """Delete every stored transaction."""

    if not confirm_clear:
        if not click.confirm("Delete all transactions? This cannot be undone."):
            click.echo("Aborted.")
            return

    get_store().clear()
    click.echo("Cleared all transactions.")
