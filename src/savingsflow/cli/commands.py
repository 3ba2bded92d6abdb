"""
Command-line interface for savingsflow.

Provides the CLI command group and registers individual subcommands.
"""

from __future__ import annotations

import click

from .. import __version__
from ..logging_setup import configure_logging
from .add import add
from .clear import clear
from .export_command import export
from .import_command import import_command
from .list_command import list_command
from .summary import summary


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Logging level (defaults to $SAVINGSFLOW_LOG_LEVEL or WARNING).",
)
def main(log_level):
    """SavingsFlow - track savings and spending from the terminal."""
    configure_logging(log_level)


# Register CLI subcommands
main.add_command(add)
main.add_command(list_command)
main.add_command(clear)
main.add_command(export)
main.add_command(import_command)
main.add_command(summary)


if __name__ == "__main__":
    main()
