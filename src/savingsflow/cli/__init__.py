"""Command-line interface for savingsflow."""

from .commands import main

__all__ = ["main"]
