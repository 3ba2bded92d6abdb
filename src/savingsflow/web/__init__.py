"""HTTP API for savingsflow."""

from .app import create_app

__all__ = ["create_app"]
