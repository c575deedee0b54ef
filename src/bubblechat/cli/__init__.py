"""Command-line interface for bubblechat."""

from .app import app, main

__all__ = ["app", "main"]
