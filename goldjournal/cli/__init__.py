"""CLI commands for GoldJournal.

This package provides the command-line interface for GoldJournal,
covering trade logging, performance analytics and pre-trade planning.
"""

from goldjournal.cli.main import cli, main

__all__ = ["cli", "main"]
