"""CLI commands for fifocalc.

This package provides the command-line interface: loading trade files,
listing clients, calculating FIFO profit/loss and writing reports.
"""

from fifocalc.cli.main import cli, main

__all__ = ["cli", "main"]
