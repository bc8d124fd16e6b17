"""FIFO profit/loss calculator for trade ledgers."""

__version__ = "0.1.0"
