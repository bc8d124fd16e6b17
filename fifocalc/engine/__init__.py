"""FIFO calculation engine for fifocalc."""

from fifocalc.engine.fifo import FifoCalculator, Lot
from fifocalc.engine.filters import filter_trades
from fifocalc.engine.processor import TradeProcessor

__all__ = [
    "FifoCalculator",
    "Lot",
    "TradeProcessor",
    "filter_trades",
]
