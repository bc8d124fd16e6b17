"""Data models for fifocalc."""

from fifocalc.models.trade import Trade
from fifocalc.models.result import FifoResult
from fifocalc.models.read_result import TradeReadError, TradeReadResult
from fifocalc.models.process_result import TradeProcessResult

__all__ = [
    "Trade",
    "FifoResult",
    "TradeReadError",
    "TradeReadResult",
    "TradeProcessResult",
]
