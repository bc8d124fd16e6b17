"""Trade processing result model."""

from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from fifocalc.models.result import FifoResult
from fifocalc.models.trade import Trade


class TradeProcessResult(BaseModel):
    """Represents the outcome of filtering and FIFO-matching a trade set."""

    is_success: bool = Field(default=False, description="Whether the run completed")
    client: str = Field(default="", description="Client the trades were filtered to")
    target_date: Optional[date] = Field(default=None, description="Inclusive cutoff date")
    filtered_trades: list[Trade] = Field(default_factory=list)
    fifo_results: list[FifoResult] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    @property
    def total_profit_loss(self) -> Decimal:
        return sum((r.total_profit_loss for r in self.fifo_results), Decimal("0"))
