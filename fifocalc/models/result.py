"""FIFO result data model."""

from decimal import Decimal

from pydantic import BaseModel, Field

from fifocalc.models.trade import Trade


class FifoResult(BaseModel):
    """Represents the FIFO outcome for one security."""

    security: str = Field(..., description="Security symbol")
    total_profit_loss: Decimal = Field(
        default=Decimal("0"), description="Realized profit/loss"
    )
    left_over_lots: list[Trade] = Field(
        default_factory=list, description="Buy lots with unconsumed shares"
    )
    diagnostics: list[str] = Field(
        default_factory=list, description="Sells skipped during matching"
    )

    model_config = {"frozen": True}

    @property
    def remaining_quantity(self) -> int:
        """Total number of shares still held across left-over lots."""
        return sum(lot.quantity for lot in self.left_over_lots)
