"""Trade data model."""

from datetime import date as date_type
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from fifocalc.constants import BUY, SELL, SIDES


class Trade(BaseModel):
    """Represents a single buy or sell event from the trade ledger."""

    trade_id: int = Field(..., description="Unique trade identifier")
    side: str = Field(..., description="Trade side (BUY/SELL)")
    date: date_type = Field(..., description="Trade date")
    client: str = Field(default="", description="Client name")
    security: str = Field(..., description="Security symbol")
    quantity: int = Field(..., ge=0, description="Number of shares")
    price: Decimal = Field(..., ge=0, description="Unit price")
    fee: Decimal = Field(..., ge=0, description="Total fee for the trade")

    model_config = {"frozen": True}

    @field_validator("side")
    @classmethod
    def _normalize_side(cls, value: str) -> str:
        side = value.strip().upper()
        if side not in SIDES:
            raise ValueError(f"side must be one of {', '.join(SIDES)}, got '{value}'")
        return side

    @property
    def is_buy(self) -> bool:
        return self.side.upper() == BUY

    @property
    def is_sell(self) -> bool:
        return self.side.upper() == SELL
