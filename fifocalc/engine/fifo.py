"""FIFO lot matching engine.

Matches each sell against the oldest buy lots still holding shares and
computes realized profit/loss per security, with buy and sell fees
allocated proportionally to the shares involved.
"""

import logging
from collections import defaultdict
from decimal import Decimal, localcontext

from pydantic import BaseModel

from fifocalc.constants import MSG_INSUFFICIENT_SHARES
from fifocalc.exceptions import InvalidTradeError
from fifocalc.models import FifoResult, Trade

logger = logging.getLogger(__name__)

ZERO = Decimal("0")

# Significant digits for fee-per-share arithmetic
DECIMAL_PRECISION = 28


class Lot(BaseModel):
    """Mutable working copy of a buy trade used during one calculation."""

    trade: Trade
    remaining_quantity: int
    remaining_fee: Decimal

    @classmethod
    def from_trade(cls, trade: Trade) -> "Lot":
        return cls(trade=trade, remaining_quantity=trade.quantity, remaining_fee=trade.fee)

    def to_trade(self) -> Trade:
        """Return the source trade with the remaining quantity and fee."""
        return self.trade.model_copy(
            update={"quantity": self.remaining_quantity, "fee": self.remaining_fee}
        )


def _fifo_key(trade: Trade) -> tuple:
    return (trade.date, trade.trade_id)


class FifoCalculator:
    """Calculates FIFO profit/loss for a set of trades.

    The calculator keeps no state between calls; each call works on fresh
    lot copies, so the caller's trades are never modified.
    """

    def calculate(self, trades: list[Trade]) -> list[FifoResult]:
        """Calculate FIFO results for every security in the trade set.

        Args:
            trades: Trades already filtered to one client and cutoff date.

        Returns:
            One FifoResult per security, sorted by security symbol.

        Raises:
            InvalidTradeError: If any trade has a negative quantity, price or fee.
        """
        if not trades:
            return []

        self._validate(trades)

        groups: dict[str, list[Trade]] = defaultdict(list)
        for trade in trades:
            if not trade.security or not trade.security.strip():
                continue
            groups[trade.security].append(trade)

        results = [
            self.calculate_security(security, group)
            for security, group in groups.items()
        ]
        return sorted(results, key=lambda r: r.security)

    def _validate(self, trades: list[Trade]) -> None:
        if any(t.quantity < 0 for t in trades):
            raise InvalidTradeError("Trade amount cannot be negative")
        if any(t.price < 0 for t in trades):
            raise InvalidTradeError("Trade price cannot be negative")
        if any(t.fee < 0 for t in trades):
            raise InvalidTradeError("Trade fee cannot be negative")

    def calculate_security(self, security: str, trades: list[Trade]) -> FifoResult:
        """Calculate FIFO profit/loss for a single security.

        Args:
            security: Security symbol shared by all trades.
            trades: Trades for this security.

        Returns:
            FifoResult with the realized total and the left-over lots.
        """
        buys = sorted((t for t in trades if t.is_buy), key=_fifo_key)
        sells = sorted((t for t in trades if t.is_sell), key=_fifo_key)

        if not sells:
            return FifoResult(
                security=security,
                left_over_lots=[buy for buy in buys if buy.quantity > 0],
            )

        lots = [Lot.from_trade(buy) for buy in buys]
        total_profit_loss = ZERO
        diagnostics: list[str] = []

        for sell in sells:
            eligible = self._eligible_lots(sell, lots)
            owned = sum(lot.remaining_quantity for lot in eligible)

            if owned < sell.quantity:
                message = MSG_INSUFFICIENT_SHARES.format(
                    quantity=sell.quantity,
                    security=sell.security,
                    date=sell.date.isoformat(),
                    owned=owned,
                    trade_id=sell.trade_id,
                )
                logger.warning(message)
                diagnostics.append(message)
                continue

            total_profit_loss += self._process_sell(sell, eligible)

        left_over = [lot.to_trade() for lot in lots if lot.remaining_quantity > 0]

        logger.debug(
            "%s: %d buys, %d sells, P/L %s, %d lots left",
            security, len(buys), len(sells), total_profit_loss, len(left_over),
        )

        return FifoResult(
            security=security,
            total_profit_loss=total_profit_loss,
            left_over_lots=left_over,
            diagnostics=diagnostics,
        )

    @staticmethod
    def _eligible_lots(sell: Trade, lots: list[Lot]) -> list[Lot]:
        """Lots with shares left that were bought on or before the sell date."""
        eligible = [
            lot for lot in lots
            if lot.remaining_quantity > 0 and lot.trade.date <= sell.date
        ]
        return sorted(eligible, key=lambda lot: _fifo_key(lot.trade))

    @staticmethod
    def _process_sell(sell: Trade, lots: list[Lot]) -> Decimal:
        """Consume lots in order for one sell and return its profit/loss.

        Lots are updated in place: their remaining quantity and fee shrink
        by the shares consumed.
        """
        profit_loss = ZERO
        remaining_to_sell = sell.quantity

        with localcontext() as ctx:
            ctx.prec = DECIMAL_PRECISION

            sell_fee_per_share = sell.fee / sell.quantity if sell.quantity > 0 else ZERO

            for lot in lots:
                if remaining_to_sell <= 0:
                    break

                shares = min(remaining_to_sell, lot.remaining_quantity)
                buy_fee_per_share = lot.remaining_fee / lot.remaining_quantity

                cost = lot.trade.price * shares + buy_fee_per_share * shares
                revenue = sell.price * shares - sell_fee_per_share * shares
                profit_loss += revenue - cost

                remaining_to_sell -= shares
                lot.remaining_quantity -= shares
                if lot.remaining_quantity == 0:
                    lot.remaining_fee = ZERO
                else:
                    lot.remaining_fee -= buy_fee_per_share * shares

        return profit_loss
