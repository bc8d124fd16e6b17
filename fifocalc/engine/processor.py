"""Trade processing: filter a trade set and run the FIFO calculation."""

import logging
from datetime import date
from typing import Optional

from fifocalc import constants as c
from fifocalc.engine.fifo import FifoCalculator
from fifocalc.engine.filters import filter_trades
from fifocalc.exceptions import FifoCalculationError
from fifocalc.models import Trade, TradeProcessResult

logger = logging.getLogger(__name__)


class TradeProcessor:
    """Runs the filter and FIFO engine and packages the outcome.

    The result is either a complete calculation or a failure with error
    messages; the only partial outcome is a sell skipped for insufficient
    shares, which is reported in ``warnings``.
    """

    def __init__(self, calculator: Optional[FifoCalculator] = None):
        self._calculator = calculator or FifoCalculator()

    def process_trades(
        self,
        trades: list[Trade],
        client: str,
        target_date: date,
    ) -> TradeProcessResult:
        """Filter trades for a client and cutoff date, then run FIFO matching.

        Args:
            trades: All parsed trades.
            client: Client to calculate for.
            target_date: Inclusive cutoff date.

        Returns:
            TradeProcessResult describing success or failure.
        """
        result = TradeProcessResult(client=client, target_date=target_date)

        if not trades:
            logger.error(c.MSG_NO_TRADES)
            result.errors.append(c.MSG_NO_TRADES)
            return result

        filtered = filter_trades(trades, client, target_date)
        result.filtered_trades = filtered

        if not filtered:
            message = c.MSG_CLIENT_NOT_FOUND.format(client, target_date.isoformat())
            logger.error(message)
            result.errors.append(message)
            return result

        logger.info(
            "Calculating FIFO for %s up to %s (%d trades)",
            client, target_date.isoformat(), len(filtered),
        )

        try:
            fifo_results = self._calculator.calculate(filtered)
        except FifoCalculationError as e:
            message = c.MSG_PROCESSING_FAILED.format(e)
            logger.error(message)
            result.errors.append(message)
            return result

        result.fifo_results = fifo_results
        result.warnings = [msg for r in fifo_results for msg in r.diagnostics]
        result.is_success = True

        logger.info(
            "Calculated %d securities, total P/L %s",
            len(fifo_results), result.total_profit_loss,
        )
        return result
