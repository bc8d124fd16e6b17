"""Text report writer for FIFO results."""

import logging
from datetime import date, datetime
from decimal import Decimal
from pathlib import Path
from typing import Optional

from fifocalc.exceptions import ReportWriteError
from fifocalc.models import FifoResult

logger = logging.getLogger(__name__)

HEADER_TITLE = "FIFO Calculation Results"
NO_RESULTS = "No FIFO results to display."
HEADER_RULE = "=" * 70
SECTION_RULE = "-" * 70

PROFIT_LOSS_HEADER = "Security | Total P/L       |"
PROFIT_LOSS_SEPARATOR = "---------|-----------------|"
LEFT_SHARES_TITLE = " Left Shares ".center(124, "=")
LEFT_SHARES_HEADER = "Security | Amount       |  Price | Fee"
LEFT_SHARES_SEPARATOR = "---------|--------------|--------|-----"


def format_signed(amount: Decimal) -> str:
    """Format an amount with an explicit sign, thousands separators and 2 decimals."""
    sign = "+" if amount >= 0 else "-"
    return f"{sign}{abs(amount):,.2f}"


class ReportWriter:
    """Writes FIFO results as a plain-text report."""

    def render(
        self,
        results: list[FifoResult],
        client: str,
        target_date: date,
        generated: Optional[datetime] = None,
    ) -> str:
        """Build the report text.

        Args:
            results: FIFO results, one per security.
            client: Client the results belong to.
            target_date: Cutoff date of the calculation.
            generated: Timestamp to print. Defaults to now.

        Returns:
            Report content.
        """
        generated = generated or datetime.now()
        lines = [
            HEADER_TITLE,
            f"Client: {client}",
            f"As of Date: {target_date.isoformat()}",
            f"Generated: {generated.strftime('%Y-%m-%d %H:%M:%S')}",
            HEADER_RULE,
        ]

        if not results:
            lines.append(NO_RESULTS)
            return "\n".join(lines) + "\n"

        lines.extend(self._profit_loss_table(results))
        lines.extend(self._left_shares_table(results))
        return "\n".join(lines) + "\n"

    def write(
        self,
        results: list[FifoResult],
        client: str,
        target_date: date,
        file_path: Path,
    ) -> Path:
        """Write the report to a file.

        Returns:
            Absolute path of the written report.

        Raises:
            ReportWriteError: If the file cannot be written.
        """
        full_path = Path(file_path).resolve()
        content = self.render(results, client, target_date)

        try:
            full_path.write_text(content, encoding="utf-8")
        except OSError as e:
            logger.error("Error writing to file %s: %s", full_path, e)
            raise ReportWriteError(f"Error writing to file: {e}") from e

        logger.info("Results written to %s", full_path)
        return full_path

    def _profit_loss_table(self, results: list[FifoResult]) -> list[str]:
        lines = [PROFIT_LOSS_HEADER, PROFIT_LOSS_SEPARATOR]
        for result in results:
            lines.append(f"{result.security:<8} | {format_signed(result.total_profit_loss):>15} |")

        total = sum((r.total_profit_loss for r in results), Decimal("0"))
        lines.append(SECTION_RULE)
        lines.append(f"Total Profit/Loss: {format_signed(total)}")
        return lines

    def _left_shares_table(self, results: list[FifoResult]) -> list[str]:
        with_lots = [r for r in results if r.left_over_lots]
        if not with_lots:
            return []

        lines = ["", LEFT_SHARES_TITLE, LEFT_SHARES_HEADER, LEFT_SHARES_SEPARATOR]
        for result in with_lots:
            for lot in result.left_over_lots:
                lines.append(
                    f"{result.security:<8} | {lot.quantity:>12} | {lot.price:>6} | {lot.fee:.2f}"
                )
        lines.append(SECTION_RULE)
        return lines
