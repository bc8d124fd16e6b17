"""Tests for the text report writer.

**Feature: fifo-calculator**
"""

import tempfile
from datetime import date, datetime
from decimal import Decimal
from pathlib import Path

import pytest

from fifocalc.exceptions import ReportWriteError
from fifocalc.models import FifoResult, Trade
from fifocalc.report import ReportWriter, format_signed

GENERATED = datetime(2025, 1, 2, 3, 4, 5)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


def lot(quantity: int, price: str, fee: str) -> Trade:
    return Trade(
        trade_id=1,
        side="BUY",
        date=date(2024, 1, 1),
        client="Jonas",
        security="MSFT",
        quantity=quantity,
        price=Decimal(price),
        fee=Decimal(fee),
    )


@pytest.fixture
def results() -> list[FifoResult]:
    return [
        FifoResult(security="AAPL", total_profit_loss=Decimal("198")),
        FifoResult(
            security="MSFT",
            total_profit_loss=Decimal("-1234.5"),
            left_over_lots=[lot(40, "20.00", "0.4")],
        ),
    ]


class TestFormatSigned:
    def test_positive_and_zero(self):
        assert format_signed(Decimal("198")) == "+198.00"
        assert format_signed(Decimal("0")) == "+0.00"

    def test_negative_with_thousands(self):
        assert format_signed(Decimal("-1234.5")) == "-1,234.50"


class TestReportWriter:
    """The report lists per-security profit/loss, the total and left-over lots."""

    def test_header(self, results: list[FifoResult]):
        text = ReportWriter().render(results, "Jonas", date(2024, 12, 31), generated=GENERATED)
        lines = text.splitlines()

        assert lines[0] == "FIFO Calculation Results"
        assert lines[1] == "Client: Jonas"
        assert lines[2] == "As of Date: 2024-12-31"
        assert lines[3] == "Generated: 2025-01-02 03:04:05"
        assert lines[4] == "=" * 70

    def test_profit_loss_rows_and_total(self, results: list[FifoResult]):
        text = ReportWriter().render(results, "Jonas", date(2024, 12, 31), generated=GENERATED)

        assert "AAPL     |         +198.00 |" in text
        assert "MSFT     |       -1,234.50 |" in text
        assert "Total Profit/Loss: -1,036.50" in text

    def test_left_shares_section(self, results: list[FifoResult]):
        text = ReportWriter().render(results, "Jonas", date(2024, 12, 31), generated=GENERATED)

        assert "Left Shares" in text
        assert "MSFT     |           40 |  20.00 | 0.40" in text

    def test_no_left_shares_section_without_lots(self):
        results = [FifoResult(security="AAPL", total_profit_loss=Decimal("1"))]
        text = ReportWriter().render(results, "Jonas", date(2024, 12, 31))

        assert "Left Shares" not in text

    def test_no_results(self):
        text = ReportWriter().render([], "Jonas", date(2024, 12, 31))

        assert "No FIFO results to display." in text
        assert "Total Profit/Loss" not in text

    def test_write_returns_absolute_path(self, temp_dir: Path, results: list[FifoResult]):
        path = ReportWriter().write(results, "Jonas", date(2024, 12, 31), temp_dir / "out.txt")

        assert path.is_absolute()
        assert path.read_text(encoding="utf-8").startswith("FIFO Calculation Results")

    def test_write_failure_raises(self, temp_dir: Path, results: list[FifoResult]):
        with pytest.raises(ReportWriteError):
            ReportWriter().write(results, "Jonas", date(2024, 12, 31), temp_dir / "missing" / "out.txt")
