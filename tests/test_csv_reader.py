"""Tests for the trade CSV reader.

**Feature: fifo-calculator**
"""

import tempfile
from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from fifocalc.readers import TradeCsvReader, parse_decimal, parse_int

HEADER = "TradeId;Type;Date;Client;Security;Amount;Price;Fee"


def csv_text(*rows: str, header: str = HEADER) -> str:
    return "\n".join([header, *rows]) + "\n"


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def reader():
    return TradeCsvReader(Path("unused.csv"))


class TestValidRows:
    """Well-formed rows become trades in file order."""

    def test_parses_all_fields(self, reader: TradeCsvReader):
        result = reader.parse_text(csv_text(
            "1;BUY;2024-01-02;Jonas;AAPL;100;1.234,50;1,00",
        ))

        assert result.errors == []
        assert result.is_success
        trade = result.trades[0]
        assert trade.trade_id == 1
        assert trade.side == "BUY"
        assert trade.date == date(2024, 1, 2)
        assert trade.client == "Jonas"
        assert trade.security == "AAPL"
        assert trade.quantity == 100
        assert trade.price == Decimal("1234.50")
        assert trade.fee == Decimal("1.00")

    def test_keeps_file_order(self, reader: TradeCsvReader):
        result = reader.parse_text(csv_text(
            "3;BUY;2024-01-03;Jonas;AAPL;10;10;0",
            "1;BUY;2024-01-01;Jonas;AAPL;10;10;0",
            "2;SELL;2024-01-02;Jonas;AAPL;5;12;0",
        ))

        assert [t.trade_id for t in result.trades] == [3, 1, 2]

    def test_side_is_case_insensitive(self, reader: TradeCsvReader):
        result = reader.parse_text(csv_text(
            "1;buy;2024-01-02;Jonas;AAPL;10;10;0",
            "2;Sell;2024-01-03;Jonas;AAPL;10;10;0",
        ))

        assert [t.side for t in result.trades] == ["BUY", "SELL"]

    def test_header_is_case_and_whitespace_insensitive(self, reader: TradeCsvReader):
        header = " TRADEID ; type;DATE ;client; Security;AMOUNT;Price ;fee"
        result = reader.parse_text(csv_text("1;BUY;2024-01-02;Jonas;AAPL;10;10;0", header=header))

        assert len(result.trades) == 1

    def test_columns_in_any_order(self, reader: TradeCsvReader):
        header = "Fee;Price;Amount;Security;Client;Date;Type;TradeId"
        result = reader.parse_text(csv_text("2,5;10,00;7;MSFT;Ona;2024-02-01;SELL;42", header=header))

        trade = result.trades[0]
        assert trade.trade_id == 42
        assert trade.side == "SELL"
        assert trade.quantity == 7
        assert trade.fee == Decimal("2.5")

    def test_client_column_is_optional(self, reader: TradeCsvReader):
        header = "TradeId;Type;Date;Security;Amount;Price;Fee"
        result = reader.parse_text(csv_text("1;BUY;2024-01-02;AAPL;10;10;0", header=header))

        assert result.errors == []
        assert result.trades[0].client == ""
        assert result.clients == []

    def test_empty_client_value_is_allowed(self, reader: TradeCsvReader):
        result = reader.parse_text(csv_text("1;BUY;2024-01-02;;AAPL;10;10;0"))

        assert result.errors == []
        assert result.trades[0].client == ""


class TestRowErrors:
    """
    **Feature: fifo-calculator, Property 10: Row Error Isolation**

    A bad row contributes no trade and never hides good rows.
    """

    def test_non_numeric_price(self, reader: TradeCsvReader):
        result = reader.parse_text(csv_text(
            "1;BUY;2024-01-02;Jonas;AAPL;10;10,00;0",
            "2;BUY;2024-01-03;Jonas;AAPL;10;abc;0",
            "3;SELL;2024-01-04;Jonas;AAPL;5;12,00;0",
        ))

        assert [t.trade_id for t in result.trades] == [1, 3]
        assert len(result.errors) == 1
        error = result.errors[0]
        assert error.field_name == "price"
        assert error.line_number == 3
        assert error.raw_line == "2;BUY;2024-01-03;Jonas;AAPL;10;abc;0"
        assert error.message.startswith("Invalid format for price")
        assert not result.fatal
        assert not result.is_success

    def test_column_count_mismatch(self, reader: TradeCsvReader):
        result = reader.parse_text(csv_text(
            "1;BUY;2024-01-02;Jonas;AAPL;10;10",
            "2;BUY;2024-01-02;Jonas;AAPL;10;10;0",
        ))

        assert [t.trade_id for t in result.trades] == [2]
        assert len(result.errors) == 1
        assert result.errors[0].message == "Expected 8 columns but found 7"
        assert result.errors[0].field_name == "CSV Structure"

    def test_empty_field(self, reader: TradeCsvReader):
        result = reader.parse_text(csv_text("1;BUY;2024-01-02;Jonas;AAPL; ;10;0"))

        assert result.trades == []
        assert result.errors[0].message == "Required field is empty"
        assert result.errors[0].field_name == "amount"

    def test_each_bad_field_is_reported(self, reader: TradeCsvReader):
        result = reader.parse_text(csv_text("x;HOLD;02/01/2024;Jonas;AAPL;1.5;10;0"))

        assert result.trades == []
        assert [e.field_name for e in result.errors] == ["tradeid", "type", "date", "amount"]
        assert all(e.line_number == 2 for e in result.errors)

    def test_negative_amount_is_rejected(self, reader: TradeCsvReader):
        result = reader.parse_text(csv_text("1;BUY;2024-01-02;Jonas;AAPL;-5;10;0"))

        assert result.trades == []
        assert result.errors[0].field_name == "amount"
        assert result.errors[0].message.startswith("Invalid format for amount")

    def test_negative_fee_is_rejected(self, reader: TradeCsvReader):
        result = reader.parse_text(csv_text("1;BUY;2024-01-02;Jonas;AAPL;5;10;-1,00"))

        assert result.trades == []
        assert result.errors[0].field_name == "fee"

    def test_line_numbers_skip_blank_lines(self, reader: TradeCsvReader):
        text = HEADER + "\n\n1;BUY;2024-01-02;Jonas;AAPL;10;10;0\n\n2;BUY;bad;Jonas;AAPL;10;10;0\n"
        result = reader.parse_text(text)

        assert len(result.trades) == 1
        assert result.errors[0].line_number == 3
        assert result.errors[0].field_name == "date"

    def test_error_formatting(self, reader: TradeCsvReader):
        result = reader.parse_text(csv_text("1;BUY;2024-01-02;Jonas;AAPL;10;abc;0"))

        assert result.errors[0].format().startswith("Line 2: Invalid format for price")
        assert result.errors[0].format().endswith("(Field: price)")

    @given(bad_rows=st.sets(st.integers(min_value=0, max_value=19), max_size=20))
    @settings(max_examples=50)
    def test_good_rows_survive_any_bad_rows(self, bad_rows: set[int]):
        rows = [
            f"{i};BUY;2024-01-02;Jonas;AAPL;{'oops' if i in bad_rows else 10};10;0"
            for i in range(20)
        ]
        result = TradeCsvReader(Path("unused.csv")).parse_text(csv_text(*rows))

        assert [t.trade_id for t in result.trades] == [i for i in range(20) if i not in bad_rows]
        assert sorted(e.line_number for e in result.errors) == sorted(i + 2 for i in bad_rows)


class TestFileLevelErrors:
    """
    **Feature: fifo-calculator, Property 11: File-Level Failures**

    File-level problems abort the load with a single error and no trades.
    """

    def test_missing_one_column(self, reader: TradeCsvReader):
        header = "TradeId;Type;Date;Client;Security;Amount;Price"
        result = reader.parse_text(csv_text("1;BUY;2024-01-02;Jonas;AAPL;10;10", header=header))

        assert result.fatal
        assert result.trades == []
        assert len(result.errors) == 1
        assert result.errors[0].message == "Missing required column: fee"
        assert result.errors[0].line_number == 1

    def test_missing_several_columns(self, reader: TradeCsvReader):
        header = "TradeId;Type;Date;Client;Security;Amount"
        result = reader.parse_text(csv_text("1;BUY;2024-01-02;Jonas;AAPL;10", header=header))

        assert result.fatal
        assert result.errors[0].message == "Missing required columns: price, fee"

    def test_missing_columns_reported_on_header_line_after_blanks(self, reader: TradeCsvReader):
        text = "\n\nTradeId;Type;Date\n1;BUY;2024-01-02\n"
        result = reader.parse_text(text)

        assert result.fatal
        assert result.errors[0].line_number == 1
        assert result.errors[0].message == "Missing required columns: security, amount, price, fee"

    def test_missing_file(self, temp_dir: Path):
        result = TradeCsvReader(temp_dir / "nope.csv").load_trades()

        assert result.fatal
        assert result.trades == []
        assert result.errors[0].line_number == 0
        assert "not found" in result.errors[0].message

    def test_empty_file(self, temp_dir: Path):
        path = temp_dir / "empty.csv"
        path.write_text("")

        result = TradeCsvReader(path).load_trades()

        assert result.fatal
        assert result.errors[0].message == "CSV file is empty"

    def test_header_only(self, temp_dir: Path):
        path = temp_dir / "header.csv"
        path.write_text(HEADER + "\n\n  \n")

        result = TradeCsvReader(path).load_trades()

        assert result.fatal
        assert result.errors[0].message == "CSV file must contain at least a header and one data row"

    def test_error_format_for_file_level(self, temp_dir: Path):
        path = temp_dir / "empty.csv"
        path.write_text("")

        result = TradeCsvReader(path).load_trades()

        assert result.errors[0].format() == "CSV file is empty"

    def test_loads_utf8_file_with_bom(self, temp_dir: Path):
        path = temp_dir / "trades.csv"
        path.write_text(csv_text("1;BUY;2024-01-02;Šarūnas;AAPL;10;10;0"), encoding="utf-8-sig")

        result = TradeCsvReader(path).load_trades()

        assert result.errors == []
        assert result.trades[0].client == "Šarūnas"

    def test_custom_delimiter(self, temp_dir: Path):
        path = temp_dir / "trades.csv"
        path.write_text("tradeid|type|date|client|security|amount|price|fee\n1|BUY|2024-01-02|Ona|AAPL|10|10|0\n")

        result = TradeCsvReader(path, delimiter="|").load_trades()

        assert len(result.trades) == 1


class TestClientExtraction:
    """Distinct client names are returned sorted case-insensitively."""

    def test_clients_sorted_and_deduplicated(self, reader: TradeCsvReader):
        result = reader.parse_text(csv_text(
            "1;BUY;2024-01-02;bob;AAPL;10;10;0",
            "2;BUY;2024-01-02;Alice;AAPL;10;10;0",
            "3;BUY;2024-01-02;Charlie;AAPL;10;10;0",
            "4;BUY;2024-01-02;Alice;MSFT;10;10;0",
            "5;BUY;2024-01-02;;MSFT;10;10;0",
        ))

        assert result.clients == ["Alice", "bob", "Charlie"]

    def test_clients_only_from_valid_rows(self, reader: TradeCsvReader):
        result = reader.parse_text(csv_text(
            "1;BUY;2024-01-02;Ona;AAPL;10;10;0",
            "2;BUY;2024-01-02;Petras;AAPL;x;10;0",
        ))

        assert result.clients == ["Ona"]


class TestNumberParsing:
    """Comma-decimal, dot-thousands number parsing."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("10", Decimal("10")),
            ("10,5", Decimal("10.5")),
            ("1.234,56", Decimal("1234.56")),
            ("1.234.567", Decimal("1234567")),
            ("-3,25", Decimal("-3.25")),
            ("1 234,50", Decimal("1234.50")),
            ("1\u00a0234,50", Decimal("1234.50")),
            ("5,00 €", Decimal("5.00")),
            ("0,00", Decimal("0")),
        ],
    )
    def test_valid_numbers(self, text: str, expected: Decimal):
        assert parse_decimal(text) == expected

    @pytest.mark.parametrize("text", ["abc", "", "12.50", "1,2,3", "1.23,4", "1e5", ",5"])
    def test_invalid_numbers(self, text: str):
        with pytest.raises(ValueError):
            parse_decimal(text)

    def test_parse_int(self):
        assert parse_int(" 42 ") == 42
        assert parse_int("-7") == -7
        with pytest.raises(ValueError):
            parse_int("4.2")
