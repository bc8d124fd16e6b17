"""Trade CSV reader.

Reads semicolon-delimited trade files into validated ``Trade`` records.
Row and field problems are collected as ``TradeReadError`` entries instead
of aborting the load, so one bad row never hides the good ones.
"""

import logging
from datetime import date, datetime
from pathlib import Path
from typing import Any, Callable, Optional

from pydantic import ValidationError

from fifocalc import constants as c
from fifocalc.models import Trade, TradeReadError, TradeReadResult
from fifocalc.readers.numbers import parse_decimal, parse_int

logger = logging.getLogger(__name__)


def _parse_side(value: str) -> str:
    side = value.upper()
    if side not in c.SIDES:
        raise ValueError(f"expected {c.BUY} or {c.SELL}, got '{value}'")
    return side


def _parse_date(value: str) -> date:
    try:
        return datetime.strptime(value, c.DATE_FORMAT).date()
    except ValueError:
        raise ValueError(f"'{value}' does not match {c.DATE_FORMAT_DISPLAY}") from None


# column name -> (Trade field, converter)
FIELD_PARSERS: dict[str, tuple[str, Callable[[str], Any]]] = {
    c.COL_TRADE_ID: ("trade_id", parse_int),
    c.COL_TYPE: ("side", _parse_side),
    c.COL_DATE: ("date", _parse_date),
    c.COL_SECURITY: ("security", str),
    c.COL_AMOUNT: ("quantity", parse_int),
    c.COL_PRICE: ("price", parse_decimal),
    c.COL_FEE: ("fee", parse_decimal),
}

_COLUMN_BY_FIELD = {field: column for column, (field, _) in FIELD_PARSERS.items()}
_COLUMN_BY_FIELD["client"] = c.COL_CLIENT


class TradeCsvReader:
    """Reads and validates trade records from a delimited text file."""

    def __init__(self, file_path: Path, delimiter: str = c.DELIMITER):
        """Initialize the reader.

        Args:
            file_path: Path to the trade file.
            delimiter: Column delimiter.
        """
        self.file_path = Path(file_path)
        self.delimiter = delimiter

    def load_trades(self) -> TradeReadResult:
        """Load and parse all trades from the file.

        File-level problems (missing file, empty file, unreadable content)
        produce a single line-0 error with ``fatal`` set.

        Returns:
            TradeReadResult with parsed trades, errors and client names.
        """
        if not self.file_path.exists():
            return self._fatal(c.MSG_FILE_NOT_FOUND.format(self.file_path))

        try:
            if self.file_path.stat().st_size == 0:
                return self._fatal(c.MSG_FILE_EMPTY)
            text = self.file_path.read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Could not read %s: %s", self.file_path, e)
            return self._fatal(c.MSG_PROCESS_FAILED.format(e))

        logger.info("Loading trades from %s", self.file_path)
        return self.parse_text(text)

    def parse_text(self, text: str) -> TradeReadResult:
        """Parse trade records from in-memory text.

        Args:
            text: Full file content including the header row.

        Returns:
            TradeReadResult with parsed trades, errors and client names.
        """
        # header is line 1; blank lines are dropped before numbering
        non_empty = [line for line in text.splitlines() if line.strip()]
        lines = list(enumerate(non_empty, start=1))

        if len(lines) < 2:
            return self._fatal(c.MSG_INSUFFICIENT_ROWS)

        header_number, header_line = lines[0]
        index_map = self._create_index_map(header_line)

        missing = [col for col in c.REQUIRED_COLUMNS if col not in index_map]
        if missing:
            if len(missing) > 1:
                message = c.MSG_MISSING_REQUIRED_COLUMNS.format(", ".join(missing))
            else:
                message = c.MSG_MISSING_COLUMN.format(missing[0])
            return TradeReadResult(
                errors=[TradeReadError(line_number=header_number, raw_line=header_line, message=message)],
                fatal=True,
            )

        result = TradeReadResult()
        for number, line in lines[1:]:
            trade, errors = self._parse_row(line, number, index_map)
            if errors:
                for error in errors:
                    logger.debug(error.format())
                result.errors.extend(errors)
            else:
                result.trades.append(trade)

        result.clients = self.extract_clients(result.trades)

        row_count = len(lines) - 1
        if result.errors:
            logger.info(c.MSG_COMPLETED_WITH_ERRORS.format(len(result.trades), row_count))
        else:
            logger.info(c.MSG_COMPLETED.format(len(result.trades)))

        return result

    def _create_index_map(self, header_line: str) -> dict[str, int]:
        """Map lower-cased header names to their column positions."""
        headers = [h.strip().lower() for h in header_line.split(self.delimiter)]
        return {name: index for index, name in enumerate(headers)}

    def _parse_row(
        self,
        line: str,
        line_number: int,
        index_map: dict[str, int],
    ) -> tuple[Optional[Trade], list[TradeReadError]]:
        """Parse one data row.

        Returns:
            The trade (None if any field failed) and the row's errors.
        """
        parts = line.split(self.delimiter)

        if len(parts) != len(index_map):
            return None, [
                TradeReadError(
                    line_number=line_number,
                    raw_line=line,
                    message=c.MSG_COLUMN_MISMATCH.format(len(index_map), len(parts)),
                    field_name=c.STRUCTURE_FIELD,
                )
            ]

        errors: list[TradeReadError] = []
        values: dict[str, Any] = {}

        def add_error(message: str, column: str) -> None:
            errors.append(TradeReadError(
                line_number=line_number,
                raw_line=line,
                message=message,
                field_name=column,
            ))

        for column, (field, parser) in FIELD_PARSERS.items():
            index = index_map.get(column)
            if index is None:
                add_error(c.MSG_MISSING_COLUMN.format(column), column)
                continue

            value = parts[index].strip()
            if not value:
                add_error(c.MSG_EMPTY_FIELD, column)
                continue

            try:
                values[field] = parser(value)
            except ValueError as e:
                add_error(c.MSG_INVALID_FORMAT.format(column, e), column)

        # client is optional: absent column or empty value both mean no client
        client_index = index_map.get(c.COL_CLIENT)
        values["client"] = parts[client_index].strip() if client_index is not None else ""

        if errors:
            return None, errors

        try:
            return Trade(**values), []
        except ValidationError as e:
            for err in e.errors():
                field = str(err["loc"][0]) if err["loc"] else ""
                column = _COLUMN_BY_FIELD.get(field, field)
                add_error(c.MSG_INVALID_FORMAT.format(column, err["msg"]), column)
            return None, errors

    @staticmethod
    def extract_clients(trades: list[Trade]) -> list[str]:
        """Return distinct non-empty client names, sorted case-insensitively."""
        clients = {t.client for t in trades if t.client}
        return sorted(clients, key=lambda name: (name.casefold(), name))

    @staticmethod
    def _fatal(message: str) -> TradeReadResult:
        logger.error(message)
        return TradeReadResult(
            errors=[TradeReadError(line_number=0, message=message)],
            fatal=True,
        )
