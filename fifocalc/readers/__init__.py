"""Trade file readers for fifocalc."""

from fifocalc.readers.csv_reader import TradeCsvReader
from fifocalc.readers.numbers import parse_decimal, parse_int

__all__ = [
    "TradeCsvReader",
    "parse_decimal",
    "parse_int",
]
