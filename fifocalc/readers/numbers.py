"""Locale-aware number parsing for trade files.

Trade files use a comma as the decimal separator and a dot as the
thousands separator (``1.234,56``).
"""

import re
from decimal import Decimal, InvalidOperation

CURRENCY_SYMBOLS = "€$"

_NUMBER_RE = re.compile(r"^[+-]?(\d{1,3}(\.\d{3})+|\d+)(,\d+)?$")


def parse_decimal(text: str) -> Decimal:
    """Parse a comma-decimal, dot-thousands number into a Decimal.

    Whitespace (including no-break spaces) and a leading or trailing
    currency symbol are ignored.

    Args:
        text: Raw field value.

    Returns:
        Parsed decimal value.

    Raises:
        ValueError: If the value is not a valid number.
    """
    cleaned = "".join(text.split()).strip(CURRENCY_SYMBOLS)

    if not cleaned:
        raise ValueError(f"'{text}' is not a number")

    if not _NUMBER_RE.match(cleaned):
        raise ValueError(f"'{text}' is not a valid number (expected format 1.234,56)")

    try:
        return Decimal(cleaned.replace(".", "").replace(",", "."))
    except InvalidOperation as e:
        raise ValueError(f"'{text}' is not a valid number") from e


def parse_int(text: str) -> int:
    """Parse a plain integer field.

    Raises:
        ValueError: If the value is not an integer.
    """
    value = text.strip()
    if not re.fullmatch(r"[+-]?\d+", value):
        raise ValueError(f"'{text}' is not a valid integer")
    return int(value)
