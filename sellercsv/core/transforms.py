"""Reusable value transforms for Amazon report columns.

Seller Central exports format numbers for humans: "$1,234.50", "12.5%",
"1,000". The transforms here turn such strings into numbers. They never raise
for malformed data; an unparsable value becomes ``nan`` so the validator can
report it as an invalid number for the right column and row.
"""

import math
import re
import unicodedata
from typing import Any

from sellercsv.core.schema import ColumnTransform

_NON_NUMERIC = re.compile(r"[^0-9.\-]")


def to_number(value: Any) -> float:
    """Coerce a raw cell value to a number.

    Booleans become 0/1, numbers pass through, strings are stripped and parsed.
    Empty strings are 0, anything unparsable is ``nan``.

    Example:
        >>> to_number(" 42 ")
        42.0
        >>> math.isnan(to_number("abc"))
        True
    """
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        return value
    if value is None:
        return 0.0

    text = str(value).strip()
    if not text:
        return 0.0
    # float() accepts digit separators that spreadsheet exports never contain
    if "_" in text:
        return math.nan
    try:
        return float(text)
    except ValueError:
        return math.nan


def is_finite_number(value: Any) -> bool:
    """Return True if the value coerces to a finite number."""
    number = to_number(value)
    return not (math.isnan(number) or math.isinf(number))


def strip_percent(value: Any) -> float:
    """Remove a percent sign and convert to a number ("5%" -> 5.0)."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    return to_number(str(value).replace("%", ""))


def strip_currency(value: Any) -> float:
    """Remove a dollar sign and thousands separators ("$1,250.00" -> 1250.0)."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    return to_number(str(value).replace("$", "").replace(",", ""))


def parse_csv_number(text: str) -> float:
    """Leniently extract a number, dropping every non-numeric character.

    Returns 0.0 when nothing numeric is left.

    Example:
        >>> parse_csv_number("USD 1,299.99")
        1299.99
    """
    cleaned = _NON_NUMERIC.sub("", text)
    try:
        return float(cleaned)
    except ValueError:
        return 0.0


def sanitize_string(text: str) -> str:
    """Trim whitespace and remove angle brackets and control characters."""
    cleaned = text.strip().replace("<", "").replace(">", "")
    return "".join(ch for ch in cleaned if unicodedata.category(ch) != "Cc")


PERCENT_TO_NUMBER = ColumnTransform(
    strip_percent, "Remove percentage sign and convert to number"
)
CURRENCY_TO_NUMBER = ColumnTransform(
    strip_currency, "Remove dollar sign and convert to number"
)
TO_NUMBER = ColumnTransform(to_number, "Convert to number")
SANITIZE = ColumnTransform(sanitize_string, "Trim and strip unsafe characters")
