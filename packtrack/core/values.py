"""Lenient value conversions shared by the CSV codec and the store client.

Dates are stored internally as ISO ``YYYY-MM-DD``. Spreadsheet and CSV
files carry them as ``D/M/YYYY``; anything else passes through unchanged.
"""

import math
import re
from datetime import date
from typing import Any

_DISPLAY_DATE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")
_ISO_DATE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
_LEADING_NUMBER = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def parse_number(value: Any) -> float:
    """Parse a number the way a lenient spreadsheet import does.

    Strings are parsed from their leading numeric prefix ("12 pcs" -> 12).
    Anything unparseable, NaN or infinite becomes 0.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        match = _LEADING_NUMBER.match(str(value).strip())
        if not match:
            return 0.0
        number = float(match.group(0))
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def to_quantity(value: Any) -> float:
    """Parse a count, coercing negatives to 0."""
    return max(parse_number(value), 0.0)


def format_number(value: float) -> str:
    """Render whole numbers without a fractional part (3.0 -> "3")."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def to_iso_date(text: str | None) -> str:
    """Convert ``D/M/YYYY`` to zero-padded ISO; other strings are returned as-is."""
    if not text:
        return ""
    match = _DISPLAY_DATE.match(text.strip())
    if not match:
        return text
    day, month, year = match.groups()
    return f"{year}-{month.zfill(2)}-{day.zfill(2)}"


def to_display_date(iso: str, sep: str = "/") -> str:
    """Convert ISO ``YYYY-MM-DD`` to ``DD/MM/YYYY`` (or ``DD-MM-YYYY``).

    Strings that are not ISO dates are returned unchanged.
    """
    match = _ISO_DATE.match(iso or "")
    if not match:
        return iso
    year, month, day = match.groups()
    return sep.join((day, month, year))


def parse_iso_date(text: str | None) -> date | None:
    """Parse an ISO ``YYYY-MM-DD`` string; None if it is not a valid date."""
    match = _ISO_DATE.match(text or "")
    if not match:
        return None
    try:
        return date(*(int(part) for part in match.groups()))
    except ValueError:
        return None
