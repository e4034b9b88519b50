"""
Books - number/date coercion.

Responsibility:
- Turn loosely-typed input (strings from editable cells, JSON from other
  services, missing fields) into canonical floats and ISO calendar dates.

Design notes:
- Nothing here raises. Garbage becomes 0 (numbers) or today (dates), so
  callers auditing data must read 0 as "unknown", not "zero quantity".
- The date parser is a heuristic, not a validator: ambiguous or malformed
  dates silently become today's date.
"""

from __future__ import annotations

import math
import re
from datetime import date, datetime
from typing import Any, Optional

_ISO_DATE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
_ISO_TIMESTAMP = re.compile(r"^(\d{4}-\d{2}-\d{2})[T ]")
_SLASH_DATE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{2}|\d{4})$")


def _today(today: Optional[date]) -> date:
    return today or date.today()


def to_number(value: Any) -> float:
    """
    Coerce a value into a finite float, defaulting to 0.0.

    Supports:
    - ints / floats (NaN, +/-inf and ints too large for a float become 0.0)
    - "12.5", " 1,234.50 " (whitespace and thousands separators)
    - None, "", objects -> 0.0
    """
    if value is None:
        return 0.0
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return 0.0
    elif isinstance(value, str):
        cleaned = value.strip().replace(",", "")
        if not cleaned:
            return 0.0
        try:
            number = float(cleaned)
        except ValueError:
            return 0.0
    else:
        try:
            number = float(value)
        except (TypeError, ValueError, OverflowError):
            return 0.0
    return number if math.isfinite(number) else 0.0


def to_iso_date(value: Any, today: Optional[date] = None) -> str:
    """
    Best-effort conversion to an ISO calendar date string (YYYY-MM-DD).

    - empty -> today
    - "2024-03-04" -> unchanged
    - "2024-03-04T10:00:00Z" -> "2024-03-04"
    - "3/4/2024" -> "2024-03-04", "3/4/24" -> "2024-03-04"
    - date / datetime objects -> their calendar date
    - anything else -> today
    """
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()

    text = str(value).strip() if value is not None else ""
    if not text:
        return _today(today).isoformat()

    if _ISO_DATE.match(text):
        return text

    stamp = _ISO_TIMESTAMP.match(text)
    if stamp:
        return stamp.group(1)

    slash = _SLASH_DATE.match(text)
    if slash:
        month, day, year = slash.groups()
        if len(year) == 2:
            year = f"20{year}"
        return f"{year}-{int(month):02d}-{int(day):02d}"

    return _today(today).isoformat()


def to_date(value: Any, today: Optional[date] = None) -> date:
    """
    Like to_iso_date, but returns a datetime.date.

    Strings that look like dates but are not real calendar days
    (e.g. "2024-02-31") fall back to today.
    """
    iso = to_iso_date(value, today=today)
    try:
        return date.fromisoformat(iso)
    except ValueError:
        return _today(today)


def format_date(value: Any) -> str:
    """
    Display form MM/DD/YYYY for an ISO date (string or date object).

    Empty input yields "". Strings that are not ISO dates come back unchanged.
    """
    if isinstance(value, datetime):
        value = value.date()
    if isinstance(value, date):
        return f"{value.month:02d}/{value.day:02d}/{value.year:04d}"

    text = str(value).strip() if value is not None else ""
    if not text:
        return ""

    match = _ISO_DATE.match(text)
    if not match:
        return text
    year, month, day = match.groups()
    return f"{month}/{day}/{year}"
