"""Record value helpers — stringification and scalar coercion.

Matchers, sorters, and statistics all read field values through these
helpers so that a value compares the same way everywhere.
"""

from __future__ import annotations

import math
from datetime import UTC, date, datetime
from typing import Any

from dateutil import parser as date_parser

from vendorctl.domain.types import Record, RecordLike


def stringify(value: Any) -> str:
    """Render a field value as search/sort text.

    Examples:
        >>> stringify(None)
        ''
        >>> stringify(True)
        'true'
        >>> stringify(30.0)
        '30'
        >>> stringify(date(2024, 1, 15))
        '2024-01-15'
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def to_number(value: Any) -> float:
    """Coerce a field value to a float. Anything non-numeric becomes 0.

    Examples:
        >>> to_number("12.5")
        12.5
        >>> to_number("abc")
        0.0
        >>> to_number(None)
        0.0
    """
    if value is None:
        return 0.0
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return 0.0
    elif not isinstance(value, (int, float)):
        return 0.0
    try:
        number = float(value)
    except (ValueError, OverflowError):
        return 0.0
    if math.isnan(number):
        return 0.0
    return number


def to_timestamp(value: Any) -> float:
    """Coerce a field value to milliseconds since the Unix epoch.

    Accepts datetimes, dates, numbers (already in milliseconds), and date
    strings: ISO-8601 first, then the free-form shapes dateutil understands
    ("2024/03/01", "Jan 5, 2020"). Naive datetimes are read as UTC.
    Absent or unparsable values map to epoch zero.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return 0.0 if math.isnan(value) else float(value)
    if isinstance(value, datetime):
        return _datetime_ms(value)
    if isinstance(value, date):
        return _datetime_ms(datetime(value.year, value.month, value.day))
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            try:
                parsed = date_parser.parse(text)
            except (ValueError, OverflowError):
                return 0.0
        return _datetime_ms(parsed)
    return 0.0


def _datetime_ms(value: datetime) -> float:
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.timestamp() * 1000


def copy_record(record: RecordLike) -> Record:
    """Return an independent shallow copy of *record*."""
    return dict(record)
