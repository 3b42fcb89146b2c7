"""Aggregate statistics over record sequences.

Numeric aggregates coerce values with :func:`to_number`, so missing or
non-numeric fields count as 0.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from vendorctl.domain.records import to_number
from vendorctl.domain.types import RecordLike


def sum_field(records: Sequence[RecordLike], field: str) -> float:
    return sum((to_number(record.get(field)) for record in records), 0.0)


def average(records: Sequence[RecordLike], field: str) -> float:
    if not records:
        return 0.0
    return sum_field(records, field) / len(records)


def maximum(records: Sequence[RecordLike], field: str) -> float | None:
    """Largest coerced value, or None for an empty sequence."""
    if not records:
        return None
    return max(to_number(record.get(field)) for record in records)


def minimum(records: Sequence[RecordLike], field: str) -> float | None:
    """Smallest coerced value, or None for an empty sequence."""
    if not records:
        return None
    return min(to_number(record.get(field)) for record in records)


def count_equal(records: Sequence[RecordLike], field: str, value: Any) -> int:
    return sum(1 for record in records if record.get(field) == value)


def group_by(records: Sequence[RecordLike], field: str) -> dict[Any, list[RecordLike]]:
    """Group records by the raw value of *field*, in first-seen order."""
    groups: dict[Any, list[RecordLike]] = {}
    for record in records:
        groups.setdefault(record.get(field), []).append(record)
    return groups


def summarize(records: Sequence[RecordLike], field: str) -> dict[str, Any]:
    """Count, sum, average, min, and max of *field* in one mapping."""
    return {
        "count": len(records),
        "sum": sum_field(records, field),
        "average": average(records, field),
        "min": minimum(records, field),
        "max": maximum(records, field),
    }
