"""Record aliases, sort specification, and event/strategy enums."""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from typing import Any

from pydantic import BaseModel

Record = dict[str, Any]
"""A single vendor/client: field name -> scalar value."""

RecordLike = Mapping[str, Any]


class SortDirection(StrEnum):
    """Direction of the active sort."""

    ASC = "asc"
    DESC = "desc"

    def toggled(self) -> SortDirection:
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC


class SortSpec(BaseModel):
    """The currently active sort field and direction."""

    model_config = {"frozen": True}

    field: str
    direction: SortDirection = SortDirection.ASC


class MatcherKind(StrEnum):
    """Names of the built-in search matchers."""

    EXACT = "exact"
    PARTIAL = "partial"
    CASE_INSENSITIVE = "case_insensitive"
    PATTERN = "pattern"


class SorterKind(StrEnum):
    """Names of the built-in record sorters."""

    ALPHABETIC = "alphabetic"
    NUMERIC = "numeric"
    CHRONOLOGICAL = "chronological"


class StoreEvent(StrEnum):
    """Events published by RecordStore."""

    DATA_LOADED = "data_loaded"
    ADDED = "added"
    UPDATED = "updated"
    DELETED = "deleted"


class ViewEvent(StrEnum):
    """Events published by RecordView."""

    DATA_CHANGED = "data_changed"
    FILTERS_CHANGED = "filters_changed"
    SORT_CHANGED = "sort_changed"
    STRATEGY_CHANGED = "strategy_changed"
    COLUMNS_CHANGED = "columns_changed"


class HistoryEvent(StrEnum):
    """Events published by RecordHistory."""

    EXECUTED = "executed"
    UNDONE = "undone"
    REDONE = "redone"
    CLEARED = "cleared"
