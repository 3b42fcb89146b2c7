"""RecordView — reactive derived state over the record collection.

The view owns a copy of the raw records plus the active filters, sort,
matcher, and sorter. Every change recomputes the derived view
synchronously in two fixed phases:

1. filter: keep records for which *every* active filter matches
   (``matcher.match(record.get(field), term)``);
2. sort: if a sort is active, order the survivors with the active sorter.

Then subscribers are notified. The derived view is never stale after a
call returns.

Singleton access goes through :func:`get_or_create_view`. The first call
creates the process-wide instance; later calls return it unchanged and
ignore their arguments. There is no re-initialisation.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Any

from vendorctl.domain.matchers import PartialMatcher, SearchMatcher
from vendorctl.domain.records import copy_record
from vendorctl.domain.sorters import AlphabeticSorter, RecordSorter
from vendorctl.domain.types import Record, RecordLike, SortDirection, SortSpec, ViewEvent
from vendorctl.engine.notifier import Notifier, Observer, Unsubscribe

logger = logging.getLogger(__name__)


class RecordView:
    """Filtered and sorted projection of a record sequence.

    Parameters:
        matcher: Search matcher applied to all filters (default: partial).
        sorter: Sorter applied to the active sort field (default: alphabetic).
    """

    def __init__(
        self,
        *,
        matcher: SearchMatcher | None = None,
        sorter: RecordSorter | None = None,
    ) -> None:
        self._records: list[Record] = []
        self._derived: list[Record] = []
        self._filters: dict[str, str] = {}
        self._sort: SortSpec | None = None
        self._columns: list[str] = []
        self._matcher: SearchMatcher = matcher or PartialMatcher()
        self._sorter: RecordSorter = sorter or AlphabeticSorter()
        self._notifier = Notifier("view")

    # ------------------------------------------------------------------
    # Observation
    # ------------------------------------------------------------------

    def subscribe(self, observer: Observer) -> Unsubscribe:
        return self._notifier.subscribe(observer)

    # ------------------------------------------------------------------
    # State changes
    # ------------------------------------------------------------------

    def set_data(self, records: Iterable[RecordLike]) -> None:
        self._records = [copy_record(record) for record in records]
        self._recompute()
        self._notifier.notify(ViewEvent.DATA_CHANGED, {"records": self.derived_view})

    def set_filter(self, field: str, term: str | None) -> None:
        """Set the search term for *field*; an empty or None term removes it."""
        if term:
            self._filters[field] = term
        else:
            self._filters.pop(field, None)
        self._recompute()
        self._notifier.notify(ViewEvent.FILTERS_CHANGED, {"filters": self.filters})

    def clear_filters(self) -> None:
        self._filters.clear()
        self._recompute()
        self._notifier.notify(ViewEvent.FILTERS_CHANGED, {"filters": {}})

    def set_sort(self, field: str) -> None:
        """Sort by *field*, toggling direction if it is already the sort field."""
        if self._sort is not None and self._sort.field == field:
            self._sort = SortSpec(field=field, direction=self._sort.direction.toggled())
        else:
            self._sort = SortSpec(field=field, direction=SortDirection.ASC)
        self._recompute()
        self._notifier.notify(
            ViewEvent.SORT_CHANGED,
            {"field": field, "direction": self._sort.direction},
        )

    def clear_sort(self) -> None:
        self._sort = None
        self._recompute()
        self._notifier.notify(ViewEvent.SORT_CHANGED, {"field": None, "direction": None})

    def set_matcher(self, matcher: SearchMatcher) -> None:
        self._matcher = matcher
        self._recompute()
        self._notifier.notify(ViewEvent.STRATEGY_CHANGED, {"matcher": matcher.name})

    def set_sorter(self, sorter: RecordSorter) -> None:
        self._sorter = sorter
        self._recompute()
        self._notifier.notify(ViewEvent.STRATEGY_CHANGED, {"sorter": sorter.name})

    def set_columns(self, columns: Sequence[str]) -> None:
        self._columns = list(columns)
        self._notifier.notify(ViewEvent.COLUMNS_CHANGED, {"columns": self.columns})

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def derived_view(self) -> list[Record]:
        """The filtered and sorted records (copies)."""
        return [copy_record(record) for record in self._derived]

    def get_derived_view(self) -> list[Record]:
        return self.derived_view

    @property
    def total_count(self) -> int:
        return len(self._records)

    @property
    def filtered_count(self) -> int:
        return len(self._derived)

    @property
    def filters(self) -> dict[str, str]:
        return dict(self._filters)

    @property
    def sort_spec(self) -> SortSpec | None:
        return self._sort

    @property
    def matcher(self) -> SearchMatcher:
        return self._matcher

    @property
    def sorter(self) -> RecordSorter:
        return self._sorter

    @property
    def columns(self) -> list[str]:
        return list(self._columns)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _matches(self, record: Record) -> bool:
        return all(
            self._matcher.match(record.get(field), term) for field, term in self._filters.items()
        )

    def _recompute(self) -> None:
        derived = [record for record in self._records if self._matches(record)]
        if self._sort is not None:
            derived = self._sorter.sort(derived, self._sort.field, self._sort.direction)
        self._derived = derived


# ---------------------------------------------------------------------------
# Process-wide accessor
# ---------------------------------------------------------------------------

_instance: RecordView | None = None


def get_or_create_view(**kwargs: Any) -> RecordView:
    """Return the process-wide RecordView, creating it on first call.

    *kwargs* are passed to :class:`RecordView` only on the first call.
    Later calls return the existing instance and ignore their arguments.
    """
    global _instance
    if _instance is None:
        _instance = RecordView(**kwargs)
    elif kwargs:
        logger.debug("RecordView already created; ignoring arguments %s", sorted(kwargs))
    return _instance
