"""Record sorters — pluggable orderings that return a new sorted list.

Every sorter is key-based and relies on Python's stable ``sorted``. With
``reverse=True`` the comparison is inverted while records with equal keys
keep their input order, so both directions are stable.
"""

from __future__ import annotations

import unicodedata
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from vendorctl.domain.records import stringify, to_number, to_timestamp
from vendorctl.domain.types import Record, RecordLike, SortDirection, SorterKind


class RecordSorter(ABC):
    """Order records by one field."""

    name: str = ""

    @abstractmethod
    def sort_key(self, value: Any) -> Any:
        """Map a raw field value to a comparable key."""

    def sort(
        self,
        records: Sequence[RecordLike],
        field: str,
        direction: SortDirection | str = SortDirection.ASC,
    ) -> list[Record]:
        """Return a new list of *records* ordered by *field*.

        The input sequence is never mutated.
        """
        descending = SortDirection(direction) is SortDirection.DESC
        return sorted(
            records,
            key=lambda record: self.sort_key(record.get(field)),
            reverse=descending,
        )


class AlphabeticSorter(RecordSorter):
    """Case-insensitive text order that files accented letters with their base letter.

    The primary key drops diacritics (NFKD, combining marks removed), so
    "Éclair" sorts among the e's. The casefolded original breaks ties, so
    "resume" precedes "résumé" deterministically.
    """

    name = SorterKind.ALPHABETIC

    def sort_key(self, value: Any) -> tuple[str, str]:
        text = stringify(value).casefold()
        return _strip_accents(text), text


class NumericSorter(RecordSorter):
    """Numeric order; non-numeric values sort as 0."""

    name = SorterKind.NUMERIC

    def sort_key(self, value: Any) -> float:
        return to_number(value)


class ChronologicalSorter(RecordSorter):
    """Date/time order; unparsable or missing values sort as the epoch."""

    name = SorterKind.CHRONOLOGICAL

    def sort_key(self, value: Any) -> float:
        return to_timestamp(value)


def _strip_accents(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


def _builtin_sorter_map() -> dict[str, type[RecordSorter]]:
    return {
        SorterKind.ALPHABETIC: AlphabeticSorter,
        SorterKind.NUMERIC: NumericSorter,
        SorterKind.CHRONOLOGICAL: ChronologicalSorter,
    }


SORTER_REGISTRY: dict[str, type[RecordSorter]] = dict(_builtin_sorter_map())


def get_sorter(name: str) -> RecordSorter:
    """Instantiate the sorter registered under *name*.

    Raises:
        KeyError: if no sorter is registered under that name.
    """
    try:
        sorter_cls = SORTER_REGISTRY[name]
    except KeyError:
        msg = f"No record sorter registered as {name!r}"
        raise KeyError(msg) from None
    return sorter_cls()


def register_sorter(name: str, sorter_cls: type[RecordSorter]) -> None:
    """Register a custom sorter class under *name*."""
    normalized_name = name.strip()
    if not normalized_name:
        msg = "Sorter name must not be empty"
        raise ValueError(msg)

    if not (isinstance(sorter_cls, type) and issubclass(sorter_cls, RecordSorter)):
        msg = f"Sorter {normalized_name!r} must extend RecordSorter"
        raise TypeError(msg)

    if normalized_name in _builtin_sorter_map():
        msg = f"Sorter {normalized_name!r} conflicts with a built-in registration"
        raise ValueError(msg)

    existing = SORTER_REGISTRY.get(normalized_name)
    if existing is not None and existing is not sorter_cls:
        msg = f"Sorter {normalized_name!r} is already registered"
        raise ValueError(msg)

    SORTER_REGISTRY[normalized_name] = sorter_cls


def available_sorters() -> list[str]:
    """Names of all registered sorters, built-ins first."""
    return list(SORTER_REGISTRY)
