"""RecordStore — the canonical, identity-keyed record collection.

The store owns private copies of its records; every read returns a copy.
Lookups are linear scans, which is fine for an administrative list.

Lookup misses return ``None`` rather than raising. Every successful
mutation notifies subscribers synchronously, after the mutation is
applied and before the call returns.

Events and payloads:

- ``data_loaded``: ``{"records": [...], "count": n}``
- ``added``: ``{"id": key, "record": {...}, "position": i}``
- ``updated``: ``{"id": key, "record": {...}, "previous": {...}}``
- ``deleted``: ``{"id": key, "record": {...}, "position": i}``
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from vendorctl.domain.records import copy_record
from vendorctl.domain.types import Record, RecordLike, StoreEvent
from vendorctl.engine.notifier import Notifier, Observer, Unsubscribe

logger = logging.getLogger(__name__)


class RecordStore:
    """Mutable record collection with CRUD primitives.

    Parameters:
        primary_key: Name of the identity field shared by all records.
    """

    def __init__(self, primary_key: str = "id") -> None:
        self._primary_key = primary_key
        self._records: list[Record] = []
        self._notifier = Notifier("store")

    @property
    def primary_key(self) -> str:
        return self._primary_key

    # ------------------------------------------------------------------
    # Observation
    # ------------------------------------------------------------------

    def subscribe(self, observer: Observer) -> Unsubscribe:
        return self._notifier.subscribe(observer)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def set_all(self, records: Iterable[RecordLike]) -> None:
        """Replace the whole collection.

        Records without a usable identity key (absent or unhashable), or
        repeating a key already seen, are skipped with a warning.
        """
        loaded: list[Record] = []
        seen: set[Any] = set()
        for record in records:
            key = record.get(self._primary_key)
            if key is None:
                logger.warning("Skipping record without %r field", self._primary_key)
                continue
            if not is_hashable_key(key):
                logger.warning("Skipping record with unhashable %s=%r", self._primary_key, key)
                continue
            if key in seen:
                logger.warning("Skipping duplicate record %s=%r", self._primary_key, key)
                continue
            seen.add(key)
            loaded.append(copy_record(record))

        self._records = loaded
        logger.debug("Loaded %d records", len(loaded))
        self._notifier.notify(
            StoreEvent.DATA_LOADED,
            {"records": self.get_all(), "count": len(loaded)},
        )

    def add(self, record: RecordLike, *, position: int | None = None) -> Record | None:
        """Append *record* (or insert it at *position*).

        Returns a copy of the stored record, or None when the record has
        no usable identity key or its key is already present.
        """
        key = record.get(self._primary_key)
        if key is None:
            logger.warning("Rejected record without %r field", self._primary_key)
            return None
        if not is_hashable_key(key):
            logger.warning("Rejected record with unhashable %s=%r", self._primary_key, key)
            return None
        if self.index_of(key) is not None:
            logger.warning("Rejected duplicate record %s=%r", self._primary_key, key)
            return None

        stored = copy_record(record)
        if position is None or position >= len(self._records):
            self._records.append(stored)
            index = len(self._records) - 1
        else:
            index = max(position, 0)
            self._records.insert(index, stored)

        self._notifier.notify(
            StoreEvent.ADDED,
            {"id": key, "record": copy_record(stored), "position": index},
        )
        return copy_record(stored)

    def update(self, record_id: Any, fields: RecordLike) -> Record | None:
        """Merge *fields* into the record identified by *record_id*.

        Returns the updated record, or None if the id is absent or
        *fields* tries to change the identity key.
        """
        index = self.index_of(record_id)
        if index is None:
            return None
        new_key = fields.get(self._primary_key, record_id)
        if new_key != record_id:
            logger.warning(
                "Rejected update changing %s from %r to %r",
                self._primary_key,
                record_id,
                new_key,
            )
            return None

        previous = self._records[index]
        self._records[index] = {**previous, **fields}
        return self._notify_updated(record_id, index, previous)

    def replace(self, record_id: Any, record: RecordLike) -> Record | None:
        """Swap the record identified by *record_id* for *record* wholesale.

        The identity key is forced to *record_id*. Returns the new record,
        or None if the id is absent.
        """
        index = self.index_of(record_id)
        if index is None:
            return None

        previous = self._records[index]
        replacement = copy_record(record)
        replacement[self._primary_key] = record_id
        self._records[index] = replacement
        return self._notify_updated(record_id, index, previous)

    def delete(self, record_id: Any) -> Record | None:
        """Remove and return the record identified by *record_id* (None if absent)."""
        index = self.index_of(record_id)
        if index is None:
            return None

        removed = self._records.pop(index)
        self._notifier.notify(
            StoreEvent.DELETED,
            {"id": record_id, "record": copy_record(removed), "position": index},
        )
        return copy_record(removed)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get(self, record_id: Any) -> Record | None:
        index = self.index_of(record_id)
        if index is None:
            return None
        return copy_record(self._records[index])

    def get_all(self) -> list[Record]:
        return [copy_record(record) for record in self._records]

    def index_of(self, record_id: Any) -> int | None:
        for index, record in enumerate(self._records):
            if record.get(self._primary_key) == record_id:
                return index
        return None

    def snapshot(self) -> dict[Any, Record]:
        """Identity key -> record copy, for equality checks and diffs."""
        return {record[self._primary_key]: copy_record(record) for record in self._records}

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, record_id: object) -> bool:
        return self.index_of(record_id) is not None

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _notify_updated(self, record_id: Any, index: int, previous: Record) -> Record:
        current = copy_record(self._records[index])
        self._notifier.notify(
            StoreEvent.UPDATED,
            {"id": record_id, "record": current, "previous": copy_record(previous)},
        )
        return copy_record(current)


def is_hashable_key(key: Any) -> bool:
    """Whether *key* can serve as an identity key (it must hash for snapshots)."""
    try:
        hash(key)
    except TypeError:
        return False
    return True
