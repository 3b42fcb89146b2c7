"""Pluggy hook specifications for vendorctl record events and setup extensions.

Four lifecycle hooks mirror the RecordStore events. Two setup-time hooks
let plugins contribute extra search matchers and record sorters.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pluggy

if TYPE_CHECKING:
    from vendorctl.domain.matchers import SearchMatcher
    from vendorctl.domain.sorters import RecordSorter

hookspec = pluggy.HookspecMarker("vendorctl")


class VendorHookSpec:
    """Hook specifications for the vendorctl plugin system."""

    @hookspec
    def post_load(self, count: int, primary_key: str) -> None:
        """Called after the record collection is replaced."""

    @hookspec
    def post_add(self, record_id: Any, record: dict[str, Any]) -> None:
        """Called after a record is added."""

    @hookspec
    def post_update(
        self,
        record_id: Any,
        record: dict[str, Any],
        previous: dict[str, Any],
    ) -> None:
        """Called after a record is updated."""

    @hookspec
    def post_delete(self, record_id: Any, record: dict[str, Any]) -> None:
        """Called after a record is deleted."""

    @hookspec
    def register_search_matchers(self) -> dict[str, type[SearchMatcher]] | None:
        """Return name -> SearchMatcher mappings to extend MATCHER_REGISTRY."""

    @hookspec
    def register_record_sorters(self) -> dict[str, type[RecordSorter]] | None:
        """Return name -> RecordSorter mappings to extend SORTER_REGISTRY."""
