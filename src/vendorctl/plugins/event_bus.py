"""Synchronous dispatch of store events to pluggy hooks.

:class:`EventBus` subscribes to a RecordStore and turns each store event
into the matching ``post_*`` hook call.

INVARIANT: Plugin failures are warnings, never errors. A failing hook is
logged and appended to :attr:`EventBus.failures`; the store mutation that
triggered it is unaffected.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from vendorctl.domain.types import StoreEvent

if TYPE_CHECKING:
    from vendorctl.engine.notifier import Unsubscribe
    from vendorctl.engine.store import RecordStore
    from vendorctl.plugins.manager import PluginManager

logger = logging.getLogger(__name__)


class EventBus:
    """Bridge from RecordStore notifications to plugin hooks.

    Parameters:
        plugin_manager: Loaded PluginManager for hook dispatch.
    """

    def __init__(self, plugin_manager: PluginManager) -> None:
        self._pm = plugin_manager
        self._detach: list[Unsubscribe] = []
        self.failures: list[dict[str, Any]] = []

    def attach(self, store: RecordStore) -> None:
        """Start forwarding events from *store*."""
        primary_key = store.primary_key

        def forward(event: str, payload: dict[str, Any]) -> None:
            if event == StoreEvent.DATA_LOADED:
                self.dispatch("post_load", {"count": payload["count"], "primary_key": primary_key})
            elif event == StoreEvent.ADDED:
                self.dispatch("post_add", {"record_id": payload["id"], "record": payload["record"]})
            elif event == StoreEvent.UPDATED:
                self.dispatch(
                    "post_update",
                    {
                        "record_id": payload["id"],
                        "record": payload["record"],
                        "previous": payload["previous"],
                    },
                )
            elif event == StoreEvent.DELETED:
                self.dispatch(
                    "post_delete", {"record_id": payload["id"], "record": payload["record"]}
                )

        self._detach.append(store.subscribe(forward))

    def dispatch(self, hook_name: str, payload: dict[str, Any]) -> bool:
        """Call *hook_name* with *payload*. Returns False if the hook raised."""
        hook_fn = getattr(self._pm.hook, hook_name, None)
        if hook_fn is None:
            return True
        try:
            hook_fn(**payload)
        except Exception as exc:
            logger.warning("Hook %s failed: %s", hook_name, exc, exc_info=True)
            self.failures.append({"hook_name": hook_name, "error": str(exc)})
            return False
        return True

    def shutdown(self) -> None:
        """Stop forwarding events from every attached store."""
        for detach in self._detach:
            detach()
        self._detach.clear()
