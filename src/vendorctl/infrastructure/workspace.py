"""Workspace — the context object owning one store, view, and history.

The Workspace is constructed once at startup and handed to every
consumer (services, CLI). It keeps the view in step with the store:
every store event triggers ``view.set_data(store.get_all())`` before the
mutating call returns.

The triad is not safe for concurrent mutation on its own. All mutating
entry points here run under a single re-entrant lock; callers that need
several steps to be atomic can hold :meth:`locked` around them.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

from vendorctl.config.settings import VendorSettings
from vendorctl.domain.matchers import get_matcher
from vendorctl.domain.sorters import get_sorter
from vendorctl.engine.history import Command, RecordHistory
from vendorctl.engine.store import RecordStore
from vendorctl.engine.view import RecordView

if TYPE_CHECKING:
    from vendorctl.domain.types import RecordLike
    from vendorctl.engine.notifier import Unsubscribe
    from vendorctl.plugins.event_bus import EventBus
    from vendorctl.plugins.manager import PluginManager

logger = logging.getLogger(__name__)


class Workspace:
    """Store + view + history wired together for one session.

    Parameters:
        settings: Resolved settings (defaults when omitted).
        view: Existing view to drive, e.g. from
            :func:`~vendorctl.engine.view.get_or_create_view`. A new view
            built from settings is used when omitted.
    """

    def __init__(
        self,
        settings: VendorSettings | None = None,
        *,
        view: RecordView | None = None,
    ) -> None:
        self._settings = settings or VendorSettings()
        self._lock = threading.RLock()
        self._event_bus: EventBus | None = None

        self.store = RecordStore(primary_key=self._settings.view.primary_key)
        self.view = view or build_view(self._settings)
        self.history = RecordHistory(max_depth=self._settings.history.max_depth)

        self._unsubscribe: Unsubscribe = self.store.subscribe(self._sync_view)

    @property
    def settings(self) -> VendorSettings:
        return self._settings

    @property
    def event_bus(self) -> EventBus | None:
        """The plugin event bus (None until :meth:`init_event_bus`)."""
        return self._event_bus

    @contextmanager
    def locked(self) -> Iterator[Workspace]:
        """Hold the workspace lock for a multi-step operation."""
        with self._lock:
            yield self

    def load(self, records: Iterable[RecordLike]) -> None:
        """Replace the store contents. History from a previous load is dropped."""
        with self._lock:
            self.store.set_all(records)
            self.history.clear()

    def execute(self, command: Command) -> None:
        with self._lock:
            self.history.execute_command(command)

    def undo(self) -> Command | None:
        with self._lock:
            return self.history.undo()

    def redo(self) -> Command | None:
        with self._lock:
            return self.history.redo()

    def init_event_bus(self, plugin_manager: PluginManager | None = None) -> EventBus:
        """Forward store events to plugin hooks.

        Plugins are discovered from settings unless an already-loaded
        *plugin_manager* is given.
        """
        from vendorctl.plugins.event_bus import EventBus

        pm = plugin_manager or load_plugins(self._settings)
        bus = EventBus(pm)
        bus.attach(self.store)
        self._event_bus = bus
        return bus

    def close(self) -> None:
        """Detach the view and the event bus from the store."""
        self._unsubscribe()
        if self._event_bus is not None:
            self._event_bus.shutdown()
            self._event_bus = None

    def _sync_view(self, event: str, payload: Any) -> None:
        self.view.set_data(self.store.get_all())


def load_plugins(settings: VendorSettings) -> PluginManager:
    """Discover entry-point plugins plus the configured local plugin directory.

    Strategy names contributed by plugins are registered as a side effect,
    so call this before :func:`build_view` when the config names a
    plugin-provided matcher or sorter.
    """
    from vendorctl.plugins.manager import PluginManager

    pm = PluginManager()
    local_dir = settings.plugin_dir if settings.plugins.enabled else None
    names = pm.discover_and_load(local_dir=local_dir)
    logger.debug("Plugins loaded: %s", names)
    return pm


def build_view(settings: VendorSettings) -> RecordView:
    """Create a RecordView using the configured matcher and sorter.

    Raises:
        KeyError: if a configured strategy name is not registered.
    """
    return RecordView(
        matcher=get_matcher(settings.view.matcher),
        sorter=get_sorter(settings.view.sorter),
    )
