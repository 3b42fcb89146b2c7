"""Notifier — synchronous publish/subscribe shared by store, view, and history.

INVARIANT: Observer failures are logged, never raised. One faulty
observer cannot block delivery to the others or unwind into the mutator.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)

Observer = Callable[[str, Any], None]
Unsubscribe = Callable[[], None]


class Notifier:
    """Ordered list of observers for one logical event source.

    Parameters:
        source: Name used in log messages (e.g. ``"store"``).
    """

    def __init__(self, source: str = "notifier") -> None:
        self._source = source
        self._observers: list[Observer] = []

    def subscribe(self, observer: Observer) -> Unsubscribe:
        """Add *observer* and return a callable that removes it.

        Subscribing an already-subscribed observer is a no-op; the
        returned callable is safe to call more than once.
        """
        if observer not in self._observers:
            self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def notify(self, event: str, payload: Any = None) -> None:
        """Deliver ``(event, payload)`` to every observer in subscription order."""
        for observer in list(self._observers):
            try:
                observer(event, payload)
            except Exception:
                logger.warning(
                    "Observer %r failed on %s event %r",
                    observer,
                    self._source,
                    event,
                    exc_info=True,
                )

    def clear(self) -> None:
        self._observers.clear()

    def __len__(self) -> int:
        return len(self._observers)
