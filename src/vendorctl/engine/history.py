"""Reversible record commands and the undo/redo history.

Each command owns exactly the state it needs to reverse itself:

- :class:`AddVendorCommand` remembers the new record's key and whether
  the add actually happened.
- :class:`UpdateVendorCommand` snapshots the record before the update.
- :class:`DeleteVendorCommand` keeps the removed record and its position.

Snapshots are captured on ``execute()``, so a redo re-captures fresh state.

INVARIANT: any fresh ``execute_command`` clears the redo stack.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

from vendorctl.domain.records import copy_record
from vendorctl.domain.types import HistoryEvent, Record, RecordLike
from vendorctl.engine.notifier import Notifier, Observer, Unsubscribe
from vendorctl.engine.store import RecordStore

logger = logging.getLogger(__name__)


class Command(ABC):
    """A reversible mutation bound to one RecordStore."""

    def __init__(self, store: RecordStore) -> None:
        self._store = store

    @abstractmethod
    def execute(self) -> None: ...

    @abstractmethod
    def undo(self) -> None: ...

    @property
    @abstractmethod
    def description(self) -> str: ...

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.description}>"


class AddVendorCommand(Command):
    def __init__(self, store: RecordStore, record: RecordLike) -> None:
        super().__init__(store)
        self._record: Record = copy_record(record)
        self._record_id = self._record.get(store.primary_key)
        self._applied = False

    @property
    def description(self) -> str:
        return f"add {self._record_id!r}"

    def execute(self) -> None:
        self._applied = self._store.add(self._record) is not None

    def undo(self) -> None:
        if self._applied:
            self._store.delete(self._record_id)
            self._applied = False


class UpdateVendorCommand(Command):
    def __init__(self, store: RecordStore, record_id: Any, fields: RecordLike) -> None:
        super().__init__(store)
        self._record_id = record_id
        self._fields: Record = copy_record(fields)
        self._previous: Record | None = None

    @property
    def description(self) -> str:
        return f"update {self._record_id!r} ({', '.join(self._fields)})"

    def execute(self) -> None:
        previous = self._store.get(self._record_id)
        updated = self._store.update(self._record_id, self._fields)
        self._previous = previous if updated is not None else None

    def undo(self) -> None:
        if self._previous is not None:
            self._store.replace(self._record_id, self._previous)
            self._previous = None


class DeleteVendorCommand(Command):
    def __init__(self, store: RecordStore, record_id: Any) -> None:
        super().__init__(store)
        self._record_id = record_id
        self._deleted: Record | None = None
        self._position: int | None = None

    @property
    def description(self) -> str:
        return f"delete {self._record_id!r}"

    def execute(self) -> None:
        self._position = self._store.index_of(self._record_id)
        self._deleted = self._store.delete(self._record_id)

    def undo(self) -> None:
        if self._deleted is not None:
            self._store.add(self._deleted, position=self._position)
            self._deleted = None
            self._position = None


class RecordHistory:
    """Undo and redo stacks of executed commands.

    Parameters:
        max_depth: Maximum undo entries kept; the oldest are dropped
            beyond it. None keeps everything.
    """

    def __init__(self, *, max_depth: int | None = None) -> None:
        self._undo_stack: list[Command] = []
        self._redo_stack: list[Command] = []
        self._max_depth = max_depth
        self._notifier = Notifier("history")

    def subscribe(self, observer: Observer) -> Unsubscribe:
        return self._notifier.subscribe(observer)

    def execute_command(self, command: Command) -> None:
        command.execute()
        self._push_undo(command)
        self._redo_stack.clear()
        logger.debug("Executed %s", command.description)
        self._notifier.notify(HistoryEvent.EXECUTED, self._payload(command))

    def undo(self) -> Command | None:
        """Reverse the most recent command. No-op (None) when nothing to undo."""
        if not self._undo_stack:
            return None
        command = self._undo_stack.pop()
        command.undo()
        self._redo_stack.append(command)
        logger.debug("Undid %s", command.description)
        self._notifier.notify(HistoryEvent.UNDONE, self._payload(command))
        return command

    def redo(self) -> Command | None:
        """Re-apply the most recently undone command. No-op (None) when empty."""
        if not self._redo_stack:
            return None
        command = self._redo_stack.pop()
        command.execute()
        self._push_undo(command)
        logger.debug("Redid %s", command.description)
        self._notifier.notify(HistoryEvent.REDONE, self._payload(command))
        return command

    def clear(self) -> None:
        self._undo_stack.clear()
        self._redo_stack.clear()
        self._notifier.notify(HistoryEvent.CLEARED, self._payload(None))

    @property
    def can_undo(self) -> bool:
        return bool(self._undo_stack)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo_stack)

    @property
    def undo_depth(self) -> int:
        return len(self._undo_stack)

    @property
    def redo_depth(self) -> int:
        return len(self._redo_stack)

    def _push_undo(self, command: Command) -> None:
        self._undo_stack.append(command)
        if self._max_depth is not None and len(self._undo_stack) > self._max_depth:
            del self._undo_stack[: len(self._undo_stack) - self._max_depth]

    def _payload(self, command: Command | None) -> dict[str, Any]:
        return {
            "command": command.description if command is not None else None,
            "can_undo": self.can_undo,
            "can_redo": self.can_redo,
        }
