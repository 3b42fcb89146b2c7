"""BaseService — shared foundation for vendorctl services.

Every service receives the :class:`Workspace` at construction time and
performs its work under the workspace lock.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from vendorctl.infrastructure.workspace import Workspace


class BaseService:
    """Base for service-layer classes.

    Usage::

        class RecordService(BaseService):
            def query(self, ...) -> ServiceResult:
                with self._workspace.locked() as ws:
                    ...
    """

    def __init__(self, workspace: Workspace) -> None:
        self._workspace = workspace

    @property
    def workspace(self) -> Workspace:
        return self._workspace
