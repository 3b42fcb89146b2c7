"""Tests for BaseService."""

from __future__ import annotations

from vendorctl.infrastructure.workspace import Workspace
from vendorctl.services.base import BaseService


class TestBaseService:
    def test_holds_workspace(self, workspace: Workspace) -> None:
        svc = BaseService(workspace)
        assert svc.workspace is workspace
