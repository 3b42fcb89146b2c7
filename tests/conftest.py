"""Shared pytest fixtures and test helpers for vendorctl tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from vendorctl.config.settings import VendorSettings
from vendorctl.domain.matchers import MATCHER_REGISTRY
from vendorctl.domain.sorters import SORTER_REGISTRY
from vendorctl.engine.store import RecordStore
from vendorctl.engine.view import RecordView
from vendorctl.infrastructure.workspace import Workspace

SAMPLE_VENDORS: list[dict[str, Any]] = [
    {
        "id": 1,
        "name": "Charlie Supplies",
        "category": "Hardware",
        "email": "sales@charlie.example",
        "revenue": 1200,
        "since": "2021-03-01",
    },
    {
        "id": 2,
        "name": "alpha logistics",
        "category": "Freight",
        "email": "ops@alpha.example",
        "revenue": 300.5,
        "since": "2019-07-15",
    },
    {
        "id": 3,
        "name": "Bravo Hardware",
        "category": "Hardware",
        "email": "not-an-email",
        "revenue": 800,
        "since": "2023-01-10",
    },
    {
        "id": 4,
        "name": "Delta Paper",
        "category": "Office",
        "email": "",
        "revenue": "n/a",
        "since": None,
    },
]


@pytest.fixture(autouse=True)
def _reset_process_state(monkeypatch: pytest.MonkeyPatch) -> None:
    """Isolate the singleton view, strategy registries, and config lookup."""
    monkeypatch.setattr("vendorctl.engine.view._instance", None)
    monkeypatch.setattr("vendorctl.domain.matchers.MATCHER_REGISTRY", dict(MATCHER_REGISTRY))
    monkeypatch.setattr("vendorctl.domain.sorters.SORTER_REGISTRY", dict(SORTER_REGISTRY))
    monkeypatch.delenv("VENDORCTL_CONFIG", raising=False)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def vendors() -> list[dict[str, Any]]:
    """Fresh copies of the sample vendor records."""
    return [dict(record) for record in SAMPLE_VENDORS]


@pytest.fixture
def store(vendors: list[dict[str, Any]]) -> RecordStore:
    """A RecordStore preloaded with the sample vendors."""
    s = RecordStore()
    s.set_all(vendors)
    return s


@pytest.fixture
def view(vendors: list[dict[str, Any]]) -> RecordView:
    """A standalone RecordView over the sample vendors."""
    v = RecordView()
    v.set_data(vendors)
    return v


@pytest.fixture
def settings(tmp_path: Path) -> VendorSettings:
    """Default settings rooted at a temp directory, plugins off."""
    return VendorSettings(root=tmp_path, plugins={"enabled": False})


@pytest.fixture
def workspace(settings: VendorSettings, vendors: list[dict[str, Any]]) -> Workspace:
    """A workspace loaded with the sample vendors."""
    ws = Workspace(settings)
    ws.load(vendors)
    try:
        yield ws
    finally:
        ws.close()


@pytest.fixture
def records_file(tmp_path: Path, vendors: list[dict[str, Any]]) -> Path:
    """The sample vendors written to a JSON file."""
    path = tmp_path / "vendors.json"
    path.write_text(json.dumps(vendors), encoding="utf-8")
    return path


@pytest.fixture
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run from a temp directory so no stray vendorctl.toml is discovered.

    Use via ``@pytest.mark.usefixtures("_isolated_cwd")`` on command test
    classes.
    """
    monkeypatch.chdir(tmp_path)


def write_json(path: Path, data: Any) -> Path:
    """Write *data* as JSON to *path* and return the path."""
    path.write_text(json.dumps(data), encoding="utf-8")
    return path
