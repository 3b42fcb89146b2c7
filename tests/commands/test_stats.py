"""Tests for the stats CLI command."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from vendorctl.cli import cli


@pytest.mark.usefixtures("_isolated_cwd")
class TestStatsCommand:
    def test_summary(self, cli_runner: CliRunner, records_file: Path) -> None:
        result = cli_runner.invoke(cli, ["stats", str(records_file), "revenue"])
        assert result.exit_code == 0
        assert "record_stats" in result.output
        assert "sum: 2300.5" in result.output

    def test_json_grouped(self, cli_runner: CliRunner, records_file: Path) -> None:
        result = cli_runner.invoke(
            cli, ["--json", "stats", str(records_file), "revenue", "--group-by", "category"]
        )
        data = json.loads(result.stdout)["data"]
        assert data["groups"]["Hardware"]["count"] == 2
        assert data["groups"]["Office"]["sum"] == 0.0

    def test_filtered(self, cli_runner: CliRunner, records_file: Path) -> None:
        result = cli_runner.invoke(
            cli, ["--json", "stats", str(records_file), "revenue", "-f", "name=alpha"]
        )
        summary = json.loads(result.stdout)["data"]["summary"]
        assert summary == {"count": 1, "sum": 300.5, "average": 300.5, "min": 300.5, "max": 300.5}

    def test_empty_selection(self, cli_runner: CliRunner, records_file: Path) -> None:
        result = cli_runner.invoke(
            cli, ["--json", "stats", str(records_file), "revenue", "-f", "name=zzz"]
        )
        summary = json.loads(result.stdout)["data"]["summary"]
        assert summary["max"] is None
        assert summary["average"] == 0.0
