"""Tests for the validate CLI command."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from vendorctl.cli import cli

RULES = """\
[validation]
required = ["name", "email"]
email = ["email"]
"""


@pytest.mark.usefixtures("_isolated_cwd")
class TestValidateCommand:
    def test_no_rules_all_valid(self, cli_runner: CliRunner, records_file: Path) -> None:
        result = cli_runner.invoke(cli, ["--json", "validate", str(records_file)])
        assert result.exit_code == 0
        data = json.loads(result.stdout)["data"]
        assert data["checked"] == 4
        assert data["invalid"] == 0

    def test_rules_from_config(self, cli_runner: CliRunner, records_file: Path) -> None:
        (records_file.parent / "vendorctl.toml").write_text(RULES)
        result = cli_runner.invoke(cli, ["validate", str(records_file)])
        assert result.exit_code == 0
        assert "invalid: 2" in result.stdout
        assert "Invalid email address" in result.stdout
        assert "WARNING: 4: email: This field is required" in result.stderr

    def test_explicit_config_option(
        self, cli_runner: CliRunner, records_file: Path, tmp_path: Path
    ) -> None:
        rules = tmp_path / "rules" / "custom.toml"
        rules.parent.mkdir()
        rules.write_text(RULES)
        result = cli_runner.invoke(cli, ["-c", str(rules), "--json", "validate", str(records_file)])
        data = json.loads(result.stdout)
        assert data["data"]["rules"] == ["name", "email"]
        assert len(data["warnings"]) == 2

    def test_strict_exit_code(self, cli_runner: CliRunner, records_file: Path) -> None:
        (records_file.parent / "vendorctl.toml").write_text(RULES)
        result = cli_runner.invoke(cli, ["validate", str(records_file), "--strict"])
        assert result.exit_code == 1

    def test_strict_passes_when_valid(self, cli_runner: CliRunner, records_file: Path) -> None:
        result = cli_runner.invoke(cli, ["validate", str(records_file), "--strict"])
        assert result.exit_code == 0
