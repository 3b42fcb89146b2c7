"""Tests for the view CLI command."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from vendorctl.cli import cli


@pytest.mark.usefixtures("_isolated_cwd")
class TestViewCommand:
    def test_lists_all_records(self, cli_runner: CliRunner, records_file: Path) -> None:
        result = cli_runner.invoke(cli, ["view", str(records_file)])
        assert result.exit_code == 0
        assert "4 shown, 4 of 4 matched" in result.output
        assert "Charlie Supplies" in result.output

    def test_json_filter_and_sort(self, cli_runner: CliRunner, records_file: Path) -> None:
        result = cli_runner.invoke(
            cli, ["--json", "view", str(records_file), "-f", "category=hardware", "--sort", "name"]
        )
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["op"] == "query_records"
        assert [r["id"] for r in data["data"]["items"]] == [3, 1]
        assert data["data"]["sort"] == {"field": "name", "direction": "asc"}

    def test_descending_numeric(self, cli_runner: CliRunner, records_file: Path) -> None:
        result = cli_runner.invoke(
            cli,
            [
                "--json",
                "view",
                str(records_file),
                "--sort",
                "revenue",
                "--desc",
                "--sorter",
                "numeric",
            ],
        )
        data = json.loads(result.stdout)
        assert [r["id"] for r in data["data"]["items"]] == [1, 3, 2, 4]

    def test_quiet_prints_ids(self, cli_runner: CliRunner, records_file: Path) -> None:
        result = cli_runner.invoke(
            cli, ["-q", "view", str(records_file), "--sort", "name", "--limit", "2"]
        )
        assert result.exit_code == 0
        assert result.stdout.split() == ["2", "3"]

    def test_matcher_does_not_leak_between_runs(
        self, cli_runner: CliRunner, records_file: Path
    ) -> None:
        cli_runner.invoke(
            cli, ["view", str(records_file), "--matcher", "exact", "-f", "category=Hardware"]
        )
        result = cli_runner.invoke(
            cli, ["--json", "view", str(records_file), "-f", "category=hard"]
        )
        data = json.loads(result.stdout)
        assert data["data"]["matcher"] == "partial"
        assert data["data"]["filtered"] == 2

    def test_unknown_matcher_fails(self, cli_runner: CliRunner, records_file: Path) -> None:
        result = cli_runner.invoke(cli, ["--json", "view", str(records_file), "--matcher", "fuzzy"])
        assert result.exit_code == 1
        assert result.stdout == ""
        payload = json.loads(result.stderr)
        assert payload["error"]["code"] == "UNKNOWN_STRATEGY"

    def test_missing_file(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(cli, ["view", str(tmp_path / "nope.json")])
        assert result.exit_code == 1
        assert "No such file" in result.stderr

    def test_bad_filter_syntax(self, cli_runner: CliRunner, records_file: Path) -> None:
        result = cli_runner.invoke(cli, ["view", str(records_file), "-f", "category"])
        assert result.exit_code == 2
        assert "FIELD=TERM" in result.output

    def test_desc_requires_sort(self, cli_runner: CliRunner, records_file: Path) -> None:
        result = cli_runner.invoke(cli, ["view", str(records_file), "--desc"])
        assert result.exit_code == 2
        assert "--desc requires --sort" in result.output

    def test_skipped_records_warn_on_stderr(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "dups.json"
        path.write_text(json.dumps([{"id": 1}, {"id": 1}]))
        result = cli_runner.invoke(cli, ["-q", "view", str(path)])
        assert result.exit_code == 0
        assert result.stdout.strip() == "1"
        assert "WARNING: Skipped 1 record(s)" in result.stderr

    def test_csv_input(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "v.csv"
        path.write_text("id,name\n2,Bolt\n1,Acme\n")
        result = cli_runner.invoke(cli, ["-q", "view", str(path), "--sort", "name"])
        assert result.stdout.split() == ["1", "2"]

    def test_config_sets_default_matcher(self, cli_runner: CliRunner, records_file: Path) -> None:
        config = records_file.parent / "vendorctl.toml"
        config.write_text('[view]\nmatcher = "case_insensitive"\n')
        result = cli_runner.invoke(
            cli, ["--json", "view", str(records_file), "-f", "category=HARDWARE"]
        )
        data = json.loads(result.stdout)
        assert data["data"]["matcher"] == "case_insensitive"
        assert data["data"]["filtered"] == 2

    def test_list_identity_key_skipped(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "lists.json"
        path.write_text(json.dumps([{"id": [1], "name": "a"}, {"id": 2, "name": "b"}]))
        result = cli_runner.invoke(cli, ["-q", "view", str(path)])
        assert result.exit_code == 0
        assert result.stdout.split() == ["2"]
        assert "Skipped 1 record(s)" in result.stderr
