"""Command: check records against the configured field rules."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from vendorctl.commands._base import VendorCommand

if TYPE_CHECKING:
    from vendorctl.commands._context import AppContext


@click.command(
    cls=VendorCommand,
    examples="""\
  vendorctl validate vendors.json
  vendorctl validate vendors.csv --strict
  vendorctl -c ./rules.toml --json validate vendors.yaml""",
)
@click.argument("records_file", type=click.Path(path_type=Path))
@click.option("--strict", is_flag=True, help="Exit with status 1 if any record is invalid.")
@click.pass_obj
def validate(app: AppContext, records_file: Path, strict: bool) -> None:
    """Validate RECORDS_FILE against the [validation] rules in vendorctl.toml."""
    svc = app.load_records(records_file)
    result = svc.validate()
    app.emit(result)
    if strict and result.data.get("invalid"):
        raise SystemExit(1)
