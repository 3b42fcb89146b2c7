"""Command: numeric summary of one field."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from vendorctl.commands._base import VendorCommand, filter_option

if TYPE_CHECKING:
    from vendorctl.commands._context import AppContext


@click.command(
    cls=VendorCommand,
    examples="""\
  vendorctl stats vendors.json revenue
  vendorctl stats vendors.json revenue --group-by category
  vendorctl --json stats vendors.csv rating -f status=active""",
)
@click.argument("records_file", type=click.Path(path_type=Path))
@click.argument("field")
@click.option("--group-by", "group", default=None, metavar="FIELD", help="Summarise per group.")
@filter_option
@click.pass_obj
def stats(
    app: AppContext,
    records_file: Path,
    field: str,
    group: str | None,
    filters: dict[str, str],
) -> None:
    """Count, sum, average, min and max of FIELD across RECORDS_FILE."""
    svc = app.load_records(records_file)
    app.emit(
        svc.stats(field, group=group, filters=filters, matcher=app.settings.view.matcher)
    )
