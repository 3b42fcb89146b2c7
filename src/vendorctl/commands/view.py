"""Command: filtered, sorted listing of a record file."""

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
  vendorctl view vendors.json
  vendorctl view vendors.json -f category=hardware --sort name
  vendorctl view vendors.csv --sort revenue --desc --sorter numeric --limit 10
  vendorctl view vendors.yaml -f email='@acme\\.com$' --matcher pattern
  vendorctl -q view vendors.json -f status=active""",
)
@click.argument("records_file", type=click.Path(path_type=Path))
@filter_option
@click.option("--sort", "sort_field", default=None, metavar="FIELD", help="Sort by FIELD.")
@click.option("--desc", is_flag=True, help="Sort descending (requires --sort).")
@click.option("--matcher", default=None, help="Search matcher (default from config).")
@click.option("--sorter", default=None, help="Record sorter (default from config).")
@click.option("--limit", type=click.IntRange(min=0), default=None, help="Show at most N records.")
@click.pass_obj
def view(
    app: AppContext,
    records_file: Path,
    filters: dict[str, str],
    sort_field: str | None,
    desc: bool,
    matcher: str | None,
    sorter: str | None,
    limit: int | None,
) -> None:
    """List the records in RECORDS_FILE, filtered and sorted."""
    if desc and not sort_field:
        raise click.UsageError("--desc requires --sort.")

    svc = app.load_records(records_file)
    app.emit(
        svc.query(
            filters=filters,
            sort=sort_field,
            descending=desc,
            limit=limit,
            matcher=matcher or app.settings.view.matcher,
            sorter=sorter or app.settings.view.sorter,
        )
    )
