"""Command: run an add/update/delete/undo/redo script over a record file."""

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
  vendorctl apply vendors.json edits.json
  vendorctl apply vendors.json edits.yaml -o vendors.new.json
  vendorctl apply vendors.csv edits.json -o vendors.csv""",
)
@click.argument("records_file", type=click.Path(path_type=Path))
@click.argument("operations_file", type=click.Path(path_type=Path))
@click.option(
    "-o",
    "--output",
    type=click.Path(path_type=Path),
    default=None,
    help="Write the resulting records here (format from suffix).",
)
@click.pass_obj
def apply(
    app: AppContext,
    records_file: Path,
    operations_file: Path,
    output: Path | None,
) -> None:
    """Apply the operations in OPERATIONS_FILE to RECORDS_FILE.

    Each entry is an object with "op" set to add (with "record"),
    update (with "id" and "fields"), delete (with "id"), undo, or redo.
    """
    svc = app.load_records(records_file)
    result = svc.apply_script(operations_file)
    if result.ok and output is not None:
        saved = svc.save(output)
        if not saved.ok:
            app.emit(saved)
        result = result.model_copy(update={"data": {**result.data, "output": str(output)}})
    app.emit(result)
