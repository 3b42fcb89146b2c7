"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from vendorctl.domain.records import stringify
from vendorctl.output.console import create_console, get_output, status_text

if TYPE_CHECKING:
    from rich.console import Console

    from vendorctl.services.result import ServiceResult

# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()
    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Minimal output: identity keys for listings, a status line otherwise."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {msg}"

    items = result.data.get("items")
    if isinstance(items, list):
        primary_key = result.data.get("primary_key", "id")
        return "\n".join(stringify(item.get(primary_key)) for item in items)
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(status_text(True, result.op))


def _field(console: Console, key: str, value: Any) -> None:
    style = "vendor.id" if key in ("id", "path") else "vendor.count"
    if isinstance(value, list):
        value = ", ".join(map(stringify, value))
    console.print(Text(f"  {key}: ", style="vendor.key"), Text(stringify(value), style=style))


def _columns(items: list[dict[str, Any]], primary_key: str) -> list[str]:
    columns = [primary_key]
    for item in items:
        columns.extend(key for key in item if key not in columns)
    return columns


def _records_table(items: list[dict[str, Any]], primary_key: str) -> Table:
    table = Table(show_header=True, header_style="vendor.header", box=None, pad_edge=False)
    columns = _columns(items, primary_key)
    for column in columns:
        table.add_column(column, style="vendor.id" if column == primary_key else None)
    for item in items:
        table.add_row(*(Text(stringify(item.get(column))) for column in columns))
    return table


# ── Renderers ─────────────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


def _render_query(result: ServiceResult, console: Console, *, verbose: bool) -> None:
    data = result.data
    _status_line(console, result)
    console.print(
        Text(f"  {data['count']} shown, {data['filtered']} of {data['total']} matched")
    )
    if data.get("filters"):
        terms = ", ".join(f"{f}~{t}" for f, t in data["filters"].items())
        console.print(Text(f"  filters: {terms} ({data['matcher']})", style="vendor.key"))
    if data.get("sort"):
        sort = data["sort"]
        console.print(
            Text(
                f"  sort: {sort['field']} {sort['direction']} ({data['sorter']})",
                style="vendor.key",
            )
        )
    if data["items"]:
        console.print()
        console.print(_records_table(data["items"], data.get("primary_key", "id")))


def _render_stats(result: ServiceResult, console: Console, *, verbose: bool) -> None:
    data = result.data
    _status_line(console, result)
    _field(console, "field", data["field"])
    for key, value in data["summary"].items():
        _field(console, key, value)

    groups = data.get("groups")
    if groups:
        console.print()
        table = Table(show_header=True, header_style="vendor.header", box=None, pad_edge=False)
        table.add_column(data["group_by"])
        for column in ("count", "sum", "average", "min", "max"):
            table.add_column(column, justify="right")
        for name, summary in groups.items():
            table.add_row(
                Text(name or "(none)"),
                *(stringify(summary[c]) for c in ("count", "sum", "average", "min", "max")),
            )
        console.print(table)


def _render_validate(result: ServiceResult, console: Console, *, verbose: bool) -> None:
    data = result.data
    _status_line(console, result)
    for key in ("checked", "valid", "invalid"):
        _field(console, key, data[key])
    if data["issues"]:
        console.print()
        table = Table(show_header=True, header_style="vendor.header", box=None, pad_edge=False)
        table.add_column("id", style="vendor.id")
        table.add_column("field")
        table.add_column("message", style="vendor.warning")
        for issue in data["issues"]:
            table.add_row(
                Text(stringify(issue["id"])), Text(issue["field"]), Text(issue["message"])
            )
        console.print(table)


def _render_error(result: ServiceResult, console: Console, *, verbose: bool) -> None:
    console.print(status_text(False, result.op))
    if result.error is None:
        console.print("  Unknown error")
        return
    console.print(Text(f"  {result.error.message}"))
    if verbose:
        console.print(Text(f"  code: {result.error.code}", style="vendor.key"))
        for key, value in result.error.detail.items():
            console.print(Text(f"  {key}: {value}", style="vendor.key"))


_OP_RENDERERS: dict[str, Callable[..., None]] = {
    "query_records": _render_query,
    "record_stats": _render_stats,
    "validate_records": _render_validate,
}
