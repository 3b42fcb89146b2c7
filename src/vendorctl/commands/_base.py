"""Shared Click pieces: ``--examples`` support and FIELD=TERM parsing."""

from __future__ import annotations

from typing import Any

import click


class VendorCommand(click.Command):
    """Click Command that accepts an ``examples`` text.

    When examples are given the command gains an eager ``--examples``
    flag that prints them and exits, keeping ``--help`` short.
    """

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            self.params.append(
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=self._show_examples,
                    help="Show usage examples.",
                )
            )

    def _show_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(self.examples)
        ctx.exit(0)


def parse_filters(
    _ctx: click.Context, _param: click.Parameter, values: tuple[str, ...]
) -> dict[str, str]:
    """Turn repeated ``FIELD=TERM`` options into a filter mapping.

    A later option for the same field replaces the earlier one.
    """
    filters: dict[str, str] = {}
    for raw in values:
        field, sep, term = raw.partition("=")
        if not sep or not field.strip():
            msg = f"expected FIELD=TERM, got {raw!r}"
            raise click.BadParameter(msg)
        filters[field.strip()] = term
    return filters


filter_option = click.option(
    "-f",
    "--filter",
    "filters",
    multiple=True,
    metavar="FIELD=TERM",
    callback=parse_filters,
    help="Keep records whose FIELD matches TERM (repeatable).",
)
