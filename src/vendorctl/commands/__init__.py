"""Subcommand modules for vendorctl.

Provides register_commands(), which attaches every command to the root group.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the standalone commands on the root CLI group."""
    from vendorctl.commands.apply import apply
    from vendorctl.commands.stats import stats
    from vendorctl.commands.validate import validate
    from vendorctl.commands.view import view

    cli.add_command(view)
    cli.add_command(stats)
    cli.add_command(validate)
    cli.add_command(apply)
