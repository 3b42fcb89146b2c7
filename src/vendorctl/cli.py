"""vendorctl entry point: the root click group and its global flags."""

from __future__ import annotations

from pathlib import Path

import click

from vendorctl import __version__
from vendorctl.commands import register_commands
from vendorctl.commands._context import AppContext
from vendorctl.config.discovery import CONFIG_ENV_VAR, CONFIG_FILENAME
from vendorctl.config.settings import VendorSettings

_EPILOG = (
    f"Settings come from {CONFIG_FILENAME} (searched upward from the current "
    f"directory, or named by ${CONFIG_ENV_VAR}) and VENDORCTL_* environment variables."
)


@click.group(invoke_without_command=True, epilog=_EPILOG)
@click.version_option(version=__version__, prog_name="vendorctl")
@click.option("--json", "json_output", is_flag=True, help="Print results as JSON.")
@click.option("-q", "--quiet", is_flag=True, help="Print identity keys only.")
@click.option("-v", "--verbose", is_flag=True, help="Show error detail and debug logs.")
@click.option("--log-json", is_flag=True, help="Emit logs to stderr as JSON lines.")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help=f"Use this file instead of a discovered {CONFIG_FILENAME}.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None, **flags: bool) -> None:
    """Filter, sort, edit, and check vendor record files."""
    settings = VendorSettings.from_cli(
        config_path=str(config_path) if config_path else None,
        **flags,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
