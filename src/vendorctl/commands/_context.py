"""AppContext — shared Click context for all commands.

Created once by the root CLI group and passed to subcommands via
``@click.pass_obj``. The workspace is built lazily so ``--help`` and
``--version`` never load plugins.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from vendorctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from vendorctl.config.settings import VendorSettings
    from vendorctl.infrastructure.workspace import Workspace
    from vendorctl.services.records import RecordService
    from vendorctl.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: VendorSettings) -> None:
        self.settings = settings
        self._workspace: Workspace | None = None

        from vendorctl.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def workspace(self) -> Workspace:
        """The workspace (created lazily on first access).

        The view is the process-wide one from ``get_or_create_view``.
        """
        if self._workspace is None:
            from vendorctl.domain.matchers import get_matcher
            from vendorctl.domain.sorters import get_sorter
            from vendorctl.engine.view import get_or_create_view
            from vendorctl.infrastructure.workspace import Workspace, load_plugins

            pm = load_plugins(self.settings) if self.settings.plugins.enabled else None
            try:
                matcher = get_matcher(self.settings.view.matcher)
                sorter = get_sorter(self.settings.view.sorter)
            except KeyError as exc:
                raise click.ClickException(str(exc.args[0])) from exc

            view = get_or_create_view(matcher=matcher, sorter=sorter)
            self._workspace = Workspace(self.settings, view=view)
            if pm is not None:
                self._workspace.init_event_bus(pm)
        return self._workspace

    def load_records(self, path: Path) -> RecordService:
        """Load *path* into the workspace and return a service over it.

        Load failures are emitted and end the command; load warnings go to
        stderr as usual.
        """
        from vendorctl.services.records import RecordService

        svc = RecordService(self.workspace)
        result = svc.load(path)
        if not result.ok:
            self.emit(result)
        elif not self.settings.json_output:
            for warning in result.warnings:
                click.echo(f"WARNING: {warning}", err=True)
        return svc

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: writes to stdout and returns. Warnings go to stderr so
          they stay out of piped output.
        * Failure: writes to stderr and exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # JSON output already carries the warnings.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
