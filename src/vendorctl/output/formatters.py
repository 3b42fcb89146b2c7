"""Dispatch a ServiceResult to JSON, quiet, or Rich output."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel

from vendorctl.output.renderers import render_quiet, render_result

if TYPE_CHECKING:
    from vendorctl.services.result import ServiceResult


class OutputSettings(BaseModel):
    """Output mode flags taken from the root CLI options."""

    model_config = {"frozen": True}

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Render *result* according to *settings* (human output by default).

    JSON takes precedence over quiet.
    """
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if settings.quiet:
        return render_quiet(result)
    return render_result(result, verbose=settings.verbose)
