"""Locate vendorctl.toml.

Lookup order: the VENDORCTL_CONFIG env var, then the start directory and
each of its parents in turn.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "vendorctl.toml"
CONFIG_ENV_VAR = "VENDORCTL_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the nearest vendorctl.toml at or above *start* (default: cwd).

    A set VENDORCTL_CONFIG wins outright; if it points at a missing file
    the result is None rather than a walk-up match.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        path = Path(env_path)
        return path if path.is_file() else None

    origin = (start or Path.cwd()).resolve()
    for directory in (origin, *origin.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
