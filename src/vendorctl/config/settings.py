"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``VENDORCTL_*`` prefix, ``__`` for nested sections
  3. TOML file    — ``vendorctl.toml`` discovered via walk-up
  4. Code defaults — baked into the section models
"""

from __future__ import annotations

import tomllib
from contextvars import ContextVar
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from vendorctl.config.discovery import find_config
from vendorctl.config.models import HistoryConfig, PluginsConfig, ValidationConfig, ViewConfig

# TOML path for the settings object currently being constructed.
_pending_toml: ContextVar[Path | None] = ContextVar("_pending_toml", default=None)


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``vendorctl.toml`` file."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path is None or not toml_path.is_file():
            return
        try:
            self._data = tomllib.loads(toml_path.read_text(encoding="utf-8"))
        except tomllib.TOMLDecodeError as exc:
            msg = f"Invalid TOML in {toml_path}: {exc}"
            raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._data.get(field_name), field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


class VendorSettings(BaseSettings):
    """Settings for the vendorctl CLI and workspace.

    Attributes:
        root: Directory the config was found in (or CWD). Relative
            plugin paths resolve against it.
        config_path: The TOML file actually read, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "VENDORCTL_",
        "env_nested_delimiter": "__",
    }

    root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    view: ViewConfig = Field(default_factory=ViewConfig)
    history: HistoryConfig = Field(default_factory=HistoryConfig)
    validation: ValidationConfig = Field(default_factory=ValidationConfig)
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert the TOML source between env vars and defaults."""
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, _pending_toml.get()),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        root: Path | None = None,
        **cli_flags: Any,
    ) -> VendorSettings:
        """Build settings for one CLI invocation.

        An explicit *config_path* is used when it exists; otherwise the
        config is discovered by walking up from *root* (or CWD).
        """
        toml_path: Path | None
        if config_path:
            candidate = Path(config_path)
            toml_path = candidate if candidate.is_file() else None
        else:
            toml_path = find_config(root)

        if root is None:
            root = toml_path.parent if toml_path else Path.cwd()

        token = _pending_toml.set(toml_path)
        try:
            return cls(root=root, config_path=toml_path, **cli_flags)
        finally:
            _pending_toml.reset(token)

    @property
    def plugin_dir(self) -> Path:
        """Absolute directory scanned for single-file plugins."""
        local = Path(self.plugins.local_dir)
        return local if local.is_absolute() else self.root / local
