"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, vendorctl.toml only contains overrides.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- vendorctl.toml sections ---


class ViewConfig(BaseModel):
    """[view] section."""

    model_config = {"frozen": True}

    primary_key: str = "id"
    matcher: str = "partial"
    sorter: str = "alphabetic"


class HistoryConfig(BaseModel):
    """[history] section."""

    model_config = {"frozen": True}

    max_depth: int | None = Field(default=None, ge=0)


class ValidationConfig(BaseModel):
    """[validation] section — field names per rule."""

    model_config = {"frozen": True}

    required: list[str] = Field(default_factory=list)
    email: list[str] = Field(default_factory=list)
    phone: list[str] = Field(default_factory=list)
    url: list[str] = Field(default_factory=list)
    min_length: dict[str, int] = Field(default_factory=dict)
    max_length: dict[str, int] = Field(default_factory=dict)


class PluginsConfig(BaseModel):
    """[plugins] section."""

    model_config = {"frozen": True}

    enabled: bool = True
    local_dir: str = ".vendorctl/plugins"
