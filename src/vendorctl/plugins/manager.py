"""Plugin discovery, loading, and strategy registration.

Plugins come from two places: the ``vendorctl.plugins`` entry-point group
and single-file modules in a local directory (``.vendorctl/plugins/`` by
default). After discovery, matchers and sorters contributed through the
``register_search_matchers`` / ``register_record_sorters`` hooks are added
to the domain registries.

A broken plugin is logged and skipped; it never stops startup.
"""

from __future__ import annotations

import importlib.util
import inspect
import logging
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pluggy

from vendorctl.domain.matchers import register_matcher
from vendorctl.domain.sorters import register_sorter
from vendorctl.plugins.hookspecs import VendorHookSpec

PROJECT_NAME = "vendorctl"
ENTRY_POINT_GROUP = "vendorctl.plugins"

logger = logging.getLogger(__name__)

# (hook name, domain registration function)
_STRATEGY_HOOKS: tuple[tuple[str, Callable[[str, Any], None]], ...] = (
    ("register_search_matchers", register_matcher),
    ("register_record_sorters", register_sorter),
)


class PluginManager:
    """Discovers plugins and exposes the pluggy hook relay."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(VendorHookSpec)
        self._loaded = False

    def discover_and_load(self, *, local_dir: Path | None = None) -> list[str]:
        """Load entry-point plugins and, optionally, a local plugin directory.

        Returns the names of all registered plugins.
        """
        self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        if local_dir is not None:
            self._load_local_dir(local_dir)
        for plugin in self._pm.get_plugins():
            self._register_strategies(plugin)
        self._loaded = True
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin instance directly."""
        resolved_name = name or type(plugin).__name__
        self._pm.register(plugin, name=resolved_name)
        if self._loaded:
            self._register_strategies(plugin)
        logger.debug("Registered plugin: %s", resolved_name)

    def unregister(self, plugin: object) -> None:
        self._pm.unregister(plugin)

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    @property
    def hook(self) -> pluggy.HookRelay:
        return self._pm.hook

    def list_plugin_names(self) -> list[str]:
        return [self._pm.get_name(p) or type(p).__name__ for p in self._pm.get_plugins()]

    # ------------------------------------------------------------------
    # Local directory discovery
    # ------------------------------------------------------------------

    def _load_local_dir(self, local_dir: Path) -> None:
        """Import each ``*.py`` in *local_dir* and register its hook classes.

        Files starting with ``_`` are ignored.
        """
        if not local_dir.is_dir():
            return

        for py_file in sorted(local_dir.glob("*.py")):
            if py_file.name.startswith("_"):
                continue
            module = self._import_file(py_file)
            if module is None:
                continue
            for _name, cls in inspect.getmembers(module, inspect.isclass):
                if cls.__module__ != module.__name__ or not _has_hook_impls(cls):
                    continue
                try:
                    self.register_plugin(cls(), name=f"{module.__name__}.{cls.__name__}")
                except Exception:
                    logger.warning(
                        "Failed to instantiate plugin %s from %s",
                        cls.__name__,
                        py_file,
                        exc_info=True,
                    )

    @staticmethod
    def _import_file(py_file: Path) -> Any:
        module_name = f"vendorctl_local_plugin_{py_file.stem}"
        spec = importlib.util.spec_from_file_location(module_name, py_file)
        if spec is None or spec.loader is None:
            logger.warning("Could not create module spec for %s", py_file)
            return None
        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        try:
            spec.loader.exec_module(module)
        except Exception:
            logger.warning("Failed to load local plugin %s", py_file, exc_info=True)
            sys.modules.pop(module_name, None)
            return None
        return module

    # ------------------------------------------------------------------
    # Strategy registration
    # ------------------------------------------------------------------

    def _register_strategies(self, plugin: object) -> None:
        plugin_name = self._pm.get_name(plugin) or type(plugin).__name__
        for hook_name, register in _STRATEGY_HOOKS:
            hook = getattr(plugin, hook_name, None)
            if hook is None:
                continue
            try:
                contributed = hook()
            except Exception:
                logger.warning(
                    "Plugin %s failed in %s", plugin_name, hook_name, exc_info=True
                )
                continue
            if contributed is None:
                continue
            if not isinstance(contributed, dict):
                logger.warning("Plugin %s returned non-dict from %s", plugin_name, hook_name)
                continue
            for name, cls in contributed.items():
                try:
                    register(name, cls)
                except (TypeError, ValueError):
                    logger.warning(
                        "Skipping %r from plugin %s", name, plugin_name, exc_info=True
                    )


def _has_hook_impls(cls: type) -> bool:
    """True if *cls* has a public method marked with ``@hookimpl``."""
    marker = f"{PROJECT_NAME}_impl"
    return any(
        getattr(getattr(cls, name, None), marker, None) is not None
        for name in dir(cls)
        if not name.startswith("_")
    )
