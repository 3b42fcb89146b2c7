"""Tests for PluginManager — registration, hook relay, and strategy hooks."""

from __future__ import annotations

import pluggy

from vendorctl.domain import matchers, sorters
from vendorctl.domain.matchers import ExactMatcher, SearchMatcher, get_matcher
from vendorctl.domain.sorters import NumericSorter, RecordSorter, get_sorter
from vendorctl.plugins.manager import PluginManager

hookimpl = pluggy.HookimplMarker("vendorctl")


class _DummyPlugin:
    """Minimal plugin for registration tests."""

    @hookimpl
    def post_load(self, count: int, primary_key: str) -> None:
        pass


class _StartsWithMatcher(SearchMatcher):
    name = "starts_with"

    def match(self, value, term):
        return str(value).lower().startswith(term.lower())


class _ReverseNumericSorter(RecordSorter):
    name = "negative"

    def sort_key(self, value):
        return -NumericSorter().sort_key(value)


class _StrategyPlugin:
    @hookimpl
    def register_search_matchers(self):
        return {"starts_with": _StartsWithMatcher}

    @hookimpl
    def register_record_sorters(self):
        return {"negative": _ReverseNumericSorter}


class _ConflictingPlugin:
    @hookimpl
    def register_search_matchers(self):
        return {"exact": _StartsWithMatcher}


class _BadReturnPlugin:
    @hookimpl
    def register_record_sorters(self):
        return ["not", "a", "dict"]


class _RaisingPlugin:
    @hookimpl
    def register_search_matchers(self):
        raise RuntimeError("plugin exploded")


class TestPluginManager:
    def test_hook_relay_accessible(self):
        pm = PluginManager()
        assert hasattr(pm.hook, "post_add")
        assert hasattr(pm.hook, "register_record_sorters")

    def test_register_plugin(self):
        pm = PluginManager()
        pm.register_plugin(_DummyPlugin(), name="dummy")
        assert "dummy" in pm.list_plugin_names()

    def test_register_plugin_default_name(self):
        pm = PluginManager()
        pm.register_plugin(_DummyPlugin())
        assert "_DummyPlugin" in pm.list_plugin_names()

    def test_unregister_plugin(self):
        pm = PluginManager()
        plugin = _DummyPlugin()
        pm.register_plugin(plugin, name="dummy")
        pm.unregister(plugin)
        assert "dummy" not in pm.list_plugin_names()

    def test_discover_marks_loaded(self):
        pm = PluginManager()
        assert pm.is_loaded is False
        pm.discover_and_load()
        assert pm.is_loaded is True


class TestStrategyRegistration:
    def test_strategies_registered_on_discover(self):
        pm = PluginManager()
        pm.register_plugin(_StrategyPlugin())
        pm.discover_and_load()
        assert "starts_with" in matchers.MATCHER_REGISTRY
        assert "negative" in sorters.SORTER_REGISTRY
        assert get_matcher("starts_with").match("Acme", "ac") is True

    def test_late_registration_after_discover(self):
        pm = PluginManager()
        pm.discover_and_load()
        pm.register_plugin(_StrategyPlugin())
        records = [{"v": 1}, {"v": 3}, {"v": 2}]
        assert [r["v"] for r in get_sorter("negative").sort(records, "v")] == [3, 2, 1]

    def test_builtin_conflict_skipped(self):
        pm = PluginManager()
        pm.register_plugin(_ConflictingPlugin())
        pm.discover_and_load()
        assert isinstance(get_matcher("exact"), ExactMatcher)

    def test_non_dict_return_ignored(self):
        pm = PluginManager()
        pm.register_plugin(_BadReturnPlugin())
        before = list(sorters.SORTER_REGISTRY)
        pm.discover_and_load()
        assert list(sorters.SORTER_REGISTRY) == before

    def test_raising_hook_does_not_stop_discovery(self):
        pm = PluginManager()
        pm.register_plugin(_RaisingPlugin())
        pm.register_plugin(_StrategyPlugin())
        pm.discover_and_load()
        assert "starts_with" in matchers.MATCHER_REGISTRY
