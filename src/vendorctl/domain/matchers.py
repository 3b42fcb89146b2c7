"""Search matchers — pluggable predicates deciding whether a value matches a term.

Four built-ins are registered by name in :data:`MATCHER_REGISTRY`. Plugins
may add more through :func:`register_matcher`; built-in names are reserved.
A RecordView holds exactly one active matcher, applied to every filter.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Any

from vendorctl.domain.records import stringify
from vendorctl.domain.types import MatcherKind


class SearchMatcher(ABC):
    """Decide whether a field value satisfies a search term."""

    name: str = ""

    @abstractmethod
    def match(self, value: Any, term: str) -> bool:
        """Return True when *value* satisfies *term*."""


class ExactMatcher(SearchMatcher):
    """Stringified equality."""

    name = MatcherKind.EXACT

    def match(self, value: Any, term: str) -> bool:
        return stringify(value) == stringify(term)


class PartialMatcher(SearchMatcher):
    """Case-insensitive substring containment."""

    name = MatcherKind.PARTIAL

    def match(self, value: Any, term: str) -> bool:
        return stringify(term).casefold() in stringify(value).casefold()


class CaseInsensitiveMatcher(SearchMatcher):
    """Case-insensitive equality."""

    name = MatcherKind.CASE_INSENSITIVE

    def match(self, value: Any, term: str) -> bool:
        return stringify(value).casefold() == stringify(term).casefold()


class PatternMatcher(SearchMatcher):
    """Treat the term as a case-insensitive regular expression.

    An invalid pattern never raises; it simply matches nothing.
    """

    name = MatcherKind.PATTERN

    def match(self, value: Any, term: str) -> bool:
        try:
            return re.search(stringify(term), stringify(value), re.IGNORECASE) is not None
        except re.error:
            return False


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


def _builtin_matcher_map() -> dict[str, type[SearchMatcher]]:
    return {
        MatcherKind.EXACT: ExactMatcher,
        MatcherKind.PARTIAL: PartialMatcher,
        MatcherKind.CASE_INSENSITIVE: CaseInsensitiveMatcher,
        MatcherKind.PATTERN: PatternMatcher,
    }


MATCHER_REGISTRY: dict[str, type[SearchMatcher]] = dict(_builtin_matcher_map())


def get_matcher(name: str) -> SearchMatcher:
    """Instantiate the matcher registered under *name*.

    Raises:
        KeyError: if no matcher is registered under that name.
    """
    try:
        matcher_cls = MATCHER_REGISTRY[name]
    except KeyError:
        msg = f"No search matcher registered as {name!r}"
        raise KeyError(msg) from None
    return matcher_cls()


def register_matcher(name: str, matcher_cls: type[SearchMatcher]) -> None:
    """Register a custom matcher class under *name*."""
    normalized_name = name.strip()
    if not normalized_name:
        msg = "Matcher name must not be empty"
        raise ValueError(msg)

    if not (isinstance(matcher_cls, type) and issubclass(matcher_cls, SearchMatcher)):
        msg = f"Matcher {normalized_name!r} must extend SearchMatcher"
        raise TypeError(msg)

    if normalized_name in _builtin_matcher_map():
        msg = f"Matcher {normalized_name!r} conflicts with a built-in registration"
        raise ValueError(msg)

    existing = MATCHER_REGISTRY.get(normalized_name)
    if existing is not None and existing is not matcher_cls:
        msg = f"Matcher {normalized_name!r} is already registered"
        raise ValueError(msg)

    MATCHER_REGISTRY[normalized_name] = matcher_cls


def available_matchers() -> list[str]:
    """Names of all registered matchers, built-ins first."""
    return list(MATCHER_REGISTRY)
