"""Field validation — predicates, rule factories, and a per-field rule chain.

A :class:`Validator` holds an ordered list of rules per field. Validation
stops at the first failing rule for that field. Format rules (email,
phone, url, length) accept empty values; only :func:`required_rule`
enforces presence.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import Any
from urllib.parse import urlparse

from pydantic import BaseModel

from vendorctl.domain.records import stringify
from vendorctl.domain.types import RecordLike

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_PHONE_RE = re.compile(r"^[\d\s\-()]+$")
_MIN_PHONE_DIGITS = 10


class ValidationResult(BaseModel):
    """Outcome of validating one value."""

    model_config = {"frozen": True}

    valid: bool
    message: str = ""


VALID = ValidationResult(valid=True)

Rule = Callable[[Any], ValidationResult]


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------


def is_required(value: Any) -> bool:
    return value is not None and stringify(value).strip() != ""


def is_valid_email(value: Any) -> bool:
    return _EMAIL_RE.match(stringify(value)) is not None


def is_valid_phone(value: Any) -> bool:
    """Digits, spaces, dashes, and parentheses, with at least ten digits."""
    text = stringify(value)
    if _PHONE_RE.match(text) is None:
        return False
    return sum(ch.isdigit() for ch in text) >= _MIN_PHONE_DIGITS


def is_valid_url(value: Any) -> bool:
    parsed = urlparse(stringify(value))
    return bool(parsed.scheme) and bool(parsed.netloc)


def min_length(value: Any, minimum: int) -> bool:
    return len(stringify(value)) >= minimum


def max_length(value: Any, maximum: int) -> bool:
    return len(stringify(value)) <= maximum


# ---------------------------------------------------------------------------
# Rule factories
# ---------------------------------------------------------------------------


def _check(ok: bool, message: str) -> ValidationResult:
    return VALID if ok else ValidationResult(valid=False, message=message)


def required_rule(message: str = "This field is required") -> Rule:
    return lambda value: _check(is_required(value), message)


def email_rule(message: str = "Invalid email address") -> Rule:
    return lambda value: _check(not is_required(value) or is_valid_email(value), message)


def phone_rule(message: str = "Invalid phone number") -> Rule:
    return lambda value: _check(not is_required(value) or is_valid_phone(value), message)


def url_rule(message: str = "Invalid URL") -> Rule:
    return lambda value: _check(not is_required(value) or is_valid_url(value), message)


def min_length_rule(minimum: int, message: str | None = None) -> Rule:
    text = message or f"Must be at least {minimum} characters"
    return lambda value: _check(not is_required(value) or min_length(value, minimum), text)


def max_length_rule(maximum: int, message: str | None = None) -> Rule:
    text = message or f"Must be at most {maximum} characters"
    return lambda value: _check(max_length(value, maximum), text)


# ---------------------------------------------------------------------------
# Validator
# ---------------------------------------------------------------------------


class Validator:
    """Ordered rule chains keyed by field name."""

    def __init__(self) -> None:
        self._rules: dict[str, list[Rule]] = {}

    def add_rule(self, field: str, rule: Rule) -> Validator:
        self._rules.setdefault(field, []).append(rule)
        return self

    @property
    def fields(self) -> list[str]:
        return list(self._rules)

    def validate(self, field: str, value: Any) -> ValidationResult:
        """Run the rules for *field* in order; return the first failure."""
        for rule in self._rules.get(field, []):
            result = rule(value)
            if not result.valid:
                return result
        return VALID

    def validate_record(self, record: RecordLike) -> dict[str, str]:
        """Validate every ruled field of *record*.

        Returns a mapping of field name to failure message; empty when valid.
        """
        errors: dict[str, str] = {}
        for field in self._rules:
            result = self.validate(field, record.get(field))
            if not result.valid:
                errors[field] = result.message
        return errors
