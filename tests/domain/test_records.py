"""Tests for record value helpers."""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta, timezone

import pytest

from vendorctl.domain.records import copy_record, stringify, to_number, to_timestamp


class TestStringify:
    def test_none_is_empty(self) -> None:
        assert stringify(None) == ""

    def test_booleans_lowercase(self) -> None:
        assert stringify(True) == "true"
        assert stringify(False) == "false"

    def test_integral_float_drops_fraction(self) -> None:
        assert stringify(30.0) == "30"
        assert stringify(2.5) == "2.5"

    def test_dates_iso(self) -> None:
        assert stringify(date(2024, 1, 15)) == "2024-01-15"
        assert stringify(datetime(2024, 1, 15, 9, 30)) == "2024-01-15T09:30:00"

    def test_passthrough(self) -> None:
        assert stringify("Acme") == "Acme"
        assert stringify(7) == "7"


class TestToNumber:
    def test_numeric_strings(self) -> None:
        assert to_number("12.5") == 12.5
        assert to_number(" 3 ") == 3.0

    def test_non_numeric_is_zero(self) -> None:
        assert to_number("abc") == 0.0
        assert to_number("") == 0.0
        assert to_number(None) == 0.0
        assert to_number([1]) == 0.0

    def test_nan_is_zero(self) -> None:
        assert to_number(float("nan")) == 0.0
        assert to_number("nan") == 0.0

    def test_bool_counts(self) -> None:
        assert to_number(True) == 1.0


class TestToTimestamp:
    def test_epoch_for_missing(self) -> None:
        assert to_timestamp(None) == 0.0
        assert to_timestamp("") == 0.0
        assert to_timestamp("not a date") == 0.0

    def test_iso_date_is_utc_midnight(self) -> None:
        assert to_timestamp("1970-01-02") == 86_400_000

    def test_naive_datetime_read_as_utc(self) -> None:
        assert to_timestamp(datetime(1970, 1, 1, 0, 0, 1)) == 1000

    def test_aware_datetime_respects_offset(self) -> None:
        plus_one = timezone(timedelta(hours=1))
        aware = datetime(1970, 1, 1, 1, 0, tzinfo=plus_one)
        assert to_timestamp(aware) == 0.0

    def test_date_and_string_agree(self) -> None:
        assert to_timestamp(date(2024, 3, 1)) == to_timestamp("2024-03-01")

    @pytest.mark.parametrize("text", ["2024/03/01", "Mar 1, 2024", "1 March 2024"])
    def test_free_form_date_strings(self, text: str) -> None:
        assert to_timestamp(text) == to_timestamp(date(2024, 3, 1))

    def test_number_taken_as_milliseconds(self) -> None:
        assert to_timestamp(1_700_000_000_000) == 1_700_000_000_000

    def test_ordering(self) -> None:
        now = datetime.now(UTC)
        assert to_timestamp(now - timedelta(days=1)) < to_timestamp(now)


class TestCopyRecord:
    def test_independent_copy(self) -> None:
        original = {"id": 1, "name": "A"}
        copied = copy_record(original)
        copied["name"] = "B"
        assert original["name"] == "A"
