"""
Unit tests for the fallback policies.

Every helper must degrade to a default instead of raising.
"""

from datetime import date, datetime

import pytest

from skills.milestone_scheduler import (
    add_days,
    clamp,
    clamp_percent,
    date_or_default,
    days_until_max,
    field_of,
    int_or_default,
    parse_date,
    sanitize_id_part,
)


class TestParseDate:

    @pytest.mark.parametrize("value, expected", [
        ("2025-01-15", date(2025, 1, 15)),
        ("2025-01-15T10:30:00", date(2025, 1, 15)),
        ("  2025-01-15  ", date(2025, 1, 15)),
        ("January 15, 2025", date(2025, 1, 15)),
        (datetime(2025, 1, 15, 23, 59), date(2025, 1, 15)),
        (date(2025, 1, 15), date(2025, 1, 15)),
    ])
    def test_parses(self, value, expected):
        assert parse_date(value) == expected

    @pytest.mark.parametrize("value", [None, "", "   ", "banana", 12345, True, [], {}])
    def test_unparsable_returns_none(self, value):
        assert parse_date(value) is None


class TestDateOrDefault:

    def test_valid_value_wins(self):
        assert date_or_default("2024-02-29", default=date(2000, 1, 1)) == date(2024, 2, 29)

    def test_falls_back_to_default(self):
        assert date_or_default("banana", default=date(2000, 1, 1)) == date(2000, 1, 1)

    def test_falls_back_to_today(self):
        assert date_or_default(None, today=lambda: date(2025, 3, 10)) == date(2025, 3, 10)


class TestIntOrDefault:

    @pytest.mark.parametrize("value, expected", [
        (12, 12),
        ("12", 12),
        (" 7 ", 7),
        ("7 days", 7),
        ("-3", -3),
        (3.9, 3),
    ])
    def test_coerces(self, value, expected):
        assert int_or_default(value, 0) == expected

    @pytest.mark.parametrize("value", [None, "", "abc", True, float("nan"), object()])
    def test_defaults(self, value):
        assert int_or_default(value, 5) == 5


class TestClamp:

    def test_lower_bound_only(self):
        assert clamp(-2, 0) == 0
        assert clamp(1000, 0) == 1000

    def test_both_bounds(self):
        assert clamp(150, 0, 100) == 100
        assert clamp(-5, 0, 100) == 0
        assert clamp(42, 0, 100) == 42

    def test_clamp_percent(self):
        assert clamp_percent(120.5) == 100.0
        assert clamp_percent(-0.1) == 0.0
        assert clamp_percent(33.3) == pytest.approx(33.3)


class TestSanitizeIdPart:

    def test_strips_non_alphanumerics(self):
        assert sanitize_id_part("PRJ-001 / east") == "PRJ001east"

    def test_none_is_empty(self):
        assert sanitize_id_part(None) == ""

    def test_numbers(self):
        assert sanitize_id_part(1234) == "1234"


class TestAddDays:

    def test_regular_arithmetic(self):
        assert add_days(date(2025, 1, 1), 10) == date(2025, 1, 11)

    def test_saturates_at_date_max(self):
        assert add_days(date(9999, 12, 30), 7) == date.max
        assert add_days(date(2025, 1, 1), 10**12) == date.max

    def test_saturates_at_date_min(self):
        assert add_days(date(1, 1, 2), -5) == date.min

    def test_days_until_max(self):
        assert days_until_max(date(9999, 12, 30)) == 1
        assert days_until_max(date.max) == 0


class TestFieldOf:

    def test_snake_case_key(self):
        assert field_of({"is_expanded": False}, "is_expanded", True) is False

    def test_camel_case_fallback(self):
        assert field_of({"isExpanded": False}, "is_expanded", True) is False
        assert field_of({"contractDate": "2025-01-01"}, "contract_date") == "2025-01-01"

    def test_snake_case_wins(self):
        assert field_of({"is_expanded": True, "isExpanded": False}, "is_expanded") is True

    def test_default_when_absent(self):
        assert field_of({}, "is_expanded", True) is True
        assert field_of(None, "id") is None
