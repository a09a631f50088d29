"""Tests for frequency normalization and numeric coercion."""

from decimal import Decimal

import pytest

from clearsplit_core.normalizer import (
    Frequency,
    coerce_amount,
    normalize_frequency,
    to_monthly,
)


class TestToMonthly:
    """Tests for to_monthly."""

    def test_weekly(self):
        """Weekly amounts scale by 52/12."""
        assert to_monthly(100, "weekly") == Decimal(100) * 52 / 12
        assert round(to_monthly(100, "weekly"), 2) == Decimal("433.33")

    def test_biweekly(self):
        """Biweekly amounts scale by 26/12."""
        assert to_monthly(120, "biweekly") == Decimal(260)

    def test_annual(self):
        """Annual amounts divide by 12."""
        assert to_monthly(100, "annual") == Decimal(100) / 12
        assert round(to_monthly(100, "annual"), 2) == Decimal("8.33")

    def test_monthly_unchanged(self):
        assert to_monthly(100, "monthly") == Decimal(100)

    def test_unknown_frequency_is_monthly(self):
        """Unrecognized frequencies fall back to monthly."""
        assert to_monthly(100, "bogus") == Decimal(100)
        assert to_monthly(100, None) == Decimal(100)
        assert to_monthly(100, "") == Decimal(100)

    def test_frequency_is_case_insensitive(self):
        assert to_monthly(12, "ANNUAL") == Decimal(1)

    def test_accepts_enum(self):
        assert to_monthly(12, Frequency.ANNUAL) == Decimal(1)

    @pytest.mark.parametrize("amount", [None, "", "abc", float("nan"), float("inf")])
    def test_non_numeric_amount_is_zero(self, amount):
        """Non-numeric or non-finite amounts are treated as 0."""
        assert to_monthly(amount, "weekly") == Decimal(0)


class TestCoerceAmount:
    """Tests for coerce_amount."""

    def test_numbers(self):
        assert coerce_amount(5) == Decimal(5)
        assert coerce_amount(0.1) == Decimal("0.1")
        assert coerce_amount(Decimal("2.50")) == Decimal("2.50")

    def test_numeric_strings(self):
        """Strings are stripped and thousands separators removed."""
        assert coerce_amount(" 1,234.50 ") == Decimal("1234.50")
        assert coerce_amount("-20") == Decimal(-20)

    def test_booleans(self):
        assert coerce_amount(True) == Decimal(1)
        assert coerce_amount(False) == Decimal(0)

    @pytest.mark.parametrize("value", [None, "", "  ", "n/a", "NaN", "Infinity", [], {}])
    def test_invalid_input_is_zero(self, value):
        assert coerce_amount(value) == Decimal(0)


class TestNormalizeFrequency:
    """Tests for normalize_frequency."""

    def test_known_values(self):
        for freq in Frequency:
            assert normalize_frequency(freq.value) is freq

    def test_unknown_values(self):
        assert normalize_frequency("fortnightly") is Frequency.MONTHLY
        assert normalize_frequency(7) is Frequency.MONTHLY
