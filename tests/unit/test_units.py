"""Tests for display-unit conversion."""

from decimal import Decimal

import pytest

from sor.units import format_units, to_base_units


class TestToBaseUnits:
    def test_fractional(self):
        assert to_base_units("1.5", 6) == 1_500_000

    def test_integer_input(self):
        assert to_base_units(3, 0) == 3

    def test_decimal_input(self):
        assert to_base_units(Decimal("2"), 18) == 2 * 10**18

    def test_truncates_extra_digits(self):
        """Digits beyond the asset precision are dropped, never rounded up."""
        assert to_base_units("0.0000019", 6) == 1

    def test_large_amount_keeps_precision(self):
        assert to_base_units("123456789012345678.123456789012345678", 18) == (
            123456789012345678123456789012345678
        )

    @pytest.mark.parametrize("value", ["abc", "-1", "NaN", "Infinity"])
    def test_rejects_invalid(self, value):
        with pytest.raises(ValueError):
            to_base_units(value, 6)


class TestFormatUnits:
    def test_strips_trailing_zeros(self):
        assert format_units(1_500_000, 6) == "1.5"

    def test_whole_amount(self):
        assert format_units(5_000_000, 6) == "5"

    def test_truncates_to_digits(self):
        assert format_units(123_456_789, 6, 2) == "123.45"

    def test_smallest_unit(self):
        assert format_units(1, 18) == "0.000000000000000001"

    def test_truncation_can_reach_zero(self):
        assert format_units(1, 18, 10) == "0"

    def test_negative(self):
        assert format_units(-1_500_000, 6) == "-1.5"
