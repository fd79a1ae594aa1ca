"""
Unit tests for the pricing calculator.

Tests cover:
- final_price under the percentage convention
- line_subtotal and its quantity checks
- percent/factor conversion and percent parsing
- Display formatting

Version: 1.0.0
"""
import math

import pytest

from autoparts_hub.utils.pricing import (
    factor_to_percent,
    final_price,
    format_percent,
    format_price,
    line_subtotal,
    parse_percent,
    percent_to_factor,
)


pytestmark = pytest.mark.unit


class TestFinalPrice:

    def test_base_cost_plus_percentage(self):
        assert final_price(15000, 25) == pytest.approx(18750)

    def test_zero_markup_is_cost(self):
        assert final_price(8500, 0) == 8500

    def test_zero_cost_is_zero(self):
        assert final_price(0, 40) == 0

    @pytest.mark.parametrize("base_cost", [1, 0.5, 8500, 123456.78])
    @pytest.mark.parametrize("markup", [0, 12.5, 25, 100, 250])
    def test_ratio_recovers_markup_factor(self, base_cost, markup):
        ratio = final_price(base_cost, markup) / base_cost
        assert math.isclose(ratio, 1 + markup / 100, rel_tol=1e-12)

    def test_no_rounding(self):
        assert final_price(10, 33.333) == pytest.approx(13.3333)


class TestLineSubtotal:

    def test_unit_price_times_quantity(self):
        assert line_subtotal(18750, 3) == pytest.approx(56250)

    @pytest.mark.parametrize("quantity", [0, -1, 1.5, True, "2", None])
    def test_rejects_non_positive_or_non_integer_quantity(self, quantity):
        with pytest.raises(ValueError):
            line_subtotal(100, quantity)


class TestConversions:

    def test_percent_to_factor(self):
        assert percent_to_factor(30) == pytest.approx(1.30)

    def test_factor_to_percent(self):
        assert factor_to_percent(1.25) == pytest.approx(25)

    def test_conversion_is_reversible(self):
        assert factor_to_percent(percent_to_factor(17.5)) == pytest.approx(17.5)

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("30", 30.0), ("30%", 30.0), (" 30.5 ", 30.5), ("12,5", 12.5), (40, 40.0),
            ("abc", None), ("", None), (True, None),
        ],
    )
    def test_parse_percent(self, raw, expected):
        assert parse_percent(raw) == expected


class TestFormatting:

    def test_format_price_uses_argentine_separators(self):
        assert format_price(18750) == "$ 18.750,00"

    def test_format_price_large_amount(self):
        assert format_price(1234567.891) == "$ 1.234.567,89"

    def test_format_price_negative(self):
        assert format_price(-5.5) == "-$ 5,50"

    def test_format_percent(self):
        assert format_percent(25.0) == "25"
        assert format_percent(12.5) == "12.5"
