"""Tests for Decimal coercion and rounding (nomina_kernel/domain/amounts.py)."""

from decimal import Decimal

import pytest

from nomina_kernel.domain.amounts import quantize_cents, sum_amounts, to_decimal
from nomina_kernel.exceptions import InvalidAmountError


class TestToDecimal:

    @pytest.mark.parametrize(
        "value, expected",
        [(48000, Decimal("48000")), ("2500.50", Decimal("2500.50")),
         (0.1, Decimal("0.1")), (Decimal("-500"), Decimal("-500")), (" 12 ", Decimal("12"))],
    )
    def test_accepted_values(self, value, expected):
        assert to_decimal(value) == expected

    @pytest.mark.parametrize("value", [True, "abc", "NaN", "Infinity", None, [1]])
    def test_rejected_values(self, value):
        with pytest.raises(InvalidAmountError):
            to_decimal(value)

    def test_field_name_carried(self):
        with pytest.raises(InvalidAmountError) as exc_info:
            to_decimal("x", "gross_salary")
        assert exc_info.value.field == "gross_salary"


class TestRounding:

    @pytest.mark.parametrize(
        "value, expected",
        [("1833.335", "1833.34"), ("1833.334", "1833.33"), ("-0.005", "-0.01"), ("24000", "24000.00")],
    )
    def test_half_up_to_cents(self, value, expected):
        assert quantize_cents(Decimal(value)) == Decimal(expected)

    def test_sum_of_nothing_is_zero(self):
        assert sum_amounts([]) == Decimal("0")

    def test_sum(self):
        assert sum_amounts([Decimal("1.10"), Decimal("2.20")]) == Decimal("3.30")
