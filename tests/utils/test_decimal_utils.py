"""Tests for Decimal helpers."""

from decimal import Decimal

from wip_analytics.utils.decimal_utils import coerce_decimal, sum_decimals


def test_coerce_decimal_normalizes_raw_values():
    assert coerce_decimal(None) == Decimal("0")
    assert str(coerce_decimal(0.1)) == "0.1"
    value = Decimal("12.50")
    assert coerce_decimal(value) is value


def test_sum_decimals_treats_none_as_zero():
    assert sum_decimals([1, "2.5", None]) == Decimal("3.5")


def test_sum_decimals_of_nothing_is_decimal_zero():
    total = sum_decimals([])

    assert isinstance(total, Decimal)
    assert total == Decimal("0")
