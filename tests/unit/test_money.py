"""Unit tests for money rounding"""

import pytest
from decimal import Decimal
from quote_engine.domain.money import round2, round_total, to_decimal


def test_round2_half_away_from_zero():
    assert round2(Decimal("2.675")) == Decimal("2.68")
    assert round2(Decimal("-2.675")) == Decimal("-2.68")
    assert round2(Decimal("2.674")) == Decimal("2.67")


def test_to_decimal_float_has_no_binary_drift():
    assert to_decimal(0.1) + to_decimal(0.2) == Decimal("0.3")


def test_round_total_canonical_values():
    """Up to the next hundred, minus 2"""
    assert round_total(Decimal("1650.00")) == Decimal("1698.00")
    assert round_total(Decimal("1500.00")) == Decimal("1498.00")
    assert round_total(Decimal("1850.00")) == Decimal("1898.00")
    assert round_total(Decimal("1998.00")) == Decimal("1998.00")
    assert round_total(Decimal("2000.01")) == Decimal("2098.00")
    assert round_total(Decimal("0.01")) == Decimal("98.00")


def test_round_total_rejects_empty_quote():
    with pytest.raises(ValueError):
        round_total(Decimal("0"))
