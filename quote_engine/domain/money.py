"""Decimal money arithmetic and the canonical total rounding rule"""

from decimal import Decimal, ROUND_CEILING, ROUND_HALF_UP

from quote_engine.domain.models import Money

MONEY_PLACES = Decimal("0.01")
ROUNDING_STEP = Decimal("100")
ROUNDING_OFFSET = Decimal("2")


def to_decimal(value: Decimal | int | float | str) -> Decimal:
    """Coerce to Decimal; floats go through str() to avoid binary drift"""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def round2(value: Decimal | int | float | str) -> Decimal:
    """Round to cents, half away from zero"""
    return to_decimal(value).quantize(MONEY_PLACES, rounding=ROUND_HALF_UP)


def money(value: Decimal | int | float | str, currency: str) -> Money:
    return Money(round2(value), currency)


def round_total(raw_total: Decimal) -> Decimal:
    """
    Canonical quote rounding: up to the next hundred, minus 2.

    1650.00 -> 1698, 1500.00 -> 1498, 1850.00 -> 1898.

    Only defined for positive totals. An empty quote (zero subtotal) never
    reaches this rule; the aggregator reports it as is_empty instead of -2.
    """
    if raw_total <= 0:
        raise ValueError(f"Canonical rounding requires a positive total, got {raw_total}")

    hundreds = (raw_total / ROUNDING_STEP).to_integral_value(rounding=ROUND_CEILING)
    return round2(hundreds * ROUNDING_STEP - ROUNDING_OFFSET)
