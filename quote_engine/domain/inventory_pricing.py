"""Back-office cost calculators used to set inventory sell prices"""

import math
from decimal import Decimal

from quote_engine.domain.currency import CurrencyConverter
from quote_engine.domain.models import CircuitTransferCosting, Money, SupplierRoomCost
from quote_engine.domain.money import round2, to_decimal

ZERO = Decimal("0")
ONE = Decimal("1")
HUNDRED = Decimal("100")

RESORT_FEE_PER_NIGHT = "per_night"
RESORT_FEE_PER_STAY = "per_stay"


def price_with_markup(price: Decimal, markup_percent: Decimal) -> Decimal:
    """Inventory sell price: price plus markup_percent, rounded to cents"""
    return round2(price + price * to_decimal(markup_percent) / HUNDRED)


def derive_effective_rate(unit_price: Decimal, converted_unit_price: Decimal | None) -> Decimal:
    """
    Rate actually applied to the unit price, recovered as converted / original.

    No conversion (None) means rate 1. A zero unit price carries no rate
    information, so it also yields 1.
    """
    if converted_unit_price is None or unit_price == 0:
        return ONE
    return converted_unit_price / unit_price


def supplier_room_cost(
    supplier_price_per_night: Decimal,
    nights: int,
    currency: str,
    vat_percent: Decimal = ZERO,
    city_tax_per_person_per_night: Decimal = ZERO,
    resort_fee: Decimal = ZERO,
    breakfast_price_per_person: Decimal = ZERO,
    max_people: int = 1,
    effective_rate: Decimal = ONE,
    resort_fee_type: str = RESORT_FEE_PER_NIGHT,
) -> SupplierRoomCost:
    """
    Full supplier cost of a room in the target currency.

    per_night = supplier + supplier * VAT% + city_tax * people + resort_fee + breakfast * people
    per_night_target = per_night * effective_rate
    per_stay = per_night_target * nights

    A per-stay resort fee is added once to the stay total instead of nightly.
    """
    if resort_fee_type not in (RESORT_FEE_PER_NIGHT, RESORT_FEE_PER_STAY):
        raise ValueError(f"Unknown resort fee type: {resort_fee_type}")

    nightly_resort_fee = resort_fee if resort_fee_type == RESORT_FEE_PER_NIGHT else ZERO

    per_night = round2(
        supplier_price_per_night
        + supplier_price_per_night * to_decimal(vat_percent) / HUNDRED
        + city_tax_per_person_per_night * max_people
        + nightly_resort_fee
        + breakfast_price_per_person * max_people
    )
    per_night_target = round2(per_night * effective_rate)
    per_stay = round2(per_night_target * max(nights, 0))

    if resort_fee_type == RESORT_FEE_PER_STAY:
        per_stay = round2(per_stay + resort_fee * effective_rate)

    return SupplierRoomCost(
        total_supplier_price_per_night=per_night,
        effective_rate=effective_rate,
        total_price_per_night_target_currency=per_night_target,
        total_price_per_stay=per_stay,
        currency=currency,
    )


async def convert_supplier_room_cost(
    converter: CurrencyConverter,
    supplier_price_per_night: Money,
    target_currency: str,
    nights: int,
    **costs,
) -> SupplierRoomCost:
    """
    Supplier room cost with the rate recovered from converting the unit price.

    Deriving the rate from the conversion actually applied keeps downstream
    markup math consistent with the unit price the agent sees.
    """
    converted_unit_price = None
    if supplier_price_per_night.currency.upper() != target_currency.upper():
        result = await converter.convert(supplier_price_per_night, target_currency)
        converted_unit_price = result.money.amount

    rate = derive_effective_rate(supplier_price_per_night.amount, converted_unit_price)
    return supplier_room_cost(
        supplier_price_per_night.amount,
        nights,
        target_currency.upper(),
        effective_rate=rate,
        **costs,
    )


def circuit_transfer_costing(
    coach_cost_per_day_local: Decimal,
    days: int,
    coach_capacity: int,
    exchange_rate: Decimal = ONE,
    seats_reserved: int = 0,
    parking_per_coach_per_day: Decimal = ZERO,
    coach_vat_percent: Decimal = ZERO,
    guide_included: bool = False,
    guide_cost_per_day: Decimal = ZERO,
    guide_vat_percent: Decimal = ZERO,
    utilisation_percent: Decimal = HUNDRED,
    markup_percent: Decimal = ZERO,
) -> CircuitTransferCosting:
    """
    Per-seat cost of running coaches (and a guide) for a circuit transfer.

    Seat cost spreads the coach and guide cost over the seats expected to be
    filled (capacity * utilisation%). Local amounts are in the supplier
    currency; target amounts use exchange_rate.
    """
    capacity = max(coach_capacity or 1, 1)
    utilisation = to_decimal(utilisation_percent or HUNDRED)
    coaches_required = math.ceil(max(seats_reserved, 0) / capacity)

    coach_cost_local = round2(
        (coach_cost_per_day_local * days + parking_per_coach_per_day * days * coaches_required)
        * (ONE + to_decimal(coach_vat_percent) / HUNDRED)
    )
    guide_cost_local = (
        ZERO
        if guide_included
        else round2(guide_cost_per_day * days * (ONE + to_decimal(guide_vat_percent) / HUNDRED))
    )

    seats_to_fill = capacity * utilisation / HUNDRED
    per_seat_local = round2((coach_cost_local + guide_cost_local) / seats_to_fill)

    coach_cost_target = round2(coach_cost_local * exchange_rate)
    guide_cost_target = round2(guide_cost_local * exchange_rate)
    per_seat_target = round2((coach_cost_target + guide_cost_target) / seats_to_fill)
    sell_price_per_seat = round2(per_seat_target * (ONE + to_decimal(markup_percent) / HUNDRED))

    return CircuitTransferCosting(
        coaches_required=coaches_required,
        coach_cost_local=coach_cost_local,
        guide_cost_local=guide_cost_local,
        utilisation_cost_per_seat_local=per_seat_local,
        coach_cost_target=coach_cost_target,
        guide_cost_target=guide_cost_target,
        utilisation_cost_per_seat_target=per_seat_target,
        sell_price_per_seat_target=sell_price_per_seat,
    )
