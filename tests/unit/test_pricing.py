"""Unit tests for component pricing"""

import pytest
from datetime import date
from decimal import Decimal
from quote_engine.domain.exceptions import InvalidComponentSelection
from quote_engine.domain.models import (
    AirportTransfer,
    CircuitTransfer,
    Flight,
    HotelStay,
    LoungePass,
    Money,
    Ticket,
    TransferDirection,
)
from quote_engine.domain.pricing import ComponentPricer, validate_component


def gbp(amount: str) -> Money:
    return Money(Decimal(amount), "GBP")


@pytest.fixture
def pricer() -> ComponentPricer:
    return ComponentPricer()


def test_ticket_unit_price_times_quantity(pricer):
    assert pricer.price(Ticket(unit_price=gbp("250.00"), quantity=4)) == gbp("1000.00")


def test_circuit_transfer_and_lounge_pass(pricer):
    assert pricer.price(CircuitTransfer(unit_price=gbp("45.50"), quantity=3)) == gbp("136.50")
    assert pricer.price(LoungePass(unit_price=gbp("39.99"), quantity=2)) == gbp("79.98")


def test_flight_priced_per_passenger(pricer):
    flight = Flight(unit_price=Money(Decimal("189.99"), "EUR"), passengers=3)
    assert pricer.price(flight) == Money(Decimal("569.97"), "EUR")


def test_airport_transfer_both_directions_doubles(pricer):
    outbound = AirportTransfer(unit_price=gbp("80.00"), quantity=2, direction=TransferDirection.OUTBOUND)
    both = AirportTransfer(unit_price=gbp("80.00"), quantity=2, direction=TransferDirection.BOTH)

    assert pricer.price(outbound) == gbp("160.00")
    assert pricer.price(both) == gbp("320.00")


def test_hotel_base_stay_no_extra_nights(pricer):
    stay = HotelStay(
        unit_price=gbp("500.00"),
        quantity=2,
        check_in=date(2027, 7, 3),
        check_out=date(2027, 7, 6),
        base_check_in=date(2027, 7, 3),
        base_check_out=date(2027, 7, 6),
        extra_night_price=gbp("120.00"),
    )

    priced = pricer.price_with_breakdown(stay)

    assert priced.amount == gbp("1000.00")
    assert priced.valid
    assert len(priced.lines) == 1


def test_hotel_extra_nights_charged_per_room(pricer):
    """5 nights against a 3 night contract: 2 extra nights x 2 rooms"""
    stay = HotelStay(
        unit_price=gbp("500.00"),
        quantity=2,
        check_in=date(2027, 7, 2),
        check_out=date(2027, 7, 7),
        base_check_in=date(2027, 7, 3),
        base_check_out=date(2027, 7, 6),
        extra_night_price=gbp("120.00"),
    )

    priced = pricer.price_with_breakdown(stay)

    # 500 * 2 + 120 * 2 * 2
    assert priced.amount == gbp("1480.00")
    assert [line.amount for line in priced.lines] == [Decimal("1000.00"), Decimal("480.00")]


def test_hotel_shorter_stay_pays_full_base(pricer):
    stay = HotelStay(
        unit_price=gbp("500.00"),
        check_in=date(2027, 7, 4),
        check_out=date(2027, 7, 5),
        base_check_in=date(2027, 7, 3),
        base_check_out=date(2027, 7, 6),
        extra_night_price=gbp("120.00"),
    )
    assert pricer.price(stay) == gbp("500.00")


def test_hotel_checkout_before_checkin_prices_zero(pricer):
    stay = HotelStay(
        unit_price=gbp("500.00"),
        check_in=date(2027, 7, 6),
        check_out=date(2027, 7, 6),
        extra_night_price=gbp("120.00"),
    )

    priced = pricer.price_with_breakdown(stay)

    assert priced.amount == gbp("0.00")
    assert not priced.valid
    assert isinstance(priced.issue, InvalidComponentSelection)
    assert priced.issue.kind == "hotel_stay"


def test_non_positive_quantity_prices_zero_without_raising(pricer):
    ticket = Ticket(unit_price=gbp("250.00"), quantity=0)
    assert pricer.price(ticket) == gbp("0.00")


def test_validate_component_raises_for_bad_selections():
    with pytest.raises(InvalidComponentSelection):
        validate_component(Flight(unit_price=gbp("100.00"), passengers=0))

    with pytest.raises(InvalidComponentSelection):
        validate_component(Ticket(unit_price=gbp("-1.00")))

    with pytest.raises(InvalidComponentSelection):
        validate_component(
            HotelStay(
                unit_price=gbp("500.00"),
                check_in=date(2027, 7, 3),
                check_out=date(2027, 7, 6),
                extra_night_price=Money(Decimal("100.00"), "EUR"),
            )
        )


def test_hotel_pricing_is_idempotent(pricer):
    stay = HotelStay(
        unit_price=gbp("433.33"),
        quantity=3,
        check_in=date(2027, 7, 1),
        check_out=date(2027, 7, 8),
        base_check_in=date(2027, 7, 3),
        base_check_out=date(2027, 7, 6),
        extra_night_price=gbp("99.99"),
    )

    assert pricer.price(stay) == pricer.price(stay)
