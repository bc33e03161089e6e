"""Component pricing - price contribution of each selected travel component"""

import logging
from decimal import Decimal
from typing import List

from quote_engine.domain.exceptions import InvalidComponentSelection
from quote_engine.domain.models import (
    AirportTransfer,
    ComponentSelection,
    Flight,
    HotelStay,
    Money,
    PriceLine,
    PricedComponent,
    TransferDirection,
)
from quote_engine.domain.money import round2
from quote_engine.utils.date_utils import nights_between

logger = logging.getLogger(__name__)


def validate_component(component: ComponentSelection) -> None:
    """
    Reject selections that cannot be priced.

    Raises:
        InvalidComponentSelection: Non-positive quantity or passengers, negative
            prices, non-positive hotel nights, mixed hotel currencies
    """
    kind = component.kind

    if component.quantity < 1:
        raise InvalidComponentSelection(kind, f"quantity must be at least 1, got {component.quantity}")

    if component.unit_price.amount < 0:
        raise InvalidComponentSelection(kind, "unit price cannot be negative")

    if isinstance(component, Flight) and component.passengers < 1:
        raise InvalidComponentSelection(kind, f"passengers must be at least 1, got {component.passengers}")

    if isinstance(component, HotelStay):
        if nights_between(component.check_in, component.check_out) <= 0:
            raise InvalidComponentSelection(kind, "check-out must be after check-in")
        base_check_in = component.base_check_in or component.check_in
        base_check_out = component.base_check_out or component.check_out
        if nights_between(base_check_in, base_check_out) < 0:
            raise InvalidComponentSelection(kind, "contracted stay ends before it starts")
        if component.extra_night_price.amount < 0:
            raise InvalidComponentSelection(kind, "extra night price cannot be negative")
        if component.extra_night_price.currency != component.unit_price.currency:
            raise InvalidComponentSelection(kind, "extra night price must share the base price currency")


class ComponentPricer:
    """Prices one component at a time, in the component's own currency. Stateless."""

    def price(self, component: ComponentSelection) -> Money:
        """Price a component; invalid selections price at zero"""
        return self.price_with_breakdown(component).amount

    def price_with_breakdown(self, component: ComponentSelection) -> PricedComponent:
        try:
            validate_component(component)
        except InvalidComponentSelection as e:
            logger.info("Component priced at zero", extra={"kind": component.kind, "reason": e.reason})
            return PricedComponent(component=component, amount=Money.zero(component.currency), issue=e)

        if isinstance(component, HotelStay):
            lines = self._hotel_lines(component)
        elif isinstance(component, Flight):
            lines = [
                PriceLine(
                    f"{component.passengers} passenger(s) x {component.unit_price.amount}",
                    component.unit_price.amount * component.passengers,
                )
            ]
        elif isinstance(component, AirportTransfer):
            legs = 2 if component.direction == TransferDirection.BOTH else 1
            lines = [
                PriceLine(
                    f"{component.quantity} x {component.unit_price.amount} ({component.direction.value})",
                    component.unit_price.amount * component.quantity * legs,
                )
            ]
        else:
            lines = [
                PriceLine(
                    f"{component.quantity} x {component.unit_price.amount}",
                    component.unit_price.amount * component.quantity,
                )
            ]

        lines = [PriceLine(line.description, round2(line.amount)) for line in lines]
        total = sum((line.amount for line in lines), Decimal("0"))
        return PricedComponent(component=component, amount=Money(round2(total), component.currency), lines=lines)

    def _hotel_lines(self, stay: HotelStay) -> List[PriceLine]:
        """
        Base stay price per room plus any nights beyond the contracted stay.

        Shortened stays still pay the full base price.
        """
        nights = nights_between(stay.check_in, stay.check_out)
        base_check_in = stay.base_check_in or stay.check_in
        base_check_out = stay.base_check_out or stay.check_out
        base_nights = nights_between(base_check_in, base_check_out)
        extra_nights = max(0, nights - base_nights)

        lines = [
            PriceLine(
                f"{stay.quantity} room(s) x {stay.base_price_per_stay.amount} ({base_nights} night base stay)",
                stay.base_price_per_stay.amount * stay.quantity,
            )
        ]
        if extra_nights:
            lines.append(
                PriceLine(
                    f"{stay.quantity} room(s) x {extra_nights} extra night(s) x {stay.extra_night_price.amount}",
                    stay.extra_night_price.amount * extra_nights * stay.quantity,
                )
            )
        return lines
