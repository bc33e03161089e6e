"""Quote aggregation - subtotal, tenant markup, canonical rounding, display currency"""

from decimal import Decimal
from typing import Iterable, List, Optional

from quote_engine.domain.currency import CurrencyConverter
from quote_engine.domain.exceptions import ConversionDegraded
from quote_engine.domain.models import (
    ComponentSelection,
    Money,
    PricedComponent,
    QuoteTotal,
    TenantPricingPolicy,
)
from quote_engine.domain.money import round2, round_total
from quote_engine.domain.pricing import ComponentPricer
from quote_engine.infrastructure.observability.metrics import excluded_component_counter


class QuoteAggregator:
    """Turns component selections into a single bindable QuoteTotal"""

    def __init__(
        self,
        converter: CurrencyConverter,
        pricer: ComponentPricer | None = None,
        display_spread: Decimal = Decimal("0.05"),
    ):
        self.converter = converter
        self.pricer = pricer or ComponentPricer()
        self.display_spread = display_spread

    async def aggregate(
        self,
        components: Iterable[Optional[ComponentSelection]],
        policy: TenantPricingPolicy,
        display_currency: str | None = None,
    ) -> QuoteTotal:
        """
        Price and sum components, then apply markup and canonical rounding.

        Flow:
        1. Skip absent (None) components, price the rest
        2. Exclude invalid selections from the sum
        3. Convert each price into the tenant currency (market rate, no spread)
        4. markup = subtotal * effective markup rate (0 for the exempt tenant)
        5. total = canonical_round(subtotal + markup), applied exactly once
        6. Convert total into the display currency with the display spread
        """
        currency = policy.currency.upper()
        display_currency = (display_currency or currency).upper()

        line_items: List[PricedComponent] = []
        excluded: List[PricedComponent] = []
        warnings: List[ConversionDegraded] = []
        subtotal = Decimal("0")

        for component in components:
            if component is None:
                continue

            priced = self.pricer.price_with_breakdown(component)
            if not priced.valid:
                excluded_component_counter.labels(kind=component.kind).inc()
                excluded.append(priced)
                continue

            conversion = await self.converter.convert(priced.amount, currency)
            if conversion.warning is not None:
                warnings.append(conversion.warning)
            line_items.append(priced)
            subtotal += conversion.money.amount

        subtotal = round2(subtotal)

        if subtotal == 0:
            # Empty quote: no canonical rounding, never a negative price
            zero = Money.zero(currency)
            return QuoteTotal(
                subtotal=zero,
                markup_amount=zero,
                raw_total=zero,
                total=zero,
                commission_amount=zero,
                display_currency=display_currency,
                display_total=Money.zero(display_currency),
                exchange_rate=Decimal("1"),
                line_items=line_items,
                excluded=excluded,
                warnings=warnings,
                is_empty=True,
            )

        markup = round2(subtotal * policy.effective_markup_rate)
        raw_total = subtotal + markup
        total = round_total(raw_total)
        commission = round2(total * policy.commission_rate)

        display = await self.converter.convert(Money(total, currency), display_currency, spread=self.display_spread)
        if display.warning is not None:
            warnings.append(display.warning)

        return QuoteTotal(
            subtotal=Money(subtotal, currency),
            markup_amount=Money(markup, currency),
            raw_total=Money(raw_total, currency),
            total=Money(total, currency),
            commission_amount=Money(commission, currency),
            display_currency=display_currency,
            display_total=display.money,
            exchange_rate=display.applied_rate,
            line_items=line_items,
            excluded=excluded,
            warnings=warnings,
        )
