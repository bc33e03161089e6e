"""Quote pricing pipeline - wires pricer, aggregator, converter and scheduler"""

import time
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, List, Optional

from quote_engine.config import Settings, settings
from quote_engine.domain.aggregation import QuoteAggregator
from quote_engine.domain.currency import CurrencyConverter
from quote_engine.domain.exceptions import ConversionDegraded
from quote_engine.domain.installments import PaymentScheduler
from quote_engine.domain.models import ComponentSelection, PaymentSchedule, QuoteTotal, TenantPricingPolicy
from quote_engine.infrastructure.cache import InMemoryRateCache
from quote_engine.infrastructure.clients.fx_rates import FxRateClient
from quote_engine.infrastructure.observability.logging import log_quote_priced
from quote_engine.infrastructure.observability.metrics import pricing_duration_histogram, record_quote

# Shared across pricing passes in this process
rate_cache = InMemoryRateCache()


@dataclass
class PricedQuote:
    """Final price and payment schedule for one pricing pass"""

    quote: QuoteTotal
    schedule: PaymentSchedule
    warnings: List[ConversionDegraded] = field(default_factory=list)

    @property
    def rates_approximate(self) -> bool:
        return bool(self.warnings)


def policy_for_tenant(tenant_id: str | None, config: Settings = settings) -> TenantPricingPolicy:
    """Build the tenant pricing policy from configuration"""
    return TenantPricingPolicy(
        tenant_id=tenant_id,
        markup_rate=config.default_markup_rate,
        currency=config.base_currency,
        exempt_tenant_id=config.markup_exempt_tenant_id,
        commission_rate=config.default_commission_rate,
    )


def build_converter(config: Settings = settings) -> CurrencyConverter:
    """Provide a converter backed by the live FX client and the shared cache"""
    return CurrencyConverter(
        provider=FxRateClient(base_url=config.fx_api_base, timeout=config.fx_timeout_seconds),
        cache=rate_cache,
        cache_ttl=config.fx_cache_ttl_seconds,
        timeout=config.fx_timeout_seconds,
    )


def build_aggregator(converter: CurrencyConverter | None = None, config: Settings = settings) -> QuoteAggregator:
    return QuoteAggregator(converter or build_converter(config), display_spread=config.fx_display_spread)


def build_scheduler(config: Settings = settings) -> PaymentScheduler:
    return PaymentScheduler(month_gap=config.installment_month_gap, event_buffer_days=config.event_buffer_days)


async def price_quote(
    components: Iterable[Optional[ComponentSelection]],
    policy: TenantPricingPolicy,
    display_currency: str | None = None,
    event_start_date: Optional[date] = None,
    aggregator: QuoteAggregator | None = None,
    scheduler: PaymentScheduler | None = None,
) -> PricedQuote:
    """
    Run one full pricing pass.

    Flow:
    1. Price and aggregate components under the tenant policy
    2. Convert the total into the display currency
    3. Split the display total into deposit / second / final installments
    4. Record metrics and log the outcome

    Safe to re-run on every selection change; nothing is persisted here.
    """
    start_time = time.time()
    aggregator = aggregator or build_aggregator()
    scheduler = scheduler or build_scheduler()

    with pricing_duration_histogram.time():
        quote = await aggregator.aggregate(components, policy, display_currency)
        schedule = scheduler.schedule(quote.display_total, event_start_date)

    duration_ms = (time.time() - start_time) * 1000
    record_quote(quote.is_empty, float(quote.total.amount))
    log_quote_priced(
        policy.tenant_id,
        str(quote.total.amount),
        str(quote.display_total.amount),
        len(schedule.installments),
        len(quote.warnings),
        duration_ms,
    )

    return PricedQuote(quote=quote, schedule=schedule, warnings=list(quote.warnings))
