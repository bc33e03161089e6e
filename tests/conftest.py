"""Pytest fixtures for testing"""

import pytest
from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock
from quote_engine.domain.currency import CurrencyConverter
from quote_engine.domain.installments import PaymentScheduler
from quote_engine.domain.models import HotelStay, Money, TenantPricingPolicy, Ticket
from quote_engine.infrastructure.cache import InMemoryRateCache


TODAY = date(2026, 10, 18)


class FakeClock:
    """Manually advanced monotonic clock"""

    def __init__(self, now: float = 1_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def rate_cache(clock: FakeClock) -> InMemoryRateCache:
    return InMemoryRateCache(clock=clock)


@pytest.fixture
def rate_provider() -> AsyncMock:
    """FX provider quoting GBP against EUR and USD"""
    provider = AsyncMock()
    provider.get_rates.return_value = {"EUR": Decimal("1.15"), "USD": Decimal("1.27")}
    return provider


@pytest.fixture
def converter(rate_provider: AsyncMock, rate_cache: InMemoryRateCache) -> CurrencyConverter:
    return CurrencyConverter(provider=rate_provider, cache=rate_cache, cache_ttl=300, timeout=1.0)


@pytest.fixture
def scheduler() -> PaymentScheduler:
    return PaymentScheduler(month_gap=2, event_buffer_days=7, today=lambda: TODAY)


@pytest.fixture
def policy() -> TenantPricingPolicy:
    """Regular tenant paying 10% markup"""
    return TenantPricingPolicy(
        tenant_id="tenant_regular",
        markup_rate=Decimal("0.10"),
        currency="GBP",
        exempt_tenant_id="tenant_exempt",
    )


@pytest.fixture
def exempt_policy() -> TenantPricingPolicy:
    return TenantPricingPolicy(
        tenant_id="tenant_exempt",
        markup_rate=Decimal("0.10"),
        currency="GBP",
        exempt_tenant_id="tenant_exempt",
    )


@pytest.fixture
def sample_components() -> list:
    """£1000 of tickets, £500 hotel with no extra nights, no transfers or lounge pass"""
    return [
        Ticket(unit_price=Money(Decimal("250.00"), "GBP"), quantity=4, label="Grandstand"),
        HotelStay(
            unit_price=Money(Decimal("500.00"), "GBP"),
            quantity=1,
            check_in=date(2027, 7, 3),
            check_out=date(2027, 7, 6),
            extra_night_price=Money(Decimal("120.00"), "GBP"),
        ),
        None,  # No lounge pass
    ]


@pytest.fixture
def today() -> date:
    return TODAY
