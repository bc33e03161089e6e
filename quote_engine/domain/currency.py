"""Currency conversion with cached live rates and static fallback"""

import asyncio
import logging
from decimal import Decimal
from typing import Any, Awaitable, Dict, Hashable, Optional, Protocol

from quote_engine.domain.exceptions import ConversionDegraded, FxRateSourceError
from quote_engine.domain.models import ConversionResult, Money, RateSource
from quote_engine.domain.money import round2
from quote_engine.infrastructure.observability.logging import log_conversion_degraded
from quote_engine.infrastructure.observability.metrics import fx_conversion_counter, fx_degraded_counter

logger = logging.getLogger(__name__)

ONE = Decimal("1")

# Approximate rates used when the provider is unavailable
FALLBACK_RATES: Dict[str, Dict[str, Decimal]] = {
    "EUR": {"GBP": Decimal("0.85"), "USD": Decimal("1.08")},
    "GBP": {"EUR": Decimal("1.18"), "USD": Decimal("1.27")},
    "USD": {"EUR": Decimal("0.93"), "GBP": Decimal("0.79")},
}


class RateProvider(Protocol):
    def get_rates(self, base_currency: str) -> Awaitable[Dict[str, Decimal]]: ...


class RateCache(Protocol):
    def get(self, key: Hashable) -> Optional[Any]: ...

    def put(self, key: Hashable, value: Any, ttl: float) -> None: ...


class CurrencyConverter:
    """
    Converts Money between currencies.

    Lookup order for a (from, to) pair:
    1. Identity when currencies match (no cache, no fetch)
    2. Cached rate younger than cache_ttl
    3. Live rates for `from`, bounded by `timeout`; all returned pairs are cached
    4. Static FALLBACK_RATES, flagged with ConversionDegraded
    5. Amount returned unconverted, flagged with ConversionDegraded

    FX trouble never raises out of convert().
    """

    def __init__(
        self,
        provider: RateProvider,
        cache: RateCache,
        cache_ttl: float = 300,
        timeout: float = 5.0,
        fallback_rates: Dict[str, Dict[str, Decimal]] | None = None,
    ):
        self.provider = provider
        self.cache = cache
        self.cache_ttl = cache_ttl
        self.timeout = timeout
        self.fallback_rates = FALLBACK_RATES if fallback_rates is None else fallback_rates

    async def convert(self, amount: Money, to_currency: str, spread: Decimal = Decimal("0")) -> ConversionResult:
        """
        Convert amount into to_currency, applying `spread` on top of the market rate.

        The applied (spread-inclusive) rate is reported on the result so the
        margin stays visible to callers.
        """
        from_currency = amount.currency.upper()
        to_currency = to_currency.upper()

        if from_currency == to_currency:
            fx_conversion_counter.labels(source=RateSource.IDENTITY.value).inc()
            return ConversionResult(money=amount, rate=ONE, applied_rate=ONE, source=RateSource.IDENTITY)

        source = RateSource.CACHE
        rate = self.cache.get((from_currency, to_currency))
        reason = None

        if rate is None:
            source = RateSource.LIVE
            rate, reason = await self._fetch_rate(from_currency, to_currency)

        if rate is None:
            source = RateSource.FALLBACK
            rate = self.fallback_rates.get(from_currency, {}).get(to_currency)

        if rate is None:
            # Nothing to convert with; hand back the original amount
            return self._degraded(amount, to_currency, reason or "rate unavailable", RateSource.UNCONVERTED, ONE, ONE)

        applied_rate = rate * (ONE + spread)
        converted = Money(round2(amount.amount * applied_rate), to_currency)

        if source == RateSource.FALLBACK:
            return self._degraded(converted, to_currency, reason or "rate unavailable", source, rate, applied_rate, from_currency)

        fx_conversion_counter.labels(source=source.value).inc()
        return ConversionResult(money=converted, rate=rate, applied_rate=applied_rate, source=source)

    async def _fetch_rate(self, from_currency: str, to_currency: str) -> tuple[Decimal | None, str | None]:
        try:
            rates = await asyncio.wait_for(self.provider.get_rates(from_currency), timeout=self.timeout)
        except asyncio.TimeoutError:
            return None, f"rate fetch timed out after {self.timeout}s"
        except FxRateSourceError as e:
            return None, str(e)
        except Exception as e:
            logger.warning(
                "Unexpected FX provider failure",
                extra={"from_currency": from_currency, "error_type": type(e).__name__},
                exc_info=True,
            )
            return None, f"rate fetch failed: {e}"

        rates = {code.upper(): value for code, value in rates.items()}
        for code, value in rates.items():
            self.cache.put((from_currency, code), value, self.cache_ttl)

        rate = rates.get(to_currency)
        if rate is None:
            return None, f"no {to_currency} rate quoted for {from_currency}"
        return rate, None

    def _degraded(
        self,
        money: Money,
        to_currency: str,
        reason: str,
        source: RateSource,
        rate: Decimal,
        applied_rate: Decimal,
        from_currency: str | None = None,
    ) -> ConversionResult:
        from_currency = from_currency or money.currency
        warning = ConversionDegraded(from_currency, to_currency, reason)

        fx_conversion_counter.labels(source=source.value).inc()
        fx_degraded_counter.inc()
        log_conversion_degraded(from_currency, to_currency, reason, source.value)

        return ConversionResult(money=money, rate=rate, applied_rate=applied_rate, source=source, warning=warning)
