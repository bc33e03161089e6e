"""FX rate provider HTTP client"""

import httpx
from decimal import Decimal
from typing import Dict
from pydantic import ValidationError
from quote_engine.domain.exceptions import FxRateSourceError
from quote_engine.infrastructure.clients.schemas import ExchangeRatesPayload
from quote_engine.infrastructure.observability.metrics import fx_fetch_latency_histogram
from quote_engine.config import settings


class FxRateClient:
    """Client for an exchangerate-api style time-series provider"""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = (base_url or settings.fx_api_base).rstrip("/")
        self.timeout = timeout or settings.fx_timeout_seconds
        self.transport = transport

    async def get_rates(self, base_currency: str) -> Dict[str, Decimal]:
        """
        Fetch current rates for base_currency against all quoted currencies.

        Raises:
            FxRateSourceError: On timeout, HTTP errors, or invalid response
        """
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                with fx_fetch_latency_histogram.time():
                    response = await client.get(f"{self.base_url}/{base_currency.upper()}")
                response.raise_for_status()

                # Parse floats as Decimal so 1.15 stays 1.15
                payload = ExchangeRatesPayload.model_validate(response.json(parse_float=Decimal))
                return payload.rates

            except httpx.TimeoutException as e:
                raise FxRateSourceError(f"FX provider timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise FxRateSourceError(f"FX provider error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise FxRateSourceError(f"FX provider unreachable: {e}") from e
            except (ValidationError, ValueError) as e:
                raise FxRateSourceError(f"Invalid rate data from FX provider: {e}") from e
