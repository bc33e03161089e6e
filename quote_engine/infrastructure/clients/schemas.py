"""Pydantic schemas for FX provider response validation"""

from decimal import Decimal
from typing import Dict, Optional

from pydantic import BaseModel, Field, field_validator


class ExchangeRatesPayload(BaseModel):
    """Response body for GET {fx_api_base}/{base}"""

    base: str = Field(..., min_length=3, max_length=3, description="Base currency code")
    date: Optional[str] = None
    rates: Dict[str, Decimal] = Field(default_factory=dict, description="Quote currency -> rate")

    @field_validator("base")
    @classmethod
    def upper_base(cls, value: str) -> str:
        return value.upper()

    @field_validator("rates")
    @classmethod
    def positive_rates(cls, value: Dict[str, Decimal]) -> Dict[str, Decimal]:
        # Zero or negative rates are provider glitches; treat as absent
        return {code.upper(): rate for code, rate in value.items() if rate > 0}
