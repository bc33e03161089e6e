"""Configuration management using Pydantic Settings"""

from decimal import Decimal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # FX rate source
    fx_api_base: str = "https://api.exchangerate-api.com/v4/latest"
    fx_timeout_seconds: float = 5.0
    fx_cache_ttl_seconds: int = 300  # 5 minutes
    fx_display_spread: Decimal = Decimal("0.05")  # Margin on top of market rate for client quotes

    # Tenant pricing
    base_currency: str = "GBP"
    default_markup_rate: Decimal = Decimal("0.10")
    markup_exempt_tenant_id: str | None = None
    default_commission_rate: Decimal = Decimal("0.10")

    # Payment schedule
    installment_month_gap: int = 2
    event_buffer_days: int = 7

    # Service
    service_name: str = "quote-engine"
    log_level: str = "INFO"


settings = Settings()
