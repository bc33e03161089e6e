"""
Structured JSON logging for production observability.

The engine never configures logging on import. The host process calls
setup_logging(settings.log_level) once at startup, before pricing quotes.
"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger.json import JsonFormatter

from quote_engine.config import settings


class CustomJsonFormatter(JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_quote_priced(
    tenant_id: str | None,
    total: str,
    display_total: str,
    installments: int,
    warnings: int,
    duration_ms: float,
) -> None:
    """Log structured pricing outcome for analysis"""
    logging.info(
        "Quote priced",
        extra={
            "tenant_id": tenant_id,
            "step": "quote_priced",
            "total": total,
            "display_total": display_total,
            "installments": installments,
            "warnings": warnings,
            "duration_ms": duration_ms,
        },
    )


def log_conversion_degraded(from_currency: str, to_currency: str, reason: str, source: str) -> None:
    """Log that a conversion fell back to approximate or no rates"""
    logging.warning(
        "FX conversion degraded",
        extra={
            "step": "fx_conversion",
            "from_currency": from_currency,
            "to_currency": to_currency,
            "reason": reason,
            "rate_source": source,
        },
    )
