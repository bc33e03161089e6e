"""Prometheus metrics for monitoring quote pricing and FX rate health"""

from prometheus_client import Counter, Histogram

# Quote metrics
quote_counter = Counter(
    "quote_engine_quotes_total",
    "Total pricing passes completed",
    ["outcome"],  # priced | empty
)

quote_total_bucket_counter = Counter(
    "quote_engine_total_bucket",
    "Quote totals by size bucket (tenant currency)",
    ["bucket"],  # <1k, 1k-5k, 5k-20k, 20k+
)

excluded_component_counter = Counter(
    "quote_engine_excluded_components_total",
    "Invalid component selections excluded from a quote",
    ["kind"],
)

pricing_duration_histogram = Histogram(
    "quote_engine_pricing_duration_seconds",
    "End-to-end pricing pass latency",
    buckets=[0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0],
)

# FX metrics
fx_conversion_counter = Counter(
    "fx_conversions_total",
    "Currency conversions by rate source",
    ["source"],  # identity | cache | live | fallback | unconverted
)

fx_degraded_counter = Counter(
    "fx_degraded_total",
    "Conversions that could not use a live or cached rate",
)

fx_fetch_latency_histogram = Histogram(
    "fx_fetch_latency_seconds",
    "FX provider response time",
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)


def record_quote(is_empty: bool, total_amount: float) -> None:
    """Record quote metrics for monitoring volume and price distribution"""
    if is_empty:
        quote_counter.labels(outcome="empty").inc()
        return

    quote_counter.labels(outcome="priced").inc()

    if total_amount < 1_000:
        bucket = "<1k"
    elif total_amount < 5_000:
        bucket = "1k-5k"
    elif total_amount < 20_000:
        bucket = "5k-20k"
    else:
        bucket = "20k+"

    quote_total_bucket_counter.labels(bucket=bucket).inc()
