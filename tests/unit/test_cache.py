"""Unit tests for the in-memory rate cache"""

from decimal import Decimal


def test_cache_hit_within_ttl(rate_cache, clock):
    rate_cache.put(("GBP", "EUR"), Decimal("1.15"), ttl=300)
    clock.advance(120)

    assert rate_cache.get(("GBP", "EUR")) == Decimal("1.15")


def test_cache_expired_entry_is_dropped(rate_cache, clock):
    rate_cache.put(("GBP", "EUR"), Decimal("1.15"), ttl=300)
    clock.advance(300)

    assert rate_cache.get(("GBP", "EUR")) is None
    assert len(rate_cache) == 0


def test_cache_last_write_wins(rate_cache):
    rate_cache.put(("GBP", "EUR"), Decimal("1.15"), ttl=300)
    rate_cache.put(("GBP", "EUR"), Decimal("1.16"), ttl=300)

    assert rate_cache.get(("GBP", "EUR")) == Decimal("1.16")


def test_cache_miss_and_clear(rate_cache):
    assert rate_cache.get(("EUR", "USD")) is None

    rate_cache.put(("EUR", "USD"), Decimal("1.08"), ttl=300)
    rate_cache.clear()
    assert rate_cache.get(("EUR", "USD")) is None
