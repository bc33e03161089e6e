"""In-memory TTL cache for FX rates"""

import time
from typing import Any, Callable, Dict, Hashable, Optional, Tuple


class InMemoryRateCache:
    """
    Process-wide TTL cache.

    Entries are advisory: a miss or an expired entry only costs a refetch.
    Concurrent writers are fine, last write wins. The clock is injectable so
    tests can move time deterministically.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._entries: Dict[Hashable, Tuple[Any, float]] = {}

    def get(self, key: Hashable) -> Optional[Any]:
        """Return cached value, or None on miss or expiry"""
        entry = self._entries.get(key)
        if entry is None:
            return None

        value, expires_at = entry
        if self._clock() >= expires_at:
            self._entries.pop(key, None)
            return None
        return value

    def put(self, key: Hashable, value: Any, ttl: float) -> None:
        self._entries[key] = (value, self._clock() + ttl)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
