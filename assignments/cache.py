"""
Time-expiring lookup cache used by the user resolver.
"""

import time
from typing import Any, Callable, Generic, Optional, TypeVar

T = TypeVar("T")

DEFAULT_TTL_SECONDS = 5 * 60

# Returned by get() on a miss, so a cached None stays distinguishable.
MISSING = object()


class TTLCache(Generic[T]):
    """
    Dict-backed cache whose entries expire ``ttl`` seconds after being set.

    Expired entries read as absent and are overwritten on the next set();
    only clear() removes anything, and there is no size bound. Concurrent
    writers to the same key simply overwrite each other.
    """

    def __init__(
        self,
        ttl: float = DEFAULT_TTL_SECONDS,
        clock: Optional[Callable[[], float]] = None,
    ):
        self.ttl = ttl
        self._clock = clock or time.monotonic
        self._entries: dict[str, tuple[T, float]] = {}

    def get(self, key: str) -> Any:
        """Return the cached value, or MISSING if absent or expired."""
        entry = self._entries.get(key)
        if entry is None:
            return MISSING

        value, timestamp = entry
        if self._clock() - timestamp >= self.ttl:
            return MISSING

        return value

    def set(self, key: str, value: T) -> None:
        self._entries[key] = (value, self._clock())

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
