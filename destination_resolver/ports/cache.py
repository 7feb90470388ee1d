"""Cache port - Injectable caching abstraction.

Used for loaded ASR models, the semantic client and geocoding answers,
so tests can swap in a cache that never remembers anything.
"""

from __future__ import annotations

from typing import Callable, Optional, Protocol, TypeVar

T = TypeVar("T")


class CachePort(Protocol[T]):
    """Port for caching.

    Implementations:
    - adapters/cache/memory_cache.py (InMemoryCache) - Production
    - adapters/cache/null_cache.py (NullCache) - Testing
    """

    def get(self, key: str) -> Optional[T]:
        """Return the cached value, or None if missing or expired."""
        ...

    def contains(self, key: str) -> bool:
        """Check whether a live entry exists, even one holding None."""
        ...

    def set(self, key: str, value: T) -> None:
        """Store a value under the key."""
        ...

    def get_or_compute(self, key: str, compute_fn: Callable[[], T]) -> T:
        """Get from cache or compute and cache the value.

        Args:
            key: The cache key.
            compute_fn: Function to compute the value if not cached.

        Returns:
            The cached or computed value.
        """
        ...
