"""Cache that never remembers anything.

Used in tests so that no answer leaks from one test to the next:

    adapter = GeopyGeocodeSearchAdapter(cache=NullCache(), _geocode_fn=fake)
"""

from __future__ import annotations

from typing import Callable, Generic, Optional, TypeVar

T = TypeVar("T")


class NullCache(Generic[T]):
    """Every lookup misses and every compute runs."""

    def get(self, key: str) -> Optional[T]:
        return None

    def contains(self, key: str) -> bool:
        return False

    def set(self, key: str, value: T, ttl: Optional[float] = None) -> None:
        pass

    def get_or_compute(self, key: str, compute_fn: Callable[[], T]) -> T:
        return compute_fn()
