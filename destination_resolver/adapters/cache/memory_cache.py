"""Thread-safe in-memory cache.

Holds the loaded Whisper model, the OpenAI client and geocoding answers.
A stored None is a real entry, so a geocode search that found nothing is
not repeated until its entry expires.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Generic, Optional, Tuple, TypeVar

T = TypeVar("T")

_MISSING = object()


@dataclass
class InMemoryCache(Generic[T]):
    """Dictionary cache with optional per-entry expiry.

    Implements CachePort.

    Attributes:
        default_ttl_seconds: Lifetime of new entries (None keeps them forever)
        name: Cache name, used as the logger suffix
    """

    default_ttl_seconds: Optional[float] = None
    name: str = "cache"

    _entries: Dict[str, Tuple[Any, float]] = field(default_factory=dict, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(f"cache.{self.name}")

    def _live_value(self, key: str) -> Any:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return _MISSING
            value, expires_at = entry
            if time.time() > expires_at:
                del self._entries[key]
                self._logger.debug("Entry expired", extra={"key": key})
                return _MISSING
            return value

    def get(self, key: str) -> Optional[T]:
        """Return the live value for the key, or None."""
        value = self._live_value(key)
        return None if value is _MISSING else value

    def contains(self, key: str) -> bool:
        return self._live_value(key) is not _MISSING

    def set(self, key: str, value: T, ttl: Optional[float] = None) -> None:
        """Store a value, overriding the default lifetime when ttl is given."""
        lifetime = self.default_ttl_seconds if ttl is None else ttl
        expires_at = float("inf") if lifetime is None else time.time() + lifetime
        with self._lock:
            self._entries[key] = (value, expires_at)

    def get_or_compute(self, key: str, compute_fn: Callable[[], T]) -> T:
        """Return the cached value, computing and storing it on a miss.

        The computation runs outside the lock so a slow model load does
        not block lookups of other keys.
        """
        value = self._live_value(key)
        if value is not _MISSING:
            return value

        self._logger.debug("Cache miss, computing", extra={"key": key})
        computed = compute_fn()
        self.set(key, computed)
        return computed

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
