"""
Keyed in-memory cache with a fixed time-to-live.

Entries are populated on miss by the caller, expire after a fixed duration
and are evicted lazily on the next access or write.
"""
import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, Generic, Hashable, List, Optional, Tuple, TypeVar

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


@dataclass
class CacheStats:
    """Size and keys of a cache at a point in time."""

    size: int = 0
    keys: List[Hashable] = field(default_factory=list)


class TTLCache(Generic[K, V]):
    """
    Cache whose entries expire ttl_seconds after they were stored.

    Not thread-safe; share one instance per owner.
    """

    def __init__(
        self,
        ttl_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Initialize the cache.

        Args:
            ttl_seconds: Lifetime of an entry.
            clock: Time source in seconds, injectable for tests.
        """
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[K, Tuple[float, V]] = {}

    def _is_expired(self, stored_at: float, now: float) -> bool:
        return now - stored_at > self.ttl_seconds

    def get(self, key: K) -> Optional[V]:
        """Get a live entry, dropping it if it has expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        stored_at, value = entry
        if self._is_expired(stored_at, self._clock()):
            del self._entries[key]
            logger.debug("Cache entry %r expired", key)
            return None
        return value

    def set(self, key: K, value: V) -> None:
        """Store an entry, sweeping expired ones first."""
        self.sweep_expired()
        self._entries[key] = (self._clock(), value)

    def delete(self, key: K) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()

    def sweep_expired(self) -> int:
        """
        Remove every expired entry.

        Returns:
            Number of entries removed.
        """
        now = self._clock()
        expired = [
            key for key, (stored_at, _) in self._entries.items()
            if self._is_expired(stored_at, now)
        ]
        for key in expired:
            del self._entries[key]
        return len(expired)

    def stats(self) -> CacheStats:
        return CacheStats(size=len(self._entries), keys=list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return self.get(key) is not None  # type: ignore[arg-type]
