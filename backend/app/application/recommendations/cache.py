from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
import threading
import time

from app.domain.recommendations.schemas import Recommendation

DEFAULT_MAX_ENTRIES = 1024


@dataclass(slots=True)
class CacheEntry:
    expires_at: float
    value: tuple[Recommendation, ...]


class RecommendationCache:
    """Process-local TTL cache for computed recommendation lists.

    Values are stored as tuples of frozen recommendations, so a caller cannot
    change what later readers see. Expiry is checked lazily on read. Expired
    entries are also swept when a new key would push the cache past
    ``max_entries``; if the cache is still full after the sweep, the entry
    closest to expiry is dropped.
    """

    def __init__(
        self,
        *,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self._max_entries = max_entries
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> tuple[Recommendation, ...] | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if self._clock() >= entry.expires_at:
                del self._entries[key]
                return None
            return entry.value

    def set(self, key: str, value: Sequence[Recommendation], ttl_seconds: float) -> None:
        with self._lock:
            now = self._clock()
            if key not in self._entries and len(self._entries) >= self._max_entries:
                self._sweep_locked(now)
                if len(self._entries) >= self._max_entries:
                    oldest = min(self._entries, key=lambda existing: self._entries[existing].expires_at)
                    del self._entries[oldest]
            self._entries[key] = CacheEntry(expires_at=now + ttl_seconds, value=tuple(value))

    def invalidate_prefix(self, prefix: str) -> int:
        with self._lock:
            doomed = [key for key in self._entries if key.startswith(prefix)]
            for key in doomed:
                del self._entries[key]
            return len(doomed)

    def sweep(self) -> int:
        with self._lock:
            return self._sweep_locked(self._clock())

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _sweep_locked(self, now: float) -> int:
        expired = [key for key, entry in self._entries.items() if now >= entry.expires_at]
        for key in expired:
            del self._entries[key]
        return len(expired)
