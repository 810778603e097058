from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Generic, Hashable, Protocol, TypeVar

from refreshing_cache.config import CacheConfig

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")
K_contra = TypeVar("K_contra", contravariant=True)
V_co = TypeVar("V_co", covariant=True)

logger = logging.getLogger(__name__)


class BackingService(Protocol[K_contra, V_co]):
    def get(self, key: K_contra) -> V_co: ...


class Clock(Protocol):
    def now(self) -> float: ...


@dataclass(frozen=True, slots=True)
class CachedEntry(Generic[V]):
    value: V
    fetched_at: float


class RefreshingCache(Generic[K, V]):
    """Read-through cache that refetches entries older than the configured TTL.

    At most ``config.max_size`` entries are resident. Admitting a new key into
    a full cache first evicts the entry with the oldest fetch instant; among
    equal instants the key admitted earliest goes first. Eviction happens
    before the fetch, so a failing fetch still loses the victim.
    """

    def __init__(
        self,
        backing_service: BackingService[K, V],
        clock: Clock,
        config: CacheConfig,
    ) -> None:
        self._backing_service = backing_service
        self._clock = clock
        self._config = config
        self._entries: dict[K, CachedEntry[V]] = {}

    @property
    def config(self) -> CacheConfig:
        return self._config

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def get(self, key: K) -> V:
        now = self._clock.now()
        entry = self._entries.get(key)
        if entry is None:
            logger.debug("Cache miss for %r", key)
            return self._refresh(key, now)
        if self._is_stale(entry, now):
            logger.debug("Stale entry for %r, refreshing", key)
            return self._refresh(key, now)
        logger.debug("Cache hit for %r", key)
        return entry.value

    def _is_stale(self, entry: CachedEntry[V], now: float) -> bool:
        return now - entry.fetched_at > self._config.ttl_seconds

    def _refresh(self, key: K, now: float) -> V:
        if key not in self._entries:
            self._evict_oldest_if_full()
        try:
            value = self._backing_service.get(key)
        except Exception as exc:
            logger.debug("Backing fetch failed for %r: %s", key, exc)
            raise
        self._entries[key] = CachedEntry(value=value, fetched_at=now)
        return value

    def _evict_oldest_if_full(self) -> None:
        if len(self._entries) < self._config.max_size:
            return
        oldest_key = min(self._entries, key=lambda k: self._entries[k].fetched_at)
        del self._entries[oldest_key]
        logger.debug("Evicted %r to admit a new key", oldest_key)
