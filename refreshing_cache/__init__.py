from __future__ import annotations

from refreshing_cache.cache import BackingService, CachedEntry, Clock, RefreshingCache
from refreshing_cache.clock import MonotonicClock, WallClock
from refreshing_cache.config import CacheConfig, CacheLimit, ConfigError, load_config
from refreshing_cache.http import FetchError, HttpBackingService

__all__ = [
    "RefreshingCache",
    "CachedEntry",
    "BackingService",
    "Clock",
    "CacheConfig",
    "CacheLimit",
    "ConfigError",
    "load_config",
    "MonotonicClock",
    "WallClock",
    "FetchError",
    "HttpBackingService",
]
