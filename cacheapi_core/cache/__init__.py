"""Cache module - Entry store, asynchronous loading and builder."""

from cacheapi_core.cache.entry import (
    Entry,
    CacheEntry,
    EntryState,
    EntryMetadata,
)
from cacheapi_core.cache.listener import (
    CacheEntryListener,
    EntryEventType,
)
from cacheapi_core.cache.statistics import CacheStatistics
from cacheapi_core.cache.cache import (
    Cache,
    CacheStatus,
)
from cacheapi_core.cache.builder import CacheBuilder

__all__ = [
    "Entry",
    "CacheEntry",
    "EntryState",
    "EntryMetadata",
    "CacheEntryListener",
    "EntryEventType",
    "CacheStatistics",
    "Cache",
    "CacheStatus",
    "CacheBuilder",
]
