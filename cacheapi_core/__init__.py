"""cacheapi - Pluggable In-Process Caching API.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.

A named-cache engine with:
- A cache manager registry with create, replace, remove and shutdown
- Loader-backed get/get_all with one in-flight load per key
- Asynchronous load/load_all returning futures, with loader failures
  delivered through the future
- Per-trigger expiry (created, modified, accessed)
- Store-by-value copying, write-through, entry listeners and statistics

Architecture:
    ┌─────────────────────────────────────────────────────────────────┐
    │                         cacheapi Engine                         │
    ├─────────────────────────────────────────────────────────────────┤
    │  ┌─────────────┐  ┌─────────────────┐                          │
    │  │   Caching   │──│ ManagerFactory  │               ACCESS     │
    │  └─────────────┘  └────────┬────────┘               LAYER      │
    │                            │                                    │
    │  ┌─────────────────────────┴──────────────────────┐            │
    │  │  CacheManager  (name -> Cache, replace/stop)   │  REGISTRY  │
    │  │  CacheBuilder  (validate, configure, build)    │  LAYER     │
    │  └─────────────────────────┬──────────────────────┘            │
    │                            │                                    │
    │  ┌─────────────────────────┴──────────────────────┐            │
    │  │  Cache                                         │            │
    │  │   ┌──────────┐  ┌────────────┐  ┌───────────┐  │  CACHE     │
    │  │   │ entries  │  │ LoadEngine │  │ in-flight │  │  LAYER     │
    │  │   │ + expiry │  │ (futures)  │  │   loads   │  │            │
    │  │   └──────────┘  └────────────┘  └───────────┘  │            │
    │  └─────────────────────────┬──────────────────────┘            │
    │                            │                                    │
    │  ┌────────────┐  ┌─────────┴──┐  ┌────────────┐  ┌──────────┐  │
    │  │ CacheLoader│  │ CacheWriter│  │  Listener  │  │  Copier  │  │
    │  └────────────┘  └────────────┘  └────────────┘  └──────────┘  │
    └─────────────────────────────────────────────────────────────────┘

Example Usage:
    from cacheapi_core import Caching, CallableLoader, Duration, ExpiryType, TimeUnit

    manager = Caching.get_cache_manager()
    users = (
        manager.create_cache_builder("users")
        .set_cache_loader(CallableLoader(fetch_user))
        .set_expiry(ExpiryType.MODIFIED, Duration(TimeUnit.MINUTES, 5))
        .build()
    )

    user = users.get(42)                   # loaded on miss, then cached
    future = users.load_all([43, 44])      # loaded on a worker thread
    loaded = future.result(timeout=1.0)

    Caching.close()
"""

__version__ = "1.0.0"
__author__ = "BlackRoad OS"

from cacheapi_core.exceptions import (
    CacheError,
    InvalidArgumentError,
    InvalidConfigurationError,
    IllegalStateError,
    UnsupportedOperationError,
    NullValueError,
)
from cacheapi_core.config.duration import Duration, TimeUnit
from cacheapi_core.config.configuration import (
    CacheConfiguration,
    ExpiryType,
    ManagerConfig,
    OptionalFeature,
)
from cacheapi_core.cache.entry import Entry
from cacheapi_core.cache.listener import CacheEntryListener, EntryEventType
from cacheapi_core.cache.statistics import CacheStatistics
from cacheapi_core.cache.cache import Cache, CacheStatus
from cacheapi_core.cache.builder import CacheBuilder
from cacheapi_core.loader.loader import CacheLoader, CallableLoader
from cacheapi_core.loader.writer import CacheWriter
from cacheapi_core.manager.manager import CacheManager
from cacheapi_core.manager.factory import CacheManagerFactory, Caching
from cacheapi_core.protocol.copier import (
    ValueCopier,
    ReferenceCopier,
    SerializingCopier,
)

__all__ = [
    # Errors
    "CacheError",
    "InvalidArgumentError",
    "InvalidConfigurationError",
    "IllegalStateError",
    "UnsupportedOperationError",
    "NullValueError",
    # Configuration
    "Duration",
    "TimeUnit",
    "CacheConfiguration",
    "ExpiryType",
    "ManagerConfig",
    "OptionalFeature",
    # Cache
    "Entry",
    "Cache",
    "CacheStatus",
    "CacheBuilder",
    "CacheStatistics",
    "CacheEntryListener",
    "EntryEventType",
    # Loading
    "CacheLoader",
    "CallableLoader",
    "CacheWriter",
    # Manager
    "CacheManager",
    "CacheManagerFactory",
    "Caching",
    # Protocol
    "ValueCopier",
    "ReferenceCopier",
    "SerializingCopier",
]
