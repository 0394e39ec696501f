"""Manager module - Cache registry and process-wide access point."""

from cacheapi_core.manager.manager import CacheManager
from cacheapi_core.manager.factory import (
    CacheManagerFactory,
    Caching,
    DEFAULT_CACHE_MANAGER_NAME,
)

__all__ = [
    "CacheManager",
    "CacheManagerFactory",
    "Caching",
    "DEFAULT_CACHE_MANAGER_NAME",
]
