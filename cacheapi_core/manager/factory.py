"""cacheapi Factory - Cache Manager Registry and Process-Wide Access Point.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
import threading
from typing import Dict, List, Optional

from cacheapi_core.cache.cache import Cache
from cacheapi_core.config.configuration import (
    SUPPORTED_FEATURES,
    ManagerConfig,
    OptionalFeature,
)
from cacheapi_core.exceptions import require_not_none
from cacheapi_core.manager.manager import CacheManager

logger = logging.getLogger(__name__)

DEFAULT_CACHE_MANAGER_NAME = "__default__"


class CacheManagerFactory:
    """Owned registry of cache managers by name.

    Managers are created on first request and forgotten when they shut
    down, so the next request for the same name yields a fresh manager.

    Example:
        factory = CacheManagerFactory()
        manager = factory.get_cache_manager()
        standalone = factory.create_cache("orders")
        manager.add_cache(standalone)
        factory.close()
    """

    def __init__(self, max_load_workers: int = 4, cleanup_interval: Optional[float] = None):
        """Initialize factory.

        Args:
            max_load_workers: Worker threads per cache for new managers
            cleanup_interval: Background purge interval for new managers
        """
        self.max_load_workers = max_load_workers
        self.cleanup_interval = cleanup_interval

        self._managers: Dict[str, CacheManager] = {}
        self._lock = threading.RLock()

    def get_cache_manager(self, name: str = DEFAULT_CACHE_MANAGER_NAME) -> CacheManager:
        """Get or create a named cache manager.

        Args:
            name: Manager name

        Returns:
            Live cache manager
        """
        require_not_none(name, "name")
        with self._lock:
            manager = self._managers.get(name)
            if manager is None:
                manager = CacheManager(
                    ManagerConfig(
                        name=name,
                        max_load_workers=self.max_load_workers,
                        cleanup_interval=self.cleanup_interval,
                    ),
                    factory=self,
                )
                self._managers[name] = manager
                logger.debug(f"Created cache manager {name}")
            return manager

    def create_cache(self, cache_name: str) -> Cache:
        """Create an unregistered cache with default options.

        The cache stays STARTING until it is added to a manager.

        Args:
            cache_name: Cache name

        Returns:
            New cache
        """
        require_not_none(cache_name, "cache_name")
        return Cache(
            cache_name,
            max_load_workers=self.max_load_workers,
            cleanup_interval=self.cleanup_interval,
        )

    def is_supported(self, feature: OptionalFeature) -> bool:
        """Check an optional feature."""
        return feature in SUPPORTED_FEATURES

    def release(self, manager: CacheManager) -> None:
        """Forget a manager that shut down."""
        with self._lock:
            if self._managers.get(manager.name) is manager:
                del self._managers[manager.name]

    def list_managers(self) -> List[str]:
        """List live manager names."""
        with self._lock:
            return list(self._managers.keys())

    def close(self, name: Optional[str] = None) -> bool:
        """Shut down one manager, or all of them.

        Args:
            name: Manager name, every manager if None

        Returns:
            True if any manager was shut down
        """
        with self._lock:
            if name is None:
                managers = list(self._managers.values())
            else:
                managers = [m for m in (self._managers.get(name),) if m is not None]

        for manager in managers:
            manager.shutdown()
        return bool(managers)


class Caching:
    """Process-wide access point to a default CacheManagerFactory.

    The factory is created lazily. ``Caching.close()`` shuts down every
    manager and drops the factory, so tests can start from a clean slate.

    Example:
        cache = Caching.get_cache_manager().create_cache_builder("c1").build()
        Caching.is_supported(OptionalFeature.TRANSACTIONS)  # False
        Caching.close()
    """

    _factory: Optional[CacheManagerFactory] = None
    _lock = threading.Lock()

    @classmethod
    def get_factory(cls) -> CacheManagerFactory:
        with cls._lock:
            if cls._factory is None:
                cls._factory = CacheManagerFactory()
            return cls._factory

    @classmethod
    def get_cache_manager(cls, name: str = DEFAULT_CACHE_MANAGER_NAME) -> CacheManager:
        """Get or create a named cache manager."""
        return cls.get_factory().get_cache_manager(name)

    @classmethod
    def is_supported(cls, feature: OptionalFeature) -> bool:
        """Check an optional feature."""
        return cls.get_factory().is_supported(feature)

    @classmethod
    def close(cls) -> None:
        """Shut down every manager and reset the default factory."""
        with cls._lock:
            factory, cls._factory = cls._factory, None
        if factory is not None:
            factory.close()
            logger.info("Caching closed")


__all__ = [
    "CacheManagerFactory",
    "Caching",
    "DEFAULT_CACHE_MANAGER_NAME",
]
