"""cacheapi Manager - Registry of Named Caches.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Dict, List, Optional, TYPE_CHECKING

from cacheapi_core.cache.builder import CacheBuilder
from cacheapi_core.cache.cache import Cache, CacheStatus
from cacheapi_core.config.configuration import (
    SUPPORTED_FEATURES,
    ManagerConfig,
    OptionalFeature,
)
from cacheapi_core.exceptions import (
    IllegalStateError,
    UnsupportedOperationError,
    require_not_none,
)

if TYPE_CHECKING:
    from cacheapi_core.manager.factory import CacheManagerFactory

logger = logging.getLogger(__name__)


class CacheManager:
    """Registry mapping cache names to at most one live cache each.

    Registering a cache under a taken name stops the previous cache in the
    same critical section that publishes the new one, so a reader never
    sees two started caches for one name.

    Example:
        manager = CacheManager(ManagerConfig(name="app"))
        users = manager.create_cache_builder("users").build()
        manager.get_cache("users") is users  # True
        manager.shutdown()                   # stops every cache
    """

    def __init__(
        self,
        config: Optional[ManagerConfig] = None,
        factory: Optional["CacheManagerFactory"] = None,
    ):
        """Initialize manager.

        Args:
            config: Manager configuration
            factory: Factory that created this manager
        """
        self.config = config or ManagerConfig()
        self._factory = factory

        self._caches: Dict[str, Cache] = {}
        self._lock = threading.RLock()
        self._status = CacheStatus.STARTED

    @property
    def name(self) -> str:
        return self.config.name

    def get_name(self) -> str:
        return self.config.name

    def get_status(self) -> CacheStatus:
        return self._status

    def is_supported(self, feature: OptionalFeature) -> bool:
        """Check an optional feature.

        Args:
            feature: Feature to check

        Returns:
            True if supported
        """
        if self._factory is not None:
            return self._factory.is_supported(feature)
        return feature in SUPPORTED_FEATURES

    def _check_started(self) -> None:
        if self._status is not CacheStatus.STARTED:
            raise IllegalStateError(f"Cache manager {self.name!r} has been shut down")

    def create_cache_builder(self, cache_name: str) -> CacheBuilder:
        """Create a builder for a named cache.

        Args:
            cache_name: Name of the cache to build

        Returns:
            Builder starting from this manager's default configuration

        Raises:
            InvalidArgumentError: If cache_name is None
            IllegalStateError: If the manager was shut down
        """
        require_not_none(cache_name, "cache_name")
        self._check_started()
        return CacheBuilder(cache_name, self, self.config.default_configuration)

    def get_cache(self, cache_name: str) -> Optional[Cache]:
        """Get the started cache registered under a name.

        Args:
            cache_name: Cache name

        Returns:
            Cache, or None if no started cache has that name
        """
        require_not_none(cache_name, "cache_name")
        with self._lock:
            cache = self._caches.get(cache_name)
            if cache is None:
                return None
            if cache.get_status() is not CacheStatus.STARTED:
                # stopped directly by its owner
                del self._caches[cache_name]
                return None
            return cache

    def get_caches(self) -> List[Cache]:
        """Get every started cache."""
        with self._lock:
            return [c for c in self._caches.values() if c.get_status() is CacheStatus.STARTED]

    def add_cache(self, cache: Cache) -> None:
        """Register a cache, replacing any cache with the same name.

        The cache is started if it has not been yet. A replaced cache is
        stopped.

        Args:
            cache: Cache to register

        Raises:
            InvalidArgumentError: If cache is None
            IllegalStateError: If the manager was shut down or the cache
                was already stopped
        """
        require_not_none(cache, "cache")
        with self._lock:
            self._check_started()
            cache.bind_manager(self)
            cache.start()
            previous = self._caches.get(cache.get_name())
            self._caches[cache.get_name()] = cache
            if previous is not None and previous is not cache:
                previous.stop()
                logger.info(f"Cache {cache.get_name()} replaced in manager {self.name}")

    def remove_cache(self, cache_name: str) -> bool:
        """Unregister and stop a cache.

        Args:
            cache_name: Cache name

        Returns:
            True if a cache was removed
        """
        require_not_none(cache_name, "cache_name")
        with self._lock:
            cache = self._caches.pop(cache_name, None)
        if cache is None:
            return False
        cache.stop()
        return True

    def get_user_transaction(self) -> Any:
        """Get the transaction resource.

        Raises:
            UnsupportedOperationError: Transactions are not supported
        """
        raise UnsupportedOperationError(
            f"Transactions are not supported by cache manager {self.name!r}"
        )

    def shutdown(self) -> None:
        """Stop every cache and close the manager. Idempotent."""
        with self._lock:
            if self._status is not CacheStatus.STARTED:
                return
            self._status = CacheStatus.STOPPING
            caches, self._caches = list(self._caches.values()), {}

        for cache in caches:
            cache.stop()

        with self._lock:
            self._status = CacheStatus.STOPPED
        if self._factory is not None:
            self._factory.release(self)
        logger.info(f"Cache manager {self.name} shut down, {len(caches)} caches stopped")

    def __enter__(self) -> "CacheManager":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.shutdown()

    def __repr__(self) -> str:
        return (
            f"CacheManager(name={self.name!r}, status={self._status.name}, "
            f"caches={len(self._caches)})"
        )


__all__ = ["CacheManager"]
