"""cacheapi Builder - Fluent Cache Assembly.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
from typing import List, Optional, TYPE_CHECKING

from cacheapi_core.cache.cache import Cache
from cacheapi_core.cache.listener import CacheEntryListener
from cacheapi_core.config.configuration import CacheConfiguration, ExpiryType, OptionalFeature
from cacheapi_core.config.duration import Duration
from cacheapi_core.exceptions import (
    InvalidConfigurationError,
    UnsupportedOperationError,
    require_not_none,
)

if TYPE_CHECKING:
    from cacheapi_core.loader.loader import CacheLoader
    from cacheapi_core.loader.writer import CacheWriter
    from cacheapi_core.manager.manager import CacheManager

logger = logging.getLogger(__name__)


class CacheBuilder:
    """Fluent builder for a named cache.

    A builder is obtained from ``CacheManager.create_cache_builder``;
    ``build()`` registers the cache with that manager, stopping any cache
    previously registered under the same name, and returns it started.

    Example:
        cache = (
            manager.create_cache_builder("sessions")
            .set_cache_loader(loader)
            .set_expiry(ExpiryType.ACCESSED, Duration(TimeUnit.MINUTES, 30))
            .set_statistics_enabled(True)
            .build()
        )
    """

    def __init__(
        self,
        name: str,
        manager: "CacheManager",
        configuration: Optional[CacheConfiguration] = None,
    ):
        """Initialize builder.

        Args:
            name: Cache name
            manager: Manager the built cache is registered with
            configuration: Starting options, copied
        """
        self._name = require_not_none(name, "name")
        self._manager = manager
        self._options = (configuration or CacheConfiguration()).to_dict()
        self._loader: Optional["CacheLoader"] = None
        self._writer: Optional["CacheWriter"] = None
        self._listeners: List[CacheEntryListener] = []

    @property
    def name(self) -> str:
        return self._name

    def set_cache_loader(self, loader: "CacheLoader") -> "CacheBuilder":
        """Set the loader used on misses and by load/load_all."""
        self._loader = require_not_none(loader, "loader")
        return self

    def set_cache_writer(self, writer: "CacheWriter") -> "CacheBuilder":
        """Set the writer used by write-through caches."""
        self._writer = require_not_none(writer, "writer")
        return self

    def add_cache_entry_listener(self, listener: CacheEntryListener) -> "CacheBuilder":
        """Add an entry event listener."""
        self._listeners.append(require_not_none(listener, "listener"))
        return self

    def set_cache_configuration(self, configuration: CacheConfiguration) -> "CacheBuilder":
        """Replace every option with those of configuration.

        Args:
            configuration: Options to copy

        Returns:
            Self for chaining
        """
        require_not_none(configuration, "configuration")
        self._options = configuration.to_dict()
        return self

    def set_store_by_value(self, store_by_value: bool) -> "CacheBuilder":
        """Choose store-by-value (copies) or store-by-reference."""
        if not store_by_value and not self._manager.is_supported(OptionalFeature.STORE_BY_REFERENCE):
            raise UnsupportedOperationError("Store-by-reference is not supported")
        self._options["store_by_value"] = bool(store_by_value)
        return self

    def set_statistics_enabled(self, enabled: bool) -> "CacheBuilder":
        self._options["statistics_enabled"] = bool(enabled)
        return self

    def set_read_through(self, read_through: bool) -> "CacheBuilder":
        self._options["read_through"] = bool(read_through)
        return self

    def set_write_through(self, write_through: bool) -> "CacheBuilder":
        self._options["write_through"] = bool(write_through)
        return self

    def set_transaction_enabled(self, enabled: bool) -> "CacheBuilder":
        """Enable transactions.

        Raises:
            UnsupportedOperationError: If transactions are requested and
                not supported
        """
        if enabled and not self._manager.is_supported(OptionalFeature.TRANSACTIONS):
            raise UnsupportedOperationError("Transactions are not supported")
        self._options["transactions_enabled"] = bool(enabled)
        return self

    def set_expiry(self, expiry_type: ExpiryType, duration: Duration) -> "CacheBuilder":
        """Set the duration for one expiry type."""
        require_not_none(expiry_type, "expiry_type")
        require_not_none(duration, "duration")
        expiry = dict(self._options["expiry"])
        expiry[expiry_type] = duration
        self._options["expiry"] = expiry
        return self

    def build(self) -> Cache:
        """Build, register and start the cache.

        Returns:
            Started cache

        Raises:
            InvalidConfigurationError: If read-through has no loader or
                write-through has no writer
            IllegalStateError: If the manager was shut down
        """
        if self._options["read_through"] and self._loader is None:
            raise InvalidConfigurationError(
                f"Cache {self._name!r} is read-through but has no cache loader"
            )
        if self._options["write_through"] and self._writer is None:
            raise InvalidConfigurationError(
                f"Cache {self._name!r} is write-through but has no cache writer"
            )

        cache = Cache(
            self._name,
            configuration=CacheConfiguration(**self._options),
            loader=self._loader,
            writer=self._writer,
            listeners=self._listeners,
            manager=self._manager,
            max_load_workers=self._manager.config.max_load_workers,
            cleanup_interval=self._manager.config.cleanup_interval,
        )
        self._manager.add_cache(cache)
        logger.debug(f"Built cache {self._name}")
        return cache


__all__ = ["CacheBuilder"]
