"""Tests for CacheManager, CacheBuilder, CacheManagerFactory and Caching.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

import pytest

from cacheapi_core import (
    CacheConfiguration,
    CacheManager,
    CacheStatus,
    Caching,
    IllegalStateError,
    InvalidArgumentError,
    InvalidConfigurationError,
    ManagerConfig,
    OptionalFeature,
    UnsupportedOperationError,
)
from tests.helpers import SimpleCacheLoader


class TestCacheManager:
    """Tests for the cache registry."""

    def test_create_cache_builder_null_name(self, manager):
        """Test a None cache name is rejected."""
        with pytest.raises(InvalidArgumentError):
            manager.create_cache_builder(None)

    def test_create_cache_same_name(self, manager, cache_name):
        """Test the built cache is the registered one."""
        cache = manager.create_cache_builder(cache_name).build()

        assert manager.get_cache(cache_name) is cache
        assert cache.get_cache_manager() is manager

    def test_create_cache_name(self, manager, cache_name):
        """Test the cache keeps its name."""
        cache = manager.create_cache_builder(cache_name).build()

        assert cache.get_name() == cache_name
        assert cache.name == cache_name

    def test_create_cache_status(self, manager, cache_name):
        """Test a built cache is started."""
        cache = manager.create_cache_builder(cache_name).build()

        assert cache.get_status() is CacheStatus.STARTED

    def test_create_cache_different(self, manager):
        """Test caches with different names coexist."""
        cache1 = manager.create_cache_builder("c1").build()
        cache2 = manager.create_cache_builder("c2").build()

        assert cache1 is not cache2
        assert manager.get_cache("c1") is cache1
        assert manager.get_cache("c2") is cache2
        assert set(manager.get_caches()) == {cache1, cache2}

    def test_create_cache_same_name_replaces(self, manager, cache_name):
        """Test building under a taken name stops the previous cache."""
        cache1 = manager.create_cache_builder(cache_name).build()
        cache1.put(1, "one")

        cache2 = manager.create_cache_builder(cache_name).build()

        assert manager.get_cache(cache_name) is cache2
        assert cache1.get_status() is CacheStatus.STOPPED
        assert cache2.get_status() is CacheStatus.STARTED
        assert not cache2.contains_key(1)
        with pytest.raises(IllegalStateError):
            cache1.get(1)

    def test_get_cache_not_there(self, manager):
        """Test an unknown name returns None."""
        assert manager.get_cache("missing") is None

    def test_get_cache_stopped_directly(self, manager, cache_name):
        """Test a cache stopped by its owner is no longer returned."""
        cache = manager.create_cache_builder(cache_name).build()
        cache.stop()

        assert manager.get_cache(cache_name) is None
        assert manager.get_caches() == []

    def test_add_cache_null(self, manager):
        """Test adding None is rejected."""
        with pytest.raises(InvalidArgumentError):
            manager.add_cache(None)

    def test_add_cache_starts(self, factory, manager, cache_name):
        """Test an added cache is started and registered."""
        cache = factory.create_cache(cache_name)
        assert cache.get_status() is CacheStatus.STARTING

        manager.add_cache(cache)

        assert cache.get_status() is CacheStatus.STARTED
        assert manager.get_cache(cache_name) is cache

    def test_add_cache_two_different(self, factory, manager):
        """Test two added caches with different names coexist."""
        cache1 = factory.create_cache("c1")
        cache2 = factory.create_cache("c2")

        manager.add_cache(cache1)
        manager.add_cache(cache2)

        assert manager.get_cache("c1") is cache1
        assert manager.get_cache("c2") is cache2

    def test_add_cache_same_name(self, factory, manager, cache_name):
        """Test adding under a taken name stops the previous cache."""
        cache1 = factory.create_cache(cache_name)
        cache2 = factory.create_cache(cache_name)

        manager.add_cache(cache1)
        manager.add_cache(cache2)

        assert manager.get_cache(cache_name) is cache2
        assert cache1.get_status() is CacheStatus.STOPPED

    def test_add_cache_same_instance(self, factory, manager, cache_name):
        """Test re-adding the registered cache leaves it running."""
        cache = factory.create_cache(cache_name)

        manager.add_cache(cache)
        manager.add_cache(cache)

        assert cache.get_status() is CacheStatus.STARTED
        assert manager.get_cache(cache_name) is cache

    def test_add_stopped_cache(self, factory, manager, cache_name):
        """Test a stopped cache cannot be restarted by adding it."""
        cache = factory.create_cache(cache_name)
        manager.add_cache(cache)
        cache.stop()

        with pytest.raises(IllegalStateError):
            manager.add_cache(cache)

    def test_remove_cache(self, manager, cache_name):
        """Test removal unregisters and stops the cache."""
        cache = manager.create_cache_builder(cache_name).build()

        assert manager.remove_cache(cache_name)

        assert manager.get_cache(cache_name) is None
        assert cache.get_status() is CacheStatus.STOPPED

    def test_remove_cache_not_there(self, manager):
        """Test removing an unknown name returns False."""
        assert not manager.remove_cache("missing")

    def test_remove_cache_null(self, manager):
        """Test removing None is rejected."""
        with pytest.raises(InvalidArgumentError):
            manager.remove_cache(None)

    def test_shutdown(self, manager):
        """Test shutdown stops every cache."""
        cache1 = manager.create_cache_builder("c1").build()
        cache2 = manager.create_cache_builder("c2").build()

        manager.shutdown()

        assert manager.get_status() is CacheStatus.STOPPED
        assert cache1.get_status() is CacheStatus.STOPPED
        assert cache2.get_status() is CacheStatus.STOPPED
        assert manager.get_cache("c1") is None

    def test_shutdown_idempotent(self, manager):
        """Test shutting down twice is harmless."""
        manager.shutdown()
        manager.shutdown()

        assert manager.get_status() is CacheStatus.STOPPED

    def test_shutdown_refuses_new_caches(self, manager, factory, cache_name):
        """Test a shut down manager builds and adds nothing."""
        manager.shutdown()

        with pytest.raises(IllegalStateError):
            manager.create_cache_builder(cache_name)
        with pytest.raises(IllegalStateError):
            manager.add_cache(factory.create_cache(cache_name))

    def test_user_transaction(self, manager):
        """Test transactions are not available."""
        with pytest.raises(UnsupportedOperationError):
            manager.get_user_transaction()

    def test_context_manager(self):
        """Test leaving the with block shuts the manager down."""
        with CacheManager(ManagerConfig(name="scoped")) as manager:
            cache = manager.create_cache_builder("c1").build()

        assert manager.get_status() is CacheStatus.STOPPED
        assert cache.get_status() is CacheStatus.STOPPED

    def test_default_configuration_template(self):
        """Test builders start from the manager's default configuration."""
        manager = CacheManager(
            ManagerConfig(default_configuration=CacheConfiguration(statistics_enabled=True))
        )
        cache = manager.create_cache_builder("c1").build()

        assert cache.get_configuration().is_statistics_enabled()
        assert cache.get_configuration() is not manager.config.default_configuration
        manager.shutdown()


class TestCacheBuilder:
    """Tests for builder validation."""

    def test_read_through_without_loader(self, manager, cache_name):
        """Test read-through requires a loader."""
        builder = manager.create_cache_builder(cache_name).set_read_through(True)

        with pytest.raises(InvalidConfigurationError):
            builder.build()
        assert manager.get_cache(cache_name) is None

    def test_write_through_without_writer(self, manager, cache_name):
        """Test write-through requires a writer."""
        builder = manager.create_cache_builder(cache_name).set_write_through(True)

        with pytest.raises(InvalidConfigurationError):
            builder.build()

    def test_read_through_with_loader(self, manager, cache_name):
        """Test read-through with a loader builds."""
        cache = (
            manager.create_cache_builder(cache_name)
            .set_read_through(True)
            .set_cache_loader(SimpleCacheLoader())
            .build()
        )

        assert cache.get_configuration().is_read_through()
        assert cache.get(5) == 5

    def test_transactions_unsupported(self, manager, cache_name):
        """Test enabling transactions raises."""
        builder = manager.create_cache_builder(cache_name)

        with pytest.raises(UnsupportedOperationError):
            builder.set_transaction_enabled(True)
        builder.set_transaction_enabled(False)

    def test_null_collaborators(self, manager, cache_name):
        """Test None loaders, writers, listeners and configurations are rejected."""
        builder = manager.create_cache_builder(cache_name)

        with pytest.raises(InvalidArgumentError):
            builder.set_cache_loader(None)
        with pytest.raises(InvalidArgumentError):
            builder.set_cache_writer(None)
        with pytest.raises(InvalidArgumentError):
            builder.add_cache_entry_listener(None)
        with pytest.raises(InvalidArgumentError):
            builder.set_cache_configuration(None)

    def test_set_cache_configuration_is_copied(self, manager, cache_name):
        """Test the built cache does not share the given configuration."""
        config = CacheConfiguration(store_by_value=False)
        cache = manager.create_cache_builder(cache_name).set_cache_configuration(config).build()

        assert cache.get_configuration() == config
        assert cache.get_configuration() is not config


class TestFactory:
    """Tests for CacheManagerFactory and Caching."""

    def test_same_manager_per_name(self, factory):
        """Test managers are shared by name."""
        assert factory.get_cache_manager() is factory.get_cache_manager()
        assert factory.get_cache_manager("a") is not factory.get_cache_manager("b")
        assert factory.get_cache_manager("a").get_name() == "a"

    def test_null_manager_name(self, factory):
        """Test a None manager name is rejected."""
        with pytest.raises(InvalidArgumentError):
            factory.get_cache_manager(None)

    def test_fresh_manager_after_shutdown(self, factory):
        """Test a shut down manager is replaced on the next request."""
        manager = factory.get_cache_manager("app")
        manager.shutdown()

        replacement = factory.get_cache_manager("app")

        assert replacement is not manager
        assert replacement.get_status() is CacheStatus.STARTED

    def test_close(self, factory):
        """Test close shuts down every manager."""
        m1 = factory.get_cache_manager("a")
        m2 = factory.get_cache_manager("b")

        assert factory.close()

        assert m1.get_status() is CacheStatus.STOPPED
        assert m2.get_status() is CacheStatus.STOPPED
        assert factory.list_managers() == []
        assert not factory.close()

    def test_close_one(self, factory):
        """Test close by name leaves other managers alone."""
        m1 = factory.get_cache_manager("a")
        m2 = factory.get_cache_manager("b")

        factory.close("a")

        assert m1.get_status() is CacheStatus.STOPPED
        assert m2.get_status() is CacheStatus.STARTED
        assert factory.list_managers() == ["b"]

    def test_optional_features(self, factory, manager):
        """Test optional feature support."""
        assert not factory.is_supported(OptionalFeature.TRANSACTIONS)
        assert not factory.is_supported(OptionalFeature.ANNOTATIONS)
        assert factory.is_supported(OptionalFeature.STORE_BY_REFERENCE)
        assert manager.is_supported(OptionalFeature.STORE_BY_REFERENCE)

    def test_caching_close(self):
        """Test Caching.close stops the default manager and its caches."""
        manager = Caching.get_cache_manager()
        cache = manager.create_cache_builder("c1").build()

        Caching.close()

        assert manager.get_status() is CacheStatus.STOPPED
        assert cache.get_status() is CacheStatus.STOPPED
        assert Caching.get_cache_manager() is not manager

    def test_caching_default_manager_shared(self):
        """Test Caching hands out one default manager."""
        assert Caching.get_cache_manager() is Caching.get_cache_manager()
        assert not Caching.is_supported(OptionalFeature.TRANSACTIONS)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
