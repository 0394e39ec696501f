"""Shared fixtures for cacheapi tests.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

import itertools

import pytest

from cacheapi_core import Caching, CacheManagerFactory

_cache_names = itertools.count()


@pytest.fixture
def factory():
    """Fresh manager factory, closed after the test."""
    factory = CacheManagerFactory()
    yield factory
    factory.close()


@pytest.fixture
def manager(factory):
    """Default manager of a fresh factory."""
    return factory.get_cache_manager()


@pytest.fixture
def cache_name():
    """Unique cache name per test."""
    return f"test-cache-{next(_cache_names)}"


@pytest.fixture(autouse=True)
def reset_caching():
    """Keep the process-wide access point isolated between tests."""
    Caching.close()
    yield
    Caching.close()
