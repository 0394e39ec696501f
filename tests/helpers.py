"""Loaders and constants shared by the cacheapi tests.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

import threading

from cacheapi_core import CacheLoader, Entry
from cacheapi_core.exceptions import UnsupportedOperationError

FUTURE_WAIT_SECONDS = 1.0


class MockCacheLoader(CacheLoader):
    """Loader whose every method is unimplemented; override what a test needs."""

    def load(self, key):
        raise UnsupportedOperationError()

    def load_all(self, keys):
        raise UnsupportedOperationError()

    def can_load(self, key):
        raise UnsupportedOperationError()


class SimpleCacheLoader(CacheLoader):
    """Loads every key as itself, or as a fixed value, or raises."""

    def __init__(self, value=None, exception=None):
        self.value = value
        self.exception = exception
        self.load_calls = []
        self.load_all_calls = []
        self._lock = threading.Lock()

    def load(self, key):
        with self._lock:
            self.load_calls.append(key)
        if self.exception is not None:
            raise self.exception
        return Entry(key, key if self.value is None else self.value)

    def load_all(self, keys):
        with self._lock:
            self.load_all_calls.append(set(keys))
        return {key: key for key in keys}

    def can_load(self, key):
        return True
