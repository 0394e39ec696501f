"""cacheapi Loader - Cache Loader Contract.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Iterable, Optional

from cacheapi_core.cache.entry import Entry


class CacheLoader(ABC):
    """Produces values for keys missing from a cache.

    A cache holds its loader by reference for its whole lifetime and calls
    it from the calling thread (get, get_all) or from a worker thread
    (load, load_all). Exceptions raised here reach the caller unchanged.

    Contract:
        load(key) returns an Entry, or None when the key is not found.
        load_all(keys) returns a dict; keys left out are "not found",
        keys mapped to None are an error.
        can_load(key) is advisory only.
    """

    @abstractmethod
    def load(self, key: Any) -> Optional[Entry]:
        """Load one key.

        Args:
            key: Key to load

        Returns:
            Loaded entry or None if not found
        """
        pass

    @abstractmethod
    def load_all(self, keys: Iterable[Any]) -> Dict[Any, Any]:
        """Load a batch of keys.

        Args:
            keys: Keys to load

        Returns:
            Dict of key -> value for the keys found
        """
        pass

    def can_load(self, key: Any) -> bool:
        """Check whether this loader can produce a value for key."""
        return True


class CallableLoader(CacheLoader):
    """Loader backed by plain functions.

    Example:
        loader = CallableLoader(lambda user_id: db.fetch_user(user_id))
        cache = manager.create_cache_builder("users").set_cache_loader(loader).build()
    """

    def __init__(
        self,
        func: Callable[[Any], Any],
        batch_func: Optional[Callable[[Iterable[Any]], Dict[Any, Any]]] = None,
        predicate: Optional[Callable[[Any], bool]] = None,
    ):
        """Initialize callable loader.

        Args:
            func: Returns the value for one key, or None if not found
            batch_func: Returns a dict of values for many keys
            predicate: Answers can_load
        """
        self._func = func
        self._batch_func = batch_func
        self._predicate = predicate

    def load(self, key: Any) -> Optional[Entry]:
        value = self._func(key)
        if value is None:
            return None
        return Entry(key, value)

    def load_all(self, keys: Iterable[Any]) -> Dict[Any, Any]:
        if self._batch_func is not None:
            return self._batch_func(keys)

        result = {}
        for key in keys:
            value = self._func(key)
            if value is not None:
                result[key] = value
        return result

    def can_load(self, key: Any) -> bool:
        if self._predicate is None:
            return True
        return self._predicate(key)


__all__ = ["CacheLoader", "CallableLoader"]
