"""cacheapi Cache - Named Entry Store with Loader Integration.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import Future
from datetime import datetime
from enum import Enum, auto
from typing import (
    Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, TYPE_CHECKING,
)

from cacheapi_core.cache.entry import CacheEntry, Entry
from cacheapi_core.cache.listener import CacheEntryListener, EntryEventType
from cacheapi_core.cache.loading import InFlightLoads, LoadEngine, completed_future
from cacheapi_core.cache.statistics import CacheStatistics
from cacheapi_core.config.configuration import CacheConfiguration
from cacheapi_core.exceptions import (
    IllegalStateError,
    NullValueError,
    require_keys,
    require_not_none,
)
from cacheapi_core.protocol.copier import copier_for

if TYPE_CHECKING:
    from cacheapi_core.loader.loader import CacheLoader
    from cacheapi_core.loader.writer import CacheWriter
    from cacheapi_core.manager.manager import CacheManager

logger = logging.getLogger(__name__)

_MISSING = object()

Events = List[Tuple[EntryEventType, Entry]]


class CacheStatus(Enum):
    """Cache lifecycle states, in order. A cache never moves backwards."""

    STARTING = auto()
    STARTED = auto()
    STOPPING = auto()
    STOPPED = auto()


class Cache:
    """Thread-safe named cache.

    Features:
    - Read-through on get/get_all through a CacheLoader, one in-flight
      load per key
    - Asynchronous load/load_all returning futures
    - Conditional mutation (put_if_absent, replace, remove with expected
      value) as atomic check-and-set
    - Per-trigger expiry (created, modified, accessed)
    - Store-by-value copying
    - Optional write-through, entry listeners and statistics

    Example:
        cache = manager.create_cache_builder("users").set_cache_loader(loader).build()

        cache.put(1, "alice")
        cache.get(1)              # "alice"
        cache.get(2)              # loaded through the loader and stored

        future = cache.load(3)    # runs on a worker
        future.result(timeout=1.0)
    """

    def __init__(
        self,
        name: str,
        configuration: Optional[CacheConfiguration] = None,
        loader: Optional["CacheLoader"] = None,
        writer: Optional["CacheWriter"] = None,
        listeners: Optional[Iterable[CacheEntryListener]] = None,
        manager: Optional["CacheManager"] = None,
        max_load_workers: int = 4,
        cleanup_interval: Optional[float] = None,
    ):
        """Initialize cache in the STARTING state.

        Args:
            name: Cache name
            configuration: Cache configuration, defaults used if None
            loader: Loader for misses and load/load_all
            writer: Writer for write-through caches
            listeners: Entry event listeners
            manager: Owning manager
            max_load_workers: Worker threads for load/load_all
            cleanup_interval: Seconds between background purges of
                expired entries; no background purge if None
        """
        self._name = require_not_none(name, "name")
        self._configuration = configuration if configuration is not None else CacheConfiguration()
        self._loader = loader
        self._writer = writer
        self._listeners: List[CacheEntryListener] = list(listeners or [])
        self._manager = manager
        self._copier = copier_for(self._configuration.is_store_by_value())

        self._entries: Dict[Any, CacheEntry] = {}
        self._lock = threading.RLock()
        self._status = CacheStatus.STARTING
        self._stats = CacheStatistics()

        self._engine = LoadEngine(name, max_load_workers)
        self._in_flight = InFlightLoads()

        self._cleanup_interval = cleanup_interval
        self._cleanup_thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()

    # ---------- lifecycle ----------

    @property
    def name(self) -> str:
        return self._name

    @property
    def status(self) -> CacheStatus:
        return self._status

    def get_name(self) -> str:
        return self._name

    def get_status(self) -> CacheStatus:
        return self._status

    def get_configuration(self) -> CacheConfiguration:
        return self._configuration

    def get_cache_manager(self) -> Optional["CacheManager"]:
        return self._manager

    def get_statistics(self) -> CacheStatistics:
        return self._stats

    def bind_manager(self, manager: "CacheManager") -> None:
        """Record the manager this cache is registered with."""
        self._manager = manager

    def start(self) -> None:
        """Move STARTING to STARTED.

        Raises:
            IllegalStateError: If the cache was stopped
        """
        with self._lock:
            if self._status is CacheStatus.STARTED:
                return
            if self._status is not CacheStatus.STARTING:
                raise IllegalStateError(
                    f"Cache {self._name!r} is {self._status.name} and cannot be restarted"
                )
            self._status = CacheStatus.STARTED
            self._stats.started_at = datetime.now()

        if self._cleanup_interval is not None:
            self._cleanup_thread = threading.Thread(
                target=self._cleanup_loop,
                daemon=True,
                name=f"Cache-{self._name}-cleanup",
            )
            self._cleanup_thread.start()
        logger.info(f"Cache {self._name} started")

    def stop(self) -> None:
        """Stop the cache, discarding every entry. Idempotent."""
        with self._lock:
            if self._status in (CacheStatus.STOPPING, CacheStatus.STOPPED):
                return
            self._status = CacheStatus.STOPPING
            self._entries.clear()

        self._stop_event.set()
        self._engine.shutdown()
        if self._cleanup_thread is not None and self._cleanup_thread is not threading.current_thread():
            self._cleanup_thread.join(timeout=5.0)
            self._cleanup_thread = None

        with self._lock:
            self._status = CacheStatus.STOPPED
        logger.info(f"Cache {self._name} stopped")

    def _check_started(self) -> None:
        if self._status is not CacheStatus.STARTED:
            raise IllegalStateError(
                f"Cache {self._name!r} is {self._status.name}, not STARTED"
            )

    # ---------- reads ----------

    def get(self, key: Any) -> Any:
        """Get a value, loading it on a miss.

        Args:
            key: Cache key

        Returns:
            Stored or loaded value, or None if neither exists

        Raises:
            InvalidArgumentError: If key is None
            NullValueError: If the loader produced a None value
        """
        self._check_started()
        require_not_none(key, "key")

        events: Events = []
        try:
            with self._lock:
                entry = self._lookup(key, events)
                if entry is not None:
                    self._count("hits")
                    entry.touch()
                    return self._copier.copy(entry.value)
                self._count("misses")
        finally:
            self._notify(events)

        if self._loader is None:
            return None
        return self._load_through(key)

    def get_all(self, keys: Iterable[Any]) -> Dict[Any, Any]:
        """Get many values, loading each missing key at most once.

        Args:
            keys: Keys to get

        Returns:
            Dict of key -> value for every key that resolves to a value
        """
        self._check_started()
        keys = require_keys(keys)

        result: Dict[Any, Any] = {}
        missing: List[Any] = []
        events: Events = []
        try:
            with self._lock:
                for key in dict.fromkeys(keys):
                    entry = self._lookup(key, events)
                    if entry is None:
                        self._count("misses")
                        missing.append(key)
                        continue
                    self._count("hits")
                    entry.touch()
                    result[key] = self._copier.copy(entry.value)
        finally:
            self._notify(events)

        if self._loader is not None:
            for key in missing:
                value = self._load_through(key)
                if value is not None:
                    result[key] = value
        return result

    def contains_key(self, key: Any) -> bool:
        """Check whether key is stored. Never loads.

        Args:
            key: Cache key

        Returns:
            True if a live entry exists
        """
        self._check_started()
        require_not_none(key, "key")
        return self._contains(key)

    # ---------- writes ----------

    def put(self, key: Any, value: Any) -> None:
        """Store a value.

        Args:
            key: Cache key
            value: Value to store
        """
        self.get_and_put(key, value)

    def get_and_put(self, key: Any, value: Any) -> Any:
        """Store a value and return the previous one.

        Args:
            key: Cache key
            value: Value to store

        Returns:
            Previous value or None
        """
        self._check_started()
        require_not_none(key, "key")
        require_not_none(value, "value")
        stored = self._copier.copy(value)

        events: Events = []
        try:
            with self._lock:
                self._write_through(key, value)
                return self._store(key, stored, events)
        finally:
            self._notify(events)

    def put_all(self, mapping: Mapping[Any, Any]) -> None:
        """Store many values.

        Args:
            mapping: Dict of key -> value
        """
        self._check_started()
        require_not_none(mapping, "mapping")
        items = list(mapping.items())
        for key, value in items:
            require_not_none(key, "key")
            require_not_none(value, "value")
        copies = [self._copier.copy(value) for _, value in items]

        events: Events = []
        try:
            with self._lock:
                if self._writes_through():
                    self._writer.write_all([Entry(k, v) for k, v in items])
                for (key, _), stored in zip(items, copies):
                    self._store(key, stored, events)
        finally:
            self._notify(events)

    def put_if_absent(self, key: Any, value: Any) -> bool:
        """Store a value only if key has none.

        Args:
            key: Cache key
            value: Value to store

        Returns:
            True if stored
        """
        self._check_started()
        require_not_none(key, "key")
        require_not_none(value, "value")
        stored = self._copier.copy(value)

        events: Events = []
        try:
            with self._lock:
                if self._lookup(key, events) is not None:
                    return False
                self._write_through(key, value)
                self._store(key, stored, events)
                return True
        finally:
            self._notify(events)

    def replace(self, key: Any, value: Any, new_value: Any = _MISSING) -> bool:
        """Replace a stored value.

        ``replace(key, value)`` replaces whatever is stored.
        ``replace(key, old_value, new_value)`` replaces only if the stored
        value equals old_value.

        Args:
            key: Cache key
            value: New value, or the expected value when new_value is given
            new_value: New value for the conditional form

        Returns:
            True if replaced
        """
        self._check_started()
        require_not_none(key, "key")
        require_not_none(value, "value")
        if new_value is _MISSING:
            expected, replacement = _MISSING, value
        else:
            expected, replacement = value, require_not_none(new_value, "new_value")
        stored = self._copier.copy(replacement)

        events: Events = []
        try:
            with self._lock:
                entry = self._lookup(key, events)
                if entry is None:
                    return False
                if expected is not _MISSING and entry.value != expected:
                    return False
                self._write_through(key, replacement)
                self._store(key, stored, events)
                return True
        finally:
            self._notify(events)

    def get_and_replace(self, key: Any, value: Any) -> Any:
        """Replace a stored value and return the previous one.

        Args:
            key: Cache key
            value: New value

        Returns:
            Previous value, or None if key was absent (nothing is stored)
        """
        self._check_started()
        require_not_none(key, "key")
        require_not_none(value, "value")
        stored = self._copier.copy(value)

        events: Events = []
        try:
            with self._lock:
                if self._lookup(key, events) is None:
                    return None
                self._write_through(key, value)
                return self._store(key, stored, events)
        finally:
            self._notify(events)

    def remove(self, key: Any, old_value: Any = _MISSING) -> bool:
        """Remove a key, optionally only if it holds old_value.

        Args:
            key: Cache key
            old_value: Expected stored value

        Returns:
            True if removed
        """
        self._check_started()
        require_not_none(key, "key")
        if old_value is not _MISSING:
            require_not_none(old_value, "old_value")

        events: Events = []
        try:
            with self._lock:
                entry = self._lookup(key, events)
                if entry is None:
                    return False
                if old_value is not _MISSING and entry.value != old_value:
                    return False
                self._delete_through(key)
                self._discard(key, events)
                return True
        finally:
            self._notify(events)

    def get_and_remove(self, key: Any) -> Any:
        """Remove a key and return its value.

        Args:
            key: Cache key

        Returns:
            Removed value or None
        """
        self._check_started()
        require_not_none(key, "key")

        events: Events = []
        try:
            with self._lock:
                entry = self._lookup(key, events)
                if entry is None:
                    return None
                self._delete_through(key)
                self._discard(key, events)
                return self._copier.copy(entry.value)
        finally:
            self._notify(events)

    def remove_all(self, keys: Optional[Iterable[Any]] = None) -> int:
        """Remove the given keys, or every key.

        Args:
            keys: Keys to remove, all keys if None

        Returns:
            Number of entries removed
        """
        self._check_started()
        if keys is not None:
            keys = require_keys(keys)

        events: Events = []
        try:
            with self._lock:
                if keys is None:
                    keys = list(self._entries.keys())
                present = [k for k in dict.fromkeys(keys) if self._lookup(k, events) is not None]
                if present and self._writes_through():
                    self._writer.delete_all(present)
                for key in present:
                    self._discard(key, events)
                return len(present)
        finally:
            self._notify(events)

    # ---------- loading ----------

    def load(self, key: Any) -> Future:
        """Load a key on a worker thread.

        Args:
            key: Key to load

        Returns:
            Future resolving to the loaded value, or to None when there is
            no loader, the key is already stored, or the loader found
            nothing. It fails with the loader's exception, or with
            NullValueError if the loaded value is None.

        Raises:
            IllegalStateError: If the cache is not started
            InvalidArgumentError: If key is None
        """
        self._check_started()
        require_not_none(key, "key")

        if self._loader is None or self._contains(key):
            return completed_future(None)

        logger.debug(f"Cache {self._name}: scheduling load of {key!r}")
        return self._engine.submit(self._invoke_loader, key)

    def load_all(self, keys: Iterable[Any]) -> Future:
        """Load many keys on a worker thread.

        Keys already stored are skipped. Keys the loader leaves out of its
        result are dropped. If any loaded value is None the future fails
        with NullValueError and nothing from the batch is stored.

        Args:
            keys: Keys to load

        Returns:
            Future resolving to a dict of the newly loaded values, or to
            None when there is no loader

        Raises:
            IllegalStateError: If the cache is not started
            InvalidArgumentError: If keys or any key is None
        """
        self._check_started()
        keys = require_keys(keys)

        if self._loader is None:
            return completed_future(None)

        pending = [key for key in dict.fromkeys(keys) if not self._contains(key)]
        logger.debug(f"Cache {self._name}: scheduling load of {len(pending)} keys")
        return self._engine.submit(self._invoke_batch_loader, pending)

    def _load_through(self, key: Any) -> Any:
        """Synchronous load, shared by concurrent callers missing on key."""
        future, owner = self._in_flight.claim(key)
        if not owner:
            value = future.result()
            return None if value is None else self._copier.copy(value)

        try:
            with self._lock:
                entry = self._entries.get(key)
                if entry is not None and not entry.is_expired(self._configuration):
                    value = self._copier.copy(entry.value)
                    future.set_result(value)
                    return value
            value = self._invoke_loader(key)
        except Exception as e:
            future.set_exception(e)
            raise
        else:
            future.set_result(value)
            return value
        finally:
            self._in_flight.release(key, future)

    def _invoke_loader(self, key: Any) -> Any:
        started = time.time()
        try:
            loaded = self._loader.load(key)
        except Exception as e:
            self._count("load_failures")
            logger.debug(f"Cache {self._name}: loader failed for {key!r}: {e}")
            raise

        if loaded is None:
            return None
        value = loaded.value
        if value is None:
            self._count("load_failures")
            raise NullValueError(key)

        self._record_load(1, time.time() - started)
        self._store_loaded({key: value})
        return value

    def _invoke_batch_loader(self, keys: List[Any]) -> Dict[Any, Any]:
        if not keys:
            return {}

        started = time.time()
        try:
            loaded = self._loader.load_all(set(keys))
        except Exception as e:
            self._count("load_failures")
            logger.debug(f"Cache {self._name}: batch loader failed: {e}")
            raise

        loaded = loaded or {}
        result = {key: loaded[key] for key in keys if key in loaded}
        for key, value in result.items():
            if value is None:
                self._count("load_failures")
                raise NullValueError(key)

        self._record_load(len(result), time.time() - started)
        self._store_loaded(result)
        return result

    def _store_loaded(self, values: Dict[Any, Any]) -> None:
        copies = {key: self._copier.copy(value) for key, value in values.items()}
        events: Events = []
        try:
            with self._lock:
                if self._status is not CacheStatus.STARTED:
                    logger.warning(
                        f"Cache {self._name} is {self._status.name}; "
                        f"discarding {len(values)} loaded values"
                    )
                    return
                for key, stored in copies.items():
                    self._store(key, stored, events)
        finally:
            self._notify(events)

    # ---------- expiry ----------

    def purge_expired(self) -> int:
        """Drop every expired entry.

        Returns:
            Number of entries dropped
        """
        events: Events = []
        try:
            with self._lock:
                for key in list(self._entries.keys()):
                    self._lookup(key, events)
        finally:
            self._notify(events)
        return len(events)

    def _cleanup_loop(self) -> None:
        """Background purge loop."""
        while not self._stop_event.wait(self._cleanup_interval):
            try:
                self.purge_expired()
            except Exception as e:
                logger.error(f"Cleanup error in cache {self._name}: {e}")

    # ---------- internals (call with self._lock held) ----------

    def _lookup(self, key: Any, events: Events) -> Optional[CacheEntry]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.is_expired(self._configuration):
            del self._entries[key]
            entry.expire()
            self._count("expirations")
            events.append((EntryEventType.EXPIRED, entry.to_entry()))
            return None
        return entry

    def _contains(self, key: Any) -> bool:
        events: Events = []
        try:
            with self._lock:
                return self._lookup(key, events) is not None
        finally:
            self._notify(events)

    def _store(self, key: Any, stored: Any, events: Events) -> Any:
        """Store an already copied value, returning the previous one or None."""
        entry = self._lookup(key, events)
        self._count("puts")
        if entry is None:
            entry = CacheEntry(key=key, value=stored)
            self._entries[key] = entry
            events.append((EntryEventType.CREATED, entry.to_entry()))
            return None

        previous = entry.value
        entry.update_value(stored)
        events.append((EntryEventType.UPDATED, entry.to_entry()))
        return self._copier.copy(previous)

    def _discard(self, key: Any, events: Events) -> None:
        entry = self._entries.pop(key)
        entry.invalidate()
        self._count("removals")
        events.append((EntryEventType.REMOVED, entry.to_entry()))

    def _writes_through(self) -> bool:
        return self._writer is not None and self._configuration.is_write_through()

    def _write_through(self, key: Any, value: Any) -> None:
        if self._writes_through():
            self._writer.write(Entry(key, value))

    def _delete_through(self, key: Any) -> None:
        if self._writes_through():
            self._writer.delete(key)

    def _count(self, counter: str, amount: int = 1) -> None:
        if not self._configuration.is_statistics_enabled():
            return
        with self._lock:
            setattr(self._stats, counter, getattr(self._stats, counter) + amount)

    def _record_load(self, count: int, seconds: float) -> None:
        if not self._configuration.is_statistics_enabled():
            return
        with self._lock:
            self._stats.loads += count
            self._stats.total_load_seconds += seconds

    def _notify(self, events: Events) -> None:
        for event, entry in events:
            for listener in self._listeners:
                listener.dispatch(event, entry)

    # ---------- python protocol ----------

    def __iter__(self) -> Iterator[Entry]:
        """Iterate over live entries."""
        self._check_started()
        events: Events = []
        result: List[Entry] = []
        try:
            with self._lock:
                for key in list(self._entries.keys()):
                    entry = self._lookup(key, events)
                    if entry is not None:
                        result.append(Entry(key, self._copier.copy(entry.value)))
        finally:
            self._notify(events)
        return iter(result)

    def __contains__(self, key: Any) -> bool:
        return self.contains_key(key)

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __repr__(self) -> str:
        return (
            f"Cache(name={self._name!r}, status={self._status.name}, "
            f"entries={len(self._entries)})"
        )


__all__ = ["Cache", "CacheStatus"]
