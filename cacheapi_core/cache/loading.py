"""cacheapi Loading - Asynchronous Load Engine and In-Flight Load Tracking.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.

load/load_all hand loader calls to a per-cache ThreadPoolExecutor and return
its concurrent.futures.Future immediately. A loader exception becomes the
future's exception as the same object, so ``future.result()`` re-raises it
and ``future.exception()`` returns it. Waiting with a timeout raises
``concurrent.futures.TimeoutError`` without cancelling the loader call.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Dict, Optional, Tuple

from cacheapi_core.exceptions import IllegalStateError

logger = logging.getLogger(__name__)


def completed_future(value: Any = None) -> Future:
    """Create an already-resolved future.

    Args:
        value: Result of the future

    Returns:
        Future whose result is value
    """
    future: Future = Future()
    future.set_result(value)
    return future


class LoadEngine:
    """Worker pool running a cache's asynchronous loads.

    The executor is created on first use and shut down when the owning
    cache stops. Shutting down cancels queued loads; running loader calls
    finish on their own.
    """

    def __init__(self, cache_name: str, max_workers: int = 4):
        """Initialize engine.

        Args:
            cache_name: Owning cache name, used for thread names
            max_workers: Maximum concurrent loader calls
        """
        self.cache_name = cache_name
        self.max_workers = max_workers

        self._executor: Optional[ThreadPoolExecutor] = None
        self._lock = threading.Lock()
        self._shutdown = False

    def submit(self, func: Callable[..., Any], *args: Any) -> Future:
        """Run func(*args) on a worker.

        Args:
            func: Callable to run
            *args: Arguments for func

        Returns:
            Future for the call

        Raises:
            IllegalStateError: If the engine was shut down
        """
        with self._lock:
            if self._shutdown:
                raise IllegalStateError(f"Load engine for {self.cache_name!r} is shut down")
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=self.max_workers,
                    thread_name_prefix=f"Cache-{self.cache_name}-load",
                )
            return self._executor.submit(func, *args)

    def shutdown(self) -> None:
        """Stop accepting loads and cancel queued ones."""
        with self._lock:
            self._shutdown = True
            executor, self._executor = self._executor, None

        if executor is not None:
            executor.shutdown(wait=False, cancel_futures=True)
            logger.debug(f"Load engine for {self.cache_name} shut down")


class InFlightLoads:
    """Tracks synchronous loads in progress, one per key.

    The first caller to miss on a key becomes its owner and runs the
    loader; later callers receive the owner's future and wait on it.

    Example:
        future, owner = in_flight.claim(key)
        if not owner:
            return future.result()
        try:
            value = loader.load(key)
            future.set_result(value)
        except Exception as e:
            future.set_exception(e)
            raise
        finally:
            in_flight.release(key, future)
    """

    def __init__(self):
        self._loads: Dict[Any, Future] = {}
        self._lock = threading.Lock()

    def claim(self, key: Any) -> Tuple[Future, bool]:
        """Join or start the load for key.

        Args:
            key: Key being loaded

        Returns:
            (future, owner) where owner is True if the caller must load
        """
        with self._lock:
            future = self._loads.get(key)
            if future is not None:
                return future, False
            future = Future()
            future.set_running_or_notify_cancel()
            self._loads[key] = future
            return future, True

    def release(self, key: Any, future: Future) -> None:
        """Forget a finished load."""
        with self._lock:
            if self._loads.get(key) is future:
                del self._loads[key]

    def __len__(self) -> int:
        return len(self._loads)

    def __contains__(self, key: Any) -> bool:
        return key in self._loads


__all__ = ["LoadEngine", "InFlightLoads", "completed_future"]
