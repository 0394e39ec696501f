"""cacheapi Writer - Write-Through Contract.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Iterable

from cacheapi_core.cache.entry import Entry


class CacheWriter(ABC):
    """Receives a write-through cache's mutations before they are applied.

    A write-through cache calls the writer while holding its lock; if the
    writer raises, the cache is left unchanged and the exception reaches
    the caller.
    """

    @abstractmethod
    def write(self, entry: Entry) -> None:
        """Write one entry.

        Args:
            entry: Entry being stored
        """
        pass

    @abstractmethod
    def delete(self, key: Any) -> None:
        """Delete one key.

        Args:
            key: Key being removed
        """
        pass

    def write_all(self, entries: Iterable[Entry]) -> None:
        """Write many entries."""
        for entry in entries:
            self.write(entry)

    def delete_all(self, keys: Iterable[Any]) -> None:
        """Delete many keys."""
        for key in keys:
            self.delete(key)


__all__ = ["CacheWriter"]
