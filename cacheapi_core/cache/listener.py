"""cacheapi Listener - Entry Event Sink.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from enum import Enum, auto

from cacheapi_core.cache.entry import Entry


class EntryEventType(Enum):
    """Entry lifecycle events."""

    CREATED = auto()
    UPDATED = auto()
    REMOVED = auto()
    EXPIRED = auto()


class CacheEntryListener:
    """Receives entry events from a cache.

    Subclass and override the events of interest. Callbacks run on the
    thread that caused the event, after the cache lock is released.
    """

    def on_created(self, entry: Entry) -> None:
        pass

    def on_updated(self, entry: Entry) -> None:
        pass

    def on_removed(self, entry: Entry) -> None:
        pass

    def on_expired(self, entry: Entry) -> None:
        pass

    def dispatch(self, event: EntryEventType, entry: Entry) -> None:
        """Route an event to its callback."""
        if event is EntryEventType.CREATED:
            self.on_created(entry)
        elif event is EntryEventType.UPDATED:
            self.on_updated(entry)
        elif event is EntryEventType.REMOVED:
            self.on_removed(entry)
        else:
            self.on_expired(entry)


__all__ = ["CacheEntryListener", "EntryEventType"]
