"""cacheapi Entry - Cache Entries with Expiry Metadata.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, Optional, TYPE_CHECKING

from cacheapi_core.config.configuration import ExpiryType

if TYPE_CHECKING:
    from cacheapi_core.config.configuration import CacheConfiguration


@dataclass(frozen=True)
class Entry:
    """A key/value pair, as produced by a loader or read from a cache.

    Attributes:
        key: Entry key
        value: Entry value
    """

    key: Any
    value: Any

    def get_key(self) -> Any:
        return self.key

    def get_value(self) -> Any:
        return self.value


class EntryState(Enum):
    """Stored entry states."""

    VALID = auto()       # Entry is readable
    EXPIRED = auto()     # An expiry duration has elapsed
    REMOVED = auto()     # Entry was removed from its cache


@dataclass
class EntryMetadata:
    """Timestamps for a stored entry.

    Attributes:
        created_at: When entry was first stored
        accessed_at: Last read time
        modified_at: Last value change
        access_count: Number of reads
        version: Incremented on every value change
    """

    created_at: float = field(default_factory=time.time)
    accessed_at: float = field(default_factory=time.time)
    modified_at: float = field(default_factory=time.time)
    access_count: int = 0
    version: int = 1

    def touch(self) -> None:
        """Update access time and count."""
        self.accessed_at = time.time()
        self.access_count += 1

    def update(self) -> None:
        """Update modification time and version."""
        self.modified_at = time.time()
        self.version += 1

    def started_at(self, expiry_type: ExpiryType) -> float:
        """Timestamp an expiry type measures from."""
        if expiry_type is ExpiryType.CREATED:
            return self.created_at
        if expiry_type is ExpiryType.MODIFIED:
            return self.modified_at
        return self.accessed_at


@dataclass
class CacheEntry:
    """A stored value with its metadata.

    Attributes:
        key: Cache key
        value: Stored value (already copied for store-by-value caches)
        state: Entry state
        metadata: Entry timestamps
    """

    key: Any
    value: Any
    state: EntryState = EntryState.VALID
    metadata: EntryMetadata = field(default_factory=EntryMetadata)

    def is_expired(
        self,
        configuration: "CacheConfiguration",
        now: Optional[float] = None,
    ) -> bool:
        """Check every configured expiry type.

        Args:
            configuration: Configuration holding the durations
            now: Timestamp to check against, defaults to the current time

        Returns:
            True if any finite duration has elapsed
        """
        if self.state is EntryState.EXPIRED:
            return True
        now = time.time() if now is None else now
        for expiry_type, duration in configuration.get_expiries().items():
            deadline = duration.expires_at(self.metadata.started_at(expiry_type))
            if deadline is not None and now > deadline:
                return True
        return False

    def touch(self) -> None:
        """Record a read."""
        self.metadata.touch()

    def update_value(self, value: Any) -> None:
        """Replace the stored value.

        Args:
            value: New value
        """
        self.value = value
        self.metadata.update()
        self.state = EntryState.VALID

    def expire(self) -> None:
        """Mark entry as expired."""
        self.state = EntryState.EXPIRED

    def invalidate(self) -> None:
        """Mark entry as removed."""
        self.state = EntryState.REMOVED

    def to_entry(self) -> Entry:
        """Public view of this entry."""
        return Entry(self.key, self.value)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary.

        Returns:
            Dictionary representation
        """
        return {
            "key": self.key,
            "value": self.value,
            "state": self.state.name,
            "metadata": {
                "created_at": self.metadata.created_at,
                "accessed_at": self.metadata.accessed_at,
                "modified_at": self.metadata.modified_at,
                "access_count": self.metadata.access_count,
                "version": self.metadata.version,
            },
        }

    def __repr__(self) -> str:
        return f"CacheEntry(key={self.key!r}, state={self.state.name})"


__all__ = ["Entry", "CacheEntry", "EntryState", "EntryMetadata"]
