"""cacheapi Statistics - Per-Cache Counters.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional


@dataclass
class CacheStatistics:
    """Cache statistics.

    Counters only move while the owning cache's configuration has
    statistics enabled.

    Attributes:
        hits: Reads answered from the store
        misses: Reads not answered from the store
        puts: Values stored by callers or loaders
        removals: Entries removed by callers
        expirations: Entries dropped because they expired
        loads: Successful loader invocations
        load_failures: Loader invocations that raised or returned None values
        total_load_seconds: Time spent inside the loader
        started_at: When the cache started
    """

    hits: int = 0
    misses: int = 0
    puts: int = 0
    removals: int = 0
    expirations: int = 0
    loads: int = 0
    load_failures: int = 0
    total_load_seconds: float = 0.0
    started_at: Optional[datetime] = None

    @property
    def gets(self) -> int:
        return self.hits + self.misses

    @property
    def hit_rate(self) -> float:
        """Calculate hit rate."""
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0

    @property
    def average_load_seconds(self) -> float:
        """Mean loader time over successful loads."""
        return self.total_load_seconds / self.loads if self.loads > 0 else 0.0

    def reset(self) -> None:
        """Reset statistics."""
        self.hits = 0
        self.misses = 0
        self.puts = 0
        self.removals = 0
        self.expirations = 0
        self.loads = 0
        self.load_failures = 0
        self.total_load_seconds = 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "hits": self.hits,
            "misses": self.misses,
            "puts": self.puts,
            "removals": self.removals,
            "expirations": self.expirations,
            "loads": self.loads,
            "load_failures": self.load_failures,
            "hit_rate": self.hit_rate,
            "average_load_seconds": self.average_load_seconds,
        }


__all__ = ["CacheStatistics"]
