"""cacheapi Configuration - Per-Cache and Manager Settings.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, Optional

from cacheapi_core.config.duration import Duration
from cacheapi_core.exceptions import InvalidArgumentError, require_not_none


class ExpiryType(Enum):
    """Moments that start an entry's time-to-live."""

    CREATED = auto()     # Entry first stored
    MODIFIED = auto()    # Entry value last changed
    ACCESSED = auto()    # Entry last read


class OptionalFeature(Enum):
    """Optional features an implementation may support."""

    TRANSACTIONS = auto()
    ANNOTATIONS = auto()
    STORE_BY_REFERENCE = auto()


SUPPORTED_FEATURES = frozenset({OptionalFeature.STORE_BY_REFERENCE})


class CacheConfiguration:
    """Options for a single cache.

    ``store_by_value``, ``read_through``, ``write_through`` and
    ``transactions_enabled`` are fixed once constructed. Statistics and
    expiry durations may be changed on a live cache's configuration; each
    cache owns its instance, so changes never leak to another cache.

    Example:
        config = CacheConfiguration(read_through=True)
        config.set_expiry(ExpiryType.MODIFIED, Duration(TimeUnit.MINUTES, 10))
        config.get_expiry(ExpiryType.ACCESSED)  # Duration.ETERNAL
    """

    def __init__(
        self,
        read_through: bool = False,
        write_through: bool = False,
        store_by_value: bool = True,
        statistics_enabled: bool = False,
        transactions_enabled: bool = False,
        expiry: Optional[Dict[ExpiryType, Duration]] = None,
    ):
        """Initialize configuration.

        Args:
            read_through: Delegate misses to the cache loader
            write_through: Delegate writes to the cache writer
            store_by_value: Keep independent copies of values
            statistics_enabled: Record cache statistics
            transactions_enabled: Run operations inside transactions
            expiry: Durations per expiry type, ETERNAL where absent
        """
        self._read_through = bool(read_through)
        self._write_through = bool(write_through)
        self._store_by_value = bool(store_by_value)
        self._statistics_enabled = bool(statistics_enabled)
        self._transactions_enabled = bool(transactions_enabled)
        self._expiry: Dict[ExpiryType, Duration] = {
            expiry_type: Duration.ETERNAL for expiry_type in ExpiryType
        }
        for expiry_type, duration in (expiry or {}).items():
            self.set_expiry(expiry_type, duration)

    def is_read_through(self) -> bool:
        return self._read_through

    def is_write_through(self) -> bool:
        return self._write_through

    def is_store_by_value(self) -> bool:
        return self._store_by_value

    def is_transactions_enabled(self) -> bool:
        return self._transactions_enabled

    def is_statistics_enabled(self) -> bool:
        return self._statistics_enabled

    def set_statistics_enabled(self, enabled: bool) -> None:
        """Turn statistics recording on or off."""
        self._statistics_enabled = bool(enabled)

    def get_expiry(self, expiry_type: ExpiryType) -> Duration:
        """Get the duration for an expiry type.

        Args:
            expiry_type: Expiry trigger

        Returns:
            Configured duration, ETERNAL by default
        """
        require_not_none(expiry_type, "expiry_type")
        return self._expiry[expiry_type]

    def set_expiry(self, expiry_type: ExpiryType, duration: Duration) -> None:
        """Set the duration for one expiry type.

        Args:
            expiry_type: Expiry trigger
            duration: Time-to-live for that trigger

        Raises:
            InvalidArgumentError: If either argument is None or of the
                wrong type
        """
        require_not_none(expiry_type, "expiry_type")
        require_not_none(duration, "duration")
        if not isinstance(expiry_type, ExpiryType):
            raise InvalidArgumentError(f"Not an ExpiryType: {expiry_type!r}")
        if not isinstance(duration, Duration):
            raise InvalidArgumentError(f"Not a Duration: {duration!r}")
        self._expiry[expiry_type] = duration

    def get_expiries(self) -> Dict[ExpiryType, Duration]:
        """Get a copy of every expiry setting."""
        return dict(self._expiry)

    def copy(self, **overrides: Any) -> "CacheConfiguration":
        """Create an equal but distinct configuration.

        Args:
            **overrides: Constructor arguments to replace

        Returns:
            New CacheConfiguration
        """
        options = self.to_dict()
        options.update(overrides)
        return CacheConfiguration(**options)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to constructor arguments."""
        return {
            "read_through": self._read_through,
            "write_through": self._write_through,
            "store_by_value": self._store_by_value,
            "statistics_enabled": self._statistics_enabled,
            "transactions_enabled": self._transactions_enabled,
            "expiry": dict(self._expiry),
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CacheConfiguration):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        expiry = ", ".join(
            f"{t.name}={d!r}" for t, d in self._expiry.items() if not d.is_eternal
        )
        return (
            f"CacheConfiguration(read_through={self._read_through}, "
            f"write_through={self._write_through}, "
            f"store_by_value={self._store_by_value}, "
            f"statistics_enabled={self._statistics_enabled}"
            + (f", expiry={{{expiry}}})" if expiry else ")")
        )


@dataclass
class ManagerConfig:
    """Cache manager configuration.

    Attributes:
        name: Manager name
        max_load_workers: Worker threads per cache for load/load_all
        default_configuration: Template copied into every new builder
        cleanup_interval: Seconds between background purges of expired
            entries in each cache, None to purge only on access
    """

    name: str = "__default__"
    max_load_workers: int = 4
    default_configuration: CacheConfiguration = field(default_factory=CacheConfiguration)
    cleanup_interval: Optional[float] = None

    def __post_init__(self):
        if self.max_load_workers < 1:
            raise InvalidArgumentError(
                f"max_load_workers must be >= 1, got {self.max_load_workers}"
            )


__all__ = [
    "CacheConfiguration",
    "ExpiryType",
    "ManagerConfig",
    "OptionalFeature",
    "SUPPORTED_FEATURES",
]
