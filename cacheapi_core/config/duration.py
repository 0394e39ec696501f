"""cacheapi Duration - Time-To-Live Values.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from cacheapi_core.exceptions import InvalidArgumentError


class TimeUnit(Enum):
    """Time units, valued in nanoseconds."""

    NANOSECONDS = 1
    MICROSECONDS = 1_000
    MILLISECONDS = 1_000_000
    SECONDS = 1_000_000_000
    MINUTES = 60 * 1_000_000_000
    HOURS = 60 * 60 * 1_000_000_000
    DAYS = 24 * 60 * 60 * 1_000_000_000

    def to_nanos(self, amount: int) -> int:
        """Convert an amount of this unit to nanoseconds."""
        return amount * self.value


class Duration:
    """An immutable time-to-live.

    Finite durations compare by their length in nanoseconds, so
    ``Duration(TimeUnit.MINUTES, 1) == Duration(TimeUnit.SECONDS, 60)``.
    ``Duration.ETERNAL`` means "never expires" and is not equal to any
    finite duration, zero-length ones included.

    Example:
        ttl = Duration(TimeUnit.MINUTES, 5)
        ttl.total_seconds()  # 300.0
    """

    __slots__ = ("_time_unit", "_amount", "_eternal")

    ETERNAL: "Duration"

    def __init__(self, time_unit: TimeUnit, amount: int):
        """Create a finite duration.

        Args:
            time_unit: Unit of the amount
            amount: Non-negative magnitude

        Raises:
            InvalidArgumentError: If the unit or amount is missing or the
                amount is negative
        """
        if time_unit is None:
            raise InvalidArgumentError("time_unit must not be None")
        if amount is None:
            raise InvalidArgumentError("amount must not be None")
        if amount < 0:
            raise InvalidArgumentError(f"Duration amount must be >= 0, got {amount}")
        object.__setattr__(self, "_time_unit", time_unit)
        object.__setattr__(self, "_amount", int(amount))
        object.__setattr__(self, "_eternal", False)

    @classmethod
    def _make_eternal(cls) -> "Duration":
        eternal = object.__new__(cls)
        object.__setattr__(eternal, "_time_unit", None)
        object.__setattr__(eternal, "_amount", 0)
        object.__setattr__(eternal, "_eternal", True)
        return eternal

    @property
    def time_unit(self) -> Optional[TimeUnit]:
        """Unit of the amount; None for ETERNAL."""
        return self._time_unit

    @property
    def amount(self) -> int:
        """Magnitude in time_unit."""
        return self._amount

    @property
    def is_eternal(self) -> bool:
        return self._eternal

    def to_nanos(self) -> Optional[int]:
        """Length in nanoseconds, or None for ETERNAL."""
        if self._eternal:
            return None
        return self._time_unit.to_nanos(self._amount)

    def total_seconds(self) -> Optional[float]:
        """Length in seconds, or None for ETERNAL."""
        nanos = self.to_nanos()
        return None if nanos is None else nanos / 1_000_000_000

    def expires_at(self, start: float) -> Optional[float]:
        """Timestamp at which something started at ``start`` expires."""
        seconds = self.total_seconds()
        return None if seconds is None else start + seconds

    def __reduce__(self):
        if self._eternal:
            return (_eternal, ())
        return (Duration, (self._time_unit, self._amount))

    def __setattr__(self, name, value):
        raise AttributeError("Duration is immutable")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        if self._eternal or other._eternal:
            return self._eternal and other._eternal
        return self.to_nanos() == other.to_nanos()

    def __hash__(self) -> int:
        return hash(("eternal",)) if self._eternal else hash(self.to_nanos())

    def __repr__(self) -> str:
        if self._eternal:
            return "Duration.ETERNAL"
        return f"Duration({self._time_unit.name}, {self._amount})"


Duration.ETERNAL = Duration._make_eternal()


def _eternal() -> Duration:
    """Unpickle ETERNAL as the shared sentinel."""
    return Duration.ETERNAL


__all__ = ["Duration", "TimeUnit"]
