"""cacheapi Exceptions - Fault Taxonomy.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.

Every fault raised by the engine derives from CacheError and also from the
builtin exception a Python caller would naturally catch:

    InvalidArgumentError       -> ValueError
    InvalidConfigurationError  -> InvalidArgumentError
    IllegalStateError          -> RuntimeError
    UnsupportedOperationError  -> NotImplementedError
    NullValueError             -> TypeError

Faults raised by a loader are never wrapped: they reach the caller as the
same object, either directly (get/get_all) or through the failure slot of
the future returned by load/load_all.
"""

from __future__ import annotations

from typing import Any, Iterable, List


class CacheError(Exception):
    """Base class for cache faults."""


class InvalidArgumentError(CacheError, ValueError):
    """A required argument was missing."""


class InvalidConfigurationError(InvalidArgumentError):
    """Builder options that cannot be combined."""


class IllegalStateError(CacheError, RuntimeError):
    """Operation attempted on a cache or manager in the wrong state."""


class UnsupportedOperationError(CacheError, NotImplementedError):
    """Optional feature or method that is not available."""


class NullValueError(CacheError, TypeError):
    """A loader produced None as a value."""

    def __init__(self, key: Any):
        super().__init__(f"Loader returned a null value for key {key!r}")
        self.key = key


def require_not_none(value: Any, name: str) -> Any:
    """Return value, raising InvalidArgumentError when it is None.

    Args:
        value: Argument to check
        name: Parameter name used in the error message

    Returns:
        The argument unchanged
    """
    if value is None:
        raise InvalidArgumentError(f"{name} must not be None")
    return value


def require_keys(keys: Iterable[Any]) -> List[Any]:
    """Validate a key collection.

    Args:
        keys: Collection of keys

    Returns:
        The keys as a list, in iteration order

    Raises:
        InvalidArgumentError: If the collection or any key is None
    """
    require_not_none(keys, "keys")
    result = list(keys)
    for key in result:
        if key is None:
            raise InvalidArgumentError("keys must not contain None")
    return result


__all__ = [
    "CacheError",
    "InvalidArgumentError",
    "InvalidConfigurationError",
    "IllegalStateError",
    "UnsupportedOperationError",
    "NullValueError",
    "require_not_none",
    "require_keys",
]
