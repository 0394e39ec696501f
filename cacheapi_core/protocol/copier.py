"""cacheapi Copier - Store-By-Value and Store-By-Reference Semantics.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional

from cacheapi_core.protocol.serializer import PickleSerializer, Serializer


class ValueCopier(ABC):
    """Produces the object a cache stores or hands out for a value."""

    @abstractmethod
    def copy(self, value: Any) -> Any:
        """Copy a value.

        Args:
            value: Value crossing the cache boundary

        Returns:
            Value to store or return
        """
        pass


class ReferenceCopier(ValueCopier):
    """Store-by-reference: values are shared, never copied."""

    def copy(self, value: Any) -> Any:
        return value


class SerializingCopier(ValueCopier):
    """Store-by-value: values are copied through a serializer.

    Example:
        copier = SerializingCopier()
        original = [1, 2]
        stored = copier.copy(original)
        stored == original and stored is not original  # True
    """

    def __init__(self, serializer: Optional[Serializer] = None):
        self.serializer = serializer or PickleSerializer()

    def copy(self, value: Any) -> Any:
        return self.serializer.deserialize(self.serializer.serialize(value))


def copier_for(store_by_value: bool) -> ValueCopier:
    """Pick the copier for a configuration's store-by-value flag."""
    return SerializingCopier() if store_by_value else ReferenceCopier()


__all__ = ["ValueCopier", "ReferenceCopier", "SerializingCopier", "copier_for"]
