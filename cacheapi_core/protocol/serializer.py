"""cacheapi Serializer - Value Serialization for Store-By-Value.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import pickle
from abc import ABC, abstractmethod
from typing import Any


class Serializer(ABC):
    """Abstract serializer for cache values.

    Store-by-value caches round-trip every value through a serializer so
    that the cache never shares an object with its callers.
    """

    @abstractmethod
    def serialize(self, value: Any) -> bytes:
        """Serialize value to bytes.

        Args:
            value: Value to serialize

        Returns:
            Serialized bytes
        """
        pass

    @abstractmethod
    def deserialize(self, data: bytes) -> Any:
        """Deserialize bytes to value.

        Args:
            data: Serialized bytes

        Returns:
            Deserialized value
        """
        pass


class PickleSerializer(Serializer):
    """Pickle serializer.

    Supports any picklable Python object.
    Not safe for untrusted data.
    """

    def __init__(self, protocol: int = pickle.HIGHEST_PROTOCOL):
        """Initialize pickle serializer.

        Args:
            protocol: Pickle protocol version
        """
        self.protocol = protocol

    def serialize(self, value: Any) -> bytes:
        return pickle.dumps(value, protocol=self.protocol)

    def deserialize(self, data: bytes) -> Any:
        return pickle.loads(data)


__all__ = ["Serializer", "PickleSerializer"]
