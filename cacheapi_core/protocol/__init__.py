"""Protocol module - Serialization and value copying."""

from cacheapi_core.protocol.serializer import (
    Serializer,
    PickleSerializer,
)
from cacheapi_core.protocol.copier import (
    ValueCopier,
    ReferenceCopier,
    SerializingCopier,
    copier_for,
)

__all__ = [
    "Serializer",
    "PickleSerializer",
    "ValueCopier",
    "ReferenceCopier",
    "SerializingCopier",
    "copier_for",
]
