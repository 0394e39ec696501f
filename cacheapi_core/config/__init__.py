"""Config module - Durations and cache configuration."""

from cacheapi_core.config.duration import Duration, TimeUnit
from cacheapi_core.config.configuration import (
    CacheConfiguration,
    ExpiryType,
    ManagerConfig,
    OptionalFeature,
)

__all__ = [
    "Duration",
    "TimeUnit",
    "CacheConfiguration",
    "ExpiryType",
    "ManagerConfig",
    "OptionalFeature",
]
