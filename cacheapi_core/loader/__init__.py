"""Loader module - Read-through and write-through capabilities."""

from cacheapi_core.loader.loader import CacheLoader, CallableLoader
from cacheapi_core.loader.writer import CacheWriter

__all__ = [
    "CacheLoader",
    "CallableLoader",
    "CacheWriter",
]
