"""Backend cache utilities."""

from .catalog_cache import CatalogCache, CacheState
from .kv_store import KeyValueStore, MemoryKeyValueStore

__all__ = [
    "CatalogCache",
    "CacheState",
    "KeyValueStore",
    "MemoryKeyValueStore",
]
