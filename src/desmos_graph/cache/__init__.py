"""Cache subsystem — memory or directory backend keyed by graph fingerprint."""

from desmos_graph.cache.disk import DiskCache, resolve_cache_dir
from desmos_graph.cache.keys import cache_filename, compute_fingerprint, fingerprint
from desmos_graph.cache.manager import CacheManager
from desmos_graph.cache.memory import MemoryCache
from desmos_graph.cache.stats import CacheStats, StoreOutcome, StoreResult

__all__ = [
    "CacheManager",
    "CacheStats",
    "DiskCache",
    "MemoryCache",
    "StoreOutcome",
    "StoreResult",
    "cache_filename",
    "compute_fingerprint",
    "fingerprint",
    "resolve_cache_dir",
]
