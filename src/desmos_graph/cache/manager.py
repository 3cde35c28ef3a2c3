"""Cache manager — the session-scoped cache service in front of both backends."""

from __future__ import annotations

import logging
from pathlib import Path

from desmos_graph.cache.disk import DiskCache, resolve_cache_dir
from desmos_graph.cache.keys import DEFAULT_EXTENSION, DEFAULT_PREFIX
from desmos_graph.cache.memory import MemoryCache
from desmos_graph.cache.stats import CacheStats, StoreOutcome, StoreResult
from desmos_graph.config.schema import CacheLocation, CacheSettings
from desmos_graph.errors.exceptions import CacheReadError, CacheWriteError

logger = logging.getLogger(__name__)


class CacheManager:
    """Fingerprint-keyed image cache backed by memory or a directory.

    Create one per host session and pass it to the render coordinator; the
    memory backend lives exactly as long as this object.
    """

    def __init__(
        self,
        settings: CacheSettings | None = None,
        prefix: str = DEFAULT_PREFIX,
        extension: str = DEFAULT_EXTENSION,
    ) -> None:
        self._settings = settings or CacheSettings()
        self._prefix = prefix
        self._extension = extension
        self._memory = MemoryCache()
        self._disks: dict[Path, DiskCache] = {}
        self._stats = CacheStats()

    @property
    def enabled(self) -> bool:
        return self._settings.enabled

    @property
    def location(self) -> CacheLocation:
        return self._settings.location

    @property
    def settings(self) -> CacheSettings:
        return self._settings

    def disk(self, root: str | Path | None = None) -> DiskCache:
        """Durable backend for the directory the settings resolve to under ``root``."""
        directory = resolve_cache_dir(self._settings.directory, root)
        cache = self._disks.get(directory)
        if cache is None:
            cache = DiskCache(directory, prefix=self._prefix, extension=self._extension)
            self._disks[directory] = cache
        return cache

    def target_path(self, key: str, root: str | Path | None = None) -> Path:
        return self.disk(root).path_for(key)

    async def lookup(self, key: str, root: str | Path | None = None) -> bytes | None:
        """Return the cached image or None. A cold or unreadable cache is a miss."""
        if not self._settings.enabled:
            return None

        data: bytes | None
        if self._settings.location == CacheLocation.MEMORY:
            data = self._memory.get(key)
        else:
            try:
                data = await self.disk(root).get(key)
            except CacheReadError as e:
                logger.warning("%s; treating as a cache miss", e.message)
                data = None

        if data is None:
            self._stats.misses += 1
            return None
        self._stats.hits += 1
        return data

    async def store(self, key: str, data: bytes, root: str | Path | None = None) -> StoreResult:
        """Store an image. Never raises for cache failures; inspect the result."""
        if not self._settings.enabled:
            return StoreResult(outcome=StoreOutcome.SKIPPED)

        if self._settings.location == CacheLocation.MEMORY:
            self._memory.set(key, data)
            self._stats.writes += 1
            return StoreResult(outcome=StoreOutcome.STORED)

        try:
            path = await self.disk(root).set(key, data)
        except CacheWriteError as e:
            self._stats.write_failures += 1
            logger.warning("Cache write failed (%s): %s", e.error_type, e.message)
            outcome = (
                StoreOutcome.DIRECTORY_MISSING
                if e.error_type == "directory_missing"
                else StoreOutcome.IO_FAILURE
            )
            return StoreResult(outcome=outcome, path=e.path, message=e.message)

        self._stats.writes += 1
        return StoreResult(outcome=StoreOutcome.STORED, path=path)

    def stats(self, root: str | Path | None = None) -> CacheStats:
        """Return aggregate statistics for the configured backend."""
        if self._settings.location == CacheLocation.MEMORY:
            entries, size_mb = len(self._memory), self._memory.size_mb
        else:
            disk = self.disk(root)
            entries, size_mb = disk.entry_count, disk.size_mb
        return CacheStats(
            entries=entries,
            size_mb=size_mb,
            hits=self._stats.hits,
            misses=self._stats.misses,
            writes=self._stats.writes,
            write_failures=self._stats.write_failures,
        )

    def close(self) -> None:
        """End of session: drop the volatile backend. Durable entries stay on disk."""
        self._memory.clear()
        self._disks.clear()
