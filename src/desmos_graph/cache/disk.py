"""Durable graph cache: one image file per fingerprint in a directory."""

from __future__ import annotations

import contextlib
import logging
import os
import tempfile
import uuid
from pathlib import Path

import aiofiles
import aiofiles.os

from desmos_graph.cache.keys import DEFAULT_EXTENSION, DEFAULT_PREFIX, cache_filename
from desmos_graph.errors.exceptions import CacheReadError, CacheWriteError

logger = logging.getLogger(__name__)


def resolve_cache_dir(directory: str | Path | None, root: str | Path | None = None) -> Path:
    """Resolve the configured cache directory.

    Absolute paths are used verbatim, relative ones are joined to ``root``
    (the host's vault/workspace root), and an unset directory falls back to
    the platform temp dir.
    """
    if not directory:
        return Path(tempfile.gettempdir())
    path = Path(directory)
    if path.is_absolute() or root is None:
        return path
    return Path(root) / path


class DiskCache:
    """Filesystem-backed cache. Presence of the file is the existence check.

    The directory is never created here: a missing directory is reported to
    the caller as a failed write.
    """

    def __init__(
        self,
        directory: Path,
        prefix: str = DEFAULT_PREFIX,
        extension: str = DEFAULT_EXTENSION,
    ) -> None:
        self._directory = Path(directory)
        self._prefix = prefix
        self._extension = extension

    @property
    def directory(self) -> Path:
        return self._directory

    def path_for(self, key: str) -> Path:
        return self._directory / cache_filename(key, self._prefix, self._extension)

    async def get(self, key: str) -> bytes | None:
        path = self.path_for(key)
        if not await aiofiles.os.path.isfile(path):
            return None
        try:
            async with aiofiles.open(path, "rb") as f:
                return await f.read()
        except OSError as e:
            raise CacheReadError(f"Failed to read cached graph '{path}': {e}", path=path, original=e) from e

    async def set(self, key: str, data: bytes) -> Path:
        """Write an entry and return its path. Last write wins."""
        if not await aiofiles.os.path.isdir(self._directory):
            raise CacheWriteError(
                f"cache directory not found: '{self._directory}'",
                error_type="directory_missing",
                path=self._directory,
            )

        path = self.path_for(key)
        # Write beside the target and swap it in so readers never see a partial file
        tmp_path = self._directory / f".{path.name}.{uuid.uuid4().hex}.tmp"
        try:
            async with aiofiles.open(tmp_path, "wb") as f:
                await f.write(data)
            await aiofiles.os.replace(tmp_path, path)
        except OSError as e:
            with contextlib.suppress(OSError):
                await aiofiles.os.remove(tmp_path)
            raise CacheWriteError(
                f"unexpected error when trying to cache graph: {e}",
                error_type="io_failure",
                path=path,
                original=e,
            ) from e

        logger.debug("Cached graph %s at %s (%d bytes)", key, path, len(data))
        return path

    def _entry_paths(self) -> list[Path]:
        if not self._directory.is_dir():
            return []
        return list(self._directory.glob(f"{self._prefix}-graph-*.{self._extension}"))

    @property
    def entry_count(self) -> int:
        return len(self._entry_paths())

    @property
    def size_mb(self) -> float:
        total = 0
        for path in self._entry_paths():
            with contextlib.suppress(OSError):
                total += os.path.getsize(path)
        return total / (1024 * 1024)
