"""Volatile in-memory graph cache."""

from __future__ import annotations


class MemoryCache:
    """Process-lifetime fingerprint -> image mapping. Unbounded, no eviction."""

    def __init__(self) -> None:
        self._store: dict[str, bytes] = {}
        self._current_size_bytes = 0

    def get(self, key: str) -> bytes | None:
        return self._store.get(key)

    def set(self, key: str, data: bytes) -> None:
        previous = self._store.get(key)
        if previous is not None:
            self._current_size_bytes -= len(previous)
        self._store[key] = data
        self._current_size_bytes += len(data)

    def clear(self) -> None:
        self._store.clear()
        self._current_size_bytes = 0

    @property
    def size_mb(self) -> float:
        return self._current_size_bytes / (1024 * 1024)

    def __contains__(self, key: object) -> bool:
        return key in self._store

    def __len__(self) -> int:
        return len(self._store)
