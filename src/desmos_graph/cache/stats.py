"""Cache write outcome and statistics models."""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel


class StoreOutcome(StrEnum):
    STORED = "stored"
    SKIPPED = "skipped"  # caching disabled
    DIRECTORY_MISSING = "directory_missing"
    IO_FAILURE = "io_failure"


class StoreResult(BaseModel):
    """Outcome of a best-effort cache write."""

    outcome: StoreOutcome
    path: Path | None = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.outcome in (StoreOutcome.STORED, StoreOutcome.SKIPPED)


class CacheStats(BaseModel):
    """Aggregate cache statistics."""

    entries: int = 0
    size_mb: float = 0.0
    hits: int = 0
    misses: int = 0
    writes: int = 0
    write_failures: int = 0

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0
