"""Pydantic models for host settings."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field, field_validator

from desmos_graph.config.defaults import (
    DEFAULT_CACHE_ENABLED,
    DEFAULT_DEBOUNCE_MS,
    DEFAULT_LOG_LEVEL,
    DEFAULT_ORIGIN,
    SETTINGS_VERSION,
)


class CacheLocation(StrEnum):
    MEMORY = "memory"
    FILESYSTEM = "filesystem"


class CacheSettings(BaseModel):
    enabled: bool = DEFAULT_CACHE_ENABLED
    location: CacheLocation = CacheLocation.MEMORY
    directory: str | None = None  # only meaningful for FILESYSTEM

    @field_validator("location", mode="before")
    @classmethod
    def _normalize_location(cls, value: object) -> object:
        return value.lower() if isinstance(value, str) else value

    @field_validator("directory", mode="before")
    @classmethod
    def _blank_directory_is_unset(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class Settings(BaseModel):
    """Host settings.

    ``debounce`` is not used by this package; it is carried for the host, which
    waits that long after the last edit before calling the coordinator.
    """

    version: str = SETTINGS_VERSION
    debounce: int = DEFAULT_DEBOUNCE_MS
    origin: str = DEFAULT_ORIGIN
    log_level: str = DEFAULT_LOG_LEVEL
    cache: CacheSettings = Field(default_factory=CacheSettings)

    @field_validator("debounce", mode="before")
    @classmethod
    def _fallback_debounce(cls, value: object) -> object:
        # Unparseable or negative values fall back to the default
        try:
            debounce = int(value)  # type: ignore[call-overload]
        except (TypeError, ValueError):
            return DEFAULT_DEBOUNCE_MS
        return debounce if debounce >= 0 else DEFAULT_DEBOUNCE_MS
