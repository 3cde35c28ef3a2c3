"""Render coordinator — cache check, external render, best-effort cache population."""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import StrEnum
from pathlib import Path

from desmos_graph.cache.manager import CacheManager
from desmos_graph.cache.stats import StoreResult
from desmos_graph.errors.exceptions import RenderFailedError
from desmos_graph.renderer.channel import CompletionChannel, CompletionKind
from desmos_graph.renderer.commands import build_render_job
from desmos_graph.renderer.protocol import ExternalRenderer
from desmos_graph.types import RenderResult, Spec
from desmos_graph.utils.image import decode_data_url

logger = logging.getLogger(__name__)

NOTICE_PREFIX = "desmos-graph"


class RenderState(StrEnum):
    REQUESTED = "requested"
    CACHE_CHECK = "cache_check"
    CACHE_HIT = "cache_hit"
    CACHE_MISS = "cache_miss"
    RENDERING = "rendering"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    POPULATING = "populating"
    DONE = "done"


class RenderCoordinator:
    """Turns a Spec into PNG bytes, from the cache when possible.

    One coordinator serves a host session. ``notify`` is the host's notice
    surface and receives a message whenever a cache write fails.
    """

    def __init__(
        self,
        renderer: ExternalRenderer,
        cache: CacheManager | None = None,
        channel: CompletionChannel | None = None,
        notify: Callable[[str], None] | None = None,
    ) -> None:
        self._renderer = renderer
        self._cache = cache or CacheManager()
        self._channel = channel or CompletionChannel()
        self._notify = notify

    @property
    def channel(self) -> CompletionChannel:
        return self._channel

    @property
    def cache(self) -> CacheManager:
        return self._cache

    async def render(self, spec: Spec, root_path: str | Path | None = None) -> RenderResult:
        """Render a Spec, raising RenderFailedError if the renderer reports an error."""
        fp = spec.fingerprint
        self._transition(fp, RenderState.REQUESTED)

        if self._cache.enabled:
            self._transition(fp, RenderState.CACHE_CHECK)
            cached = await self._cache.lookup(fp, root_path)
            if cached is not None:
                logger.info("Cache hit for %s", fp)
                self._transition(fp, RenderState.CACHE_HIT)
                self._transition(fp, RenderState.DONE)
                return RenderResult(fingerprint=fp, image=cached, cached=True)
            logger.info("Cache miss for %s", fp)
            self._transition(fp, RenderState.CACHE_MISS)

        image = await self._render_external(spec)
        self._transition(fp, RenderState.SUCCEEDED)

        if self._cache.enabled:
            self._transition(fp, RenderState.POPULATING)
        cache_write = await self._cache.store(fp, image, root_path)
        if not cache_write.ok:
            self._report_cache_failure(cache_write)

        self._transition(fp, RenderState.DONE)
        return RenderResult(fingerprint=fp, image=image, cache_write=cache_write)

    async def _render_external(self, spec: Spec) -> bytes:
        job = build_render_job(spec)
        fp = job.fingerprint

        # Listen before submitting so a fast renderer cannot answer unheard
        future = self._channel.register(fp)
        try:
            self._transition(fp, RenderState.RENDERING)
            await self._renderer.submit(job)
            message = await future
        finally:
            self._channel.remove(fp, future)

        if message.d == CompletionKind.ERROR:
            self._transition(fp, RenderState.FAILED)
            self._transition(fp, RenderState.DONE)
            raise RenderFailedError(message.data, fingerprint=fp)

        try:
            return decode_data_url(message.data)
        except ValueError as e:
            self._transition(fp, RenderState.FAILED)
            self._transition(fp, RenderState.DONE)
            raise RenderFailedError(f"Renderer returned an unreadable image: {e}", fingerprint=fp) from e

    def _report_cache_failure(self, result: StoreResult) -> None:
        if self._notify is None:
            return
        self._notify(f"{NOTICE_PREFIX}: {result.message}")

    @staticmethod
    def _transition(fingerprint: str, state: RenderState) -> None:
        logger.debug("Render %s -> %s", fingerprint[:12], state)
