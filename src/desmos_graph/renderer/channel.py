"""Completion channel — correlates renderer messages with waiting render requests.

The renderer surface is untrusted: anything it posts is checked for origin,
tag and shape before it can resolve a listener.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ValidationError

from desmos_graph.config.defaults import DEFAULT_ORIGIN

logger = logging.getLogger(__name__)

COMPLETION_TAG = "desmos-graph"


class CompletionKind(StrEnum):
    RENDER = "render"
    ERROR = "error"


class CompletionMessage(BaseModel):
    """Message posted back by the renderer.

    ``data`` is a PNG data URL for RENDER and the renderer's error text for ERROR.
    """

    t: str
    d: CompletionKind
    data: str
    hash: str


class CompletionChannel:
    """Per-fingerprint registry of futures awaiting a completion message."""

    def __init__(self, origin: str = DEFAULT_ORIGIN) -> None:
        self._origin = origin
        self._listeners: dict[str, list[asyncio.Future[CompletionMessage]]] = {}

    @property
    def origin(self) -> str:
        return self._origin

    def register(self, fingerprint: str) -> asyncio.Future[CompletionMessage]:
        future: asyncio.Future[CompletionMessage] = asyncio.get_running_loop().create_future()
        self._listeners.setdefault(fingerprint, []).append(future)
        return future

    def remove(self, fingerprint: str, future: asyncio.Future[CompletionMessage]) -> None:
        listeners = self._listeners.get(fingerprint)
        if not listeners:
            return
        if future in listeners:
            listeners.remove(future)
        if not listeners:
            del self._listeners[fingerprint]

    def pending(self, fingerprint: str | None = None) -> int:
        """Number of registered listeners, for one fingerprint or overall."""
        if fingerprint is not None:
            return len(self._listeners.get(fingerprint, ()))
        return sum(len(listeners) for listeners in self._listeners.values())

    def deliver(self, message: CompletionMessage | Mapping[str, Any], origin: str) -> int:
        """Hand an inbound message to every listener waiting on its hash.

        Returns the number of listeners resolved; zero means the message was ignored.
        """
        if origin != self._origin:
            logger.debug("Ignoring message from foreign origin %r", origin)
            return 0

        if not isinstance(message, CompletionMessage):
            try:
                message = CompletionMessage.model_validate(message)
            except ValidationError as e:
                logger.debug("Ignoring malformed renderer message: %s", e)
                return 0

        if message.t != COMPLETION_TAG:
            logger.debug("Ignoring message with tag %r", message.t)
            return 0

        # Each listener consumes the first message for its hash
        listeners = self._listeners.pop(message.hash, [])
        if not listeners:
            logger.debug("No listener registered for %s", message.hash)
            return 0

        resolved = 0
        for future in listeners:
            if not future.done():
                future.set_result(message)
                resolved += 1
        return resolved
