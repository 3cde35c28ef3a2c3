"""Contract for the external rendering surface."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from desmos_graph.renderer.commands import RenderJob


@runtime_checkable
class ExternalRenderer(Protocol):
    """Accepts a render job and later posts a completion message to the channel.

    ``submit`` returns once the job is handed over; the outcome arrives
    asynchronously through ``CompletionChannel.deliver``.
    """

    async def submit(self, job: RenderJob) -> None: ...
