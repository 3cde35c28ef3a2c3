import asyncio

import pytest

from desmos_graph.config.defaults import DEFAULT_ORIGIN
from desmos_graph.renderer.channel import COMPLETION_TAG, CompletionChannel
from desmos_graph.renderer.coordinator import RenderCoordinator
from desmos_graph.utils.image import to_data_url


@pytest.fixture
def sample_image_bytes():
    """Minimal valid PNG for testing (1x1 white pixel)."""
    import base64
    return base64.b64decode(
        "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR4"
        "nGP4z8BQDwAEgAF/pooBPQAAAABJRU5ErkJggg=="
    )


@pytest.fixture
def sample_source():
    return "width=300;height=200\nleft=-5;right=5\n---\ny=x^2|RED\ny=2x|DASHED|x>0\n"


class FakeRenderer:
    """Stands in for the calculator frame: records jobs and posts completions back.

    mode is "deferred" (reply on the next loop iteration), "sync" (reply
    before submit returns) or "silent" (never reply).
    """

    def __init__(self, channel, reply="render", data=None, origin=DEFAULT_ORIGIN, mode="deferred"):
        self.channel = channel
        self.reply = reply
        self.data = data
        self.origin = origin
        self.mode = mode
        self.jobs = []

    async def submit(self, job):
        self.jobs.append(job)
        message = {"t": COMPLETION_TAG, "d": self.reply, "data": self.data, "hash": job.fingerprint}
        if self.mode == "sync":
            self.channel.deliver(message, self.origin)
        elif self.mode == "deferred":
            asyncio.get_running_loop().call_soon(self.channel.deliver, message, self.origin)


@pytest.fixture
def make_coordinator(sample_image_bytes):
    """Build a coordinator wired to a FakeRenderer; returns (coordinator, renderer)."""

    def _make(cache=None, reply="render", data=None, mode="deferred", notify=None):
        channel = CompletionChannel()
        if data is None:
            data = to_data_url(sample_image_bytes) if reply == "render" else "Something went wrong"
        renderer = FakeRenderer(channel, reply=reply, data=data, mode=mode)
        coordinator = RenderCoordinator(renderer, cache=cache, channel=channel, notify=notify)
        return coordinator, renderer

    return _make
