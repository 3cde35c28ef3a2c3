"""Tests for the completion channel."""

from desmos_graph.renderer.channel import CompletionChannel, CompletionKind, CompletionMessage

FP = "f" * 64
ORIGIN = "app://obsidian.md"


def _message(**overrides) -> dict:
    message = {"t": "desmos-graph", "d": "render", "data": "data:image/png;base64,AAAA", "hash": FP}
    message.update(overrides)
    return message


class TestRegistration:
    async def test_register_and_remove(self):
        channel = CompletionChannel()
        future = channel.register(FP)
        assert channel.pending(FP) == 1
        channel.remove(FP, future)
        assert channel.pending(FP) == 0
        assert channel.pending() == 0

    async def test_remove_is_idempotent(self):
        channel = CompletionChannel()
        future = channel.register(FP)
        channel.remove(FP, future)
        channel.remove(FP, future)
        assert channel.pending() == 0


class TestDeliver:
    async def test_resolves_listener(self):
        channel = CompletionChannel()
        future = channel.register(FP)
        assert channel.deliver(_message(), ORIGIN) == 1
        message = await future
        assert isinstance(message, CompletionMessage)
        assert message.d == CompletionKind.RENDER
        assert channel.pending() == 0

    async def test_accepts_model_instance(self):
        channel = CompletionChannel()
        future = channel.register(FP)
        channel.deliver(CompletionMessage(**_message(d="error", data="boom")), ORIGIN)
        assert (await future).data == "boom"

    async def test_resolves_every_listener_for_hash(self):
        channel = CompletionChannel()
        first = channel.register(FP)
        second = channel.register(FP)
        assert channel.deliver(_message(), ORIGIN) == 2
        assert first.done() and second.done()

    async def test_foreign_origin_ignored(self):
        channel = CompletionChannel()
        future = channel.register(FP)
        assert channel.deliver(_message(), "https://evil.example") == 0
        assert not future.done()
        assert channel.pending(FP) == 1

    async def test_wrong_tag_ignored(self):
        channel = CompletionChannel()
        future = channel.register(FP)
        assert channel.deliver(_message(t="other-plugin"), ORIGIN) == 0
        assert not future.done()

    async def test_other_hash_ignored(self):
        channel = CompletionChannel()
        future = channel.register(FP)
        assert channel.deliver(_message(hash="0" * 64), ORIGIN) == 0
        assert not future.done()

    async def test_malformed_message_ignored(self):
        channel = CompletionChannel()
        future = channel.register(FP)
        assert channel.deliver({"t": "desmos-graph", "hash": FP}, ORIGIN) == 0
        assert channel.deliver(_message(d="progress"), ORIGIN) == 0
        assert not future.done()

    async def test_custom_origin(self):
        channel = CompletionChannel(origin="https://host.example")
        future = channel.register(FP)
        assert channel.deliver(_message(), ORIGIN) == 0
        assert channel.deliver(_message(), "https://host.example") == 1
        assert future.done()

    async def test_cancelled_listener_skipped(self):
        channel = CompletionChannel()
        cancelled = channel.register(FP)
        live = channel.register(FP)
        cancelled.cancel()
        assert channel.deliver(_message(), ORIGIN) == 1
        assert live.done()
