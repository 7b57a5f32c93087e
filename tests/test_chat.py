"""Unit tests for the chat session and stream consumption."""
import asyncio

import pytest

from termchat.chat import ChatSession, Reply, StreamEnd, collect_stream
from termchat.history import ChatHistory, Role
from termchat.llm import GenerationOptions


async def _chunks(*items):
    for item in items:
        yield item


async def _failing(*items, error=RuntimeError("boom")):
    for item in items:
        yield item
    raise error


class TestCollectStream:
    """Tests for the bounded stream loop."""

    async def test_concatenates_until_end(self):
        result = await collect_stream(_chunks("Hel", "lo", "!"))

        assert result.text == "Hello!"
        assert result.end == StreamEnd.DONE
        assert result.error is None

    async def test_empty_stream(self):
        result = await collect_stream(_chunks())

        assert result.text == ""
        assert result.end == StreamEnd.DONE

    async def test_error_mid_stream_keeps_partial_text(self):
        result = await collect_stream(_failing("partial ", "text"))

        assert result.text == "partial text"
        assert result.end == StreamEnd.ERROR
        assert "boom" in result.error

    async def test_stops_at_chunk_limit(self):
        result = await collect_stream(_chunks(*"abcdefgh"), max_chunks=3)

        assert result.chunks == ["a", "b", "c"]
        assert result.end == StreamEnd.LIMIT

    async def test_on_chunk_sees_every_chunk(self):
        seen = []
        await collect_stream(_chunks("a", "b"), on_chunk=seen.append)

        assert seen == ["a", "b"]

    async def test_rejects_non_positive_limit(self):
        with pytest.raises(ValueError):
            await collect_stream(_chunks("a"), max_chunks=0)


class TestReply:
    """Tests for the Reply model."""

    def test_ok_requires_content_and_no_error(self):
        assert Reply(content="hi").ok
        assert not Reply(content="").ok
        assert not Reply(content="hi", error="broken").ok


class TestChatSession:
    """Tests for ChatSession."""

    async def test_send_returns_concatenated_reply(self, make_provider):
        provider = make_provider(chunks=["Hello", ", ", "world"])
        session = ChatSession(provider)

        reply = await session.send("hi")

        assert reply.content == "Hello, world"
        assert reply.error is None
        assert reply.ok

    async def test_successful_exchange_is_committed(self, make_provider):
        session = ChatSession(make_provider(chunks=["pong"]))

        await session.send("ping")

        assert [(m.role, m.content) for m in session.history.messages] == [
            (Role.USER, "ping"),
            (Role.ASSISTANT, "pong"),
        ]

    async def test_history_is_sent_as_context(self, make_provider, sample_history):
        provider = make_provider(chunks=["ok"])
        expected = [m.content for m in sample_history.messages]
        session = ChatSession(provider, history=sample_history)

        await session.send("next question")

        sent = provider.calls[0]
        assert [m.content for m in sent[:-1]] == expected
        assert sent[-1].role == Role.USER
        assert sent[-1].content == "next question"

    async def test_empty_reply_is_soft_failure(self, make_provider):
        session = ChatSession(make_provider(chunks=[]))

        reply = await session.send("hello?")

        assert reply.content == ""
        assert reply.error is None
        assert not reply.ok
        assert session.history.messages == []

    async def test_transport_error_mid_stream(self, make_provider):
        session = ChatSession(make_provider(chunks=["par", "tial"], fail_after=1))

        reply = await session.send("hello")

        assert reply.content == "par"
        assert "connection reset" in reply.error
        assert session.history.messages == []

    async def test_stream_start_failure(self, make_provider):
        session = ChatSession(make_provider(start_error=PermissionError("API key not valid")))

        reply = await session.send("hello")

        assert reply.content == ""
        assert "API key not valid" in reply.error

    async def test_truncated_reply_is_flagged(self, make_provider):
        session = ChatSession(make_provider(chunks=list("abcdef")), max_chunks=2)

        reply = await session.send("long please")

        assert reply.content == "ab"
        assert reply.truncated

    async def test_concurrent_send_raises(self, make_provider):
        gate = asyncio.Event()

        class SlowProvider(make_provider):
            async def _generate(self):
                await gate.wait()
                yield "done"

        session = ChatSession(SlowProvider())
        first = asyncio.create_task(session.send("one"))
        await asyncio.sleep(0)

        assert session.busy
        with pytest.raises(RuntimeError, match="in flight"):
            await session.send("two")

        gate.set()
        reply = await first
        assert reply.content == "done"
        assert not session.busy

    async def test_usage_is_reported(self, make_provider):
        reply = await ChatSession(make_provider(chunks=["a", "b"])).send("hi")

        assert reply.usage.total_tokens == 2

    async def test_options_reach_provider(self, make_provider):
        provider = make_provider(chunks=["ok"])
        options = GenerationOptions(temperature=0.2)

        await ChatSession(provider, options=options).send("hi")

        assert provider.options == [options]

    async def test_close_closes_provider(self, make_provider):
        provider = make_provider()
        session = ChatSession(provider, history=ChatHistory())

        await session.close()

        assert provider.closed
