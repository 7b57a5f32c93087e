"""Pytest configuration and shared fixtures."""
import os
from collections.abc import AsyncIterator
from datetime import datetime, timedelta, timezone

import pytest

from termchat.history import ChatHistory, ChatMessage, Role, RoomStore
from termchat.llm import LLMProvider, ReplyStream, TokenUsage


class FakeProvider(LLMProvider):
    """LLM provider that replays canned chunks instead of calling an API."""

    def __init__(
        self,
        chunks: list[str] | None = None,
        fail_after: int | None = None,
        error: Exception | None = None,
        start_error: Exception | None = None,
    ):
        self.chunks = list(chunks or [])
        self.fail_after = fail_after
        self.error = error or ConnectionError("connection reset")
        self.start_error = start_error
        self.calls: list[list[ChatMessage]] = []
        self.options: list = []
        self.closed = False

    @property
    def model(self) -> str:
        return "fake-model"

    async def stream_reply(self, messages, options=None):
        self.calls.append(list(messages))
        self.options.append(options)
        if self.start_error is not None:
            raise self.start_error
        return ReplyStream(self._generate())

    async def _generate(self) -> AsyncIterator[str | TokenUsage]:
        for i, chunk in enumerate(self.chunks):
            if self.fail_after is not None and i >= self.fail_after:
                raise self.error
            yield chunk
        if self.fail_after is not None and self.fail_after >= len(self.chunks):
            raise self.error
        yield TokenUsage(completion_tokens=len(self.chunks), total_tokens=len(self.chunks))

    async def close(self) -> None:
        self.closed = True


@pytest.fixture(scope="session")
def api_keys():
    """Return API keys from environment."""
    return {"gemini": os.getenv("GEMINI_API_KEY")}


@pytest.fixture
def make_provider():
    """Factory for fake providers."""
    return FakeProvider


@pytest.fixture
def sample_history():
    """A short conversation with strictly increasing timestamps."""
    base = datetime(2024, 8, 1, 12, 0, tzinfo=timezone.utc)
    return ChatHistory(messages=[
        ChatMessage(role=Role.USER, content="What is Go?", time=base),
        ChatMessage(role=Role.ASSISTANT, content="Go is a **programming language**.", time=base + timedelta(seconds=5)),
        ChatMessage(role=Role.USER, content="And Python?", time=base + timedelta(minutes=1)),
        ChatMessage(role=Role.ASSISTANT, content="Python is too.", time=base + timedelta(minutes=1, seconds=3)),
    ])


@pytest.fixture
def history_path(tmp_path):
    """Path for a history file that does not exist yet."""
    return tmp_path / "chat_history.json"


@pytest.fixture
async def room_store(tmp_path):
    """A connected room store backed by a temporary database."""
    store = RoomStore(tmp_path / "db.sql")
    await store.connect()
    try:
        yield store
    finally:
        await store.disconnect()
