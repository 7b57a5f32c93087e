"""Data types exchanged with model providers."""

from collections.abc import AsyncIterator

from pydantic import BaseModel, ConfigDict, Field


class TokenUsage(BaseModel):
    """Token counts reported for one reply."""

    model_config = ConfigDict(frozen=True)

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class GenerationOptions(BaseModel):
    """Per-request overrides. Unset fields use the provider's defaults."""

    model_config = ConfigDict(frozen=True)

    model: str | None = None
    temperature: float | None = Field(default=None, ge=0.0, le=2.0)
    max_output_tokens: int | None = Field(default=None, gt=0)


class ReplyStream:
    """Async iterator over the text chunks of one streamed reply.

    Providers may interleave ``TokenUsage`` items with the text; they are
    kept aside and exposed as ``usage`` instead of being yielded.

    Usage:
        stream = await provider.stream_reply(messages)
        async for chunk in stream:
            print(chunk, end="")
        print(stream.usage)
    """

    def __init__(self, source: AsyncIterator[str | TokenUsage]):
        self._source = source
        self._usage: TokenUsage | None = None

    @property
    def usage(self) -> TokenUsage | None:
        """Token usage, once the provider has reported it."""
        return self._usage

    def __aiter__(self) -> "ReplyStream":
        return self

    async def __anext__(self) -> str:
        while True:
            item = await self._source.__anext__()
            if isinstance(item, TokenUsage):
                self._usage = item
                continue
            return item

    async def aclose(self) -> None:
        """Stop the underlying source early."""
        close = getattr(self._source, "aclose", None)
        if close is not None:
            await close()
