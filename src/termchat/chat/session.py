"""Chat session: one logical conversation with a model.

Hides how history is turned into model context and how a streamed reply
is drained into a single piece of text.
"""

import logging
from collections.abc import Callable

from pydantic import BaseModel, ConfigDict

from ..history.models import ChatHistory, ChatMessage, Role
from ..llm.base import LLMProvider
from ..llm.models import GenerationOptions, TokenUsage
from .stream import DEFAULT_MAX_CHUNKS, StreamEnd, collect_stream

logger = logging.getLogger(__name__)


class Reply(BaseModel):
    """Outcome of sending one message.

    An empty ``content`` without ``error`` is a soft failure: the model
    produced nothing.
    """

    model_config = ConfigDict(frozen=True)

    content: str = ""
    error: str | None = None
    truncated: bool = False
    usage: TokenUsage | None = None

    @property
    def ok(self) -> bool:
        return bool(self.content) and self.error is None


class ChatSession:
    """Send messages to a model with the accumulated history as context.

    Not safe for concurrent use: one outstanding request at a time.
    """

    def __init__(
        self,
        provider: LLMProvider,
        history: ChatHistory | None = None,
        max_chunks: int = DEFAULT_MAX_CHUNKS,
        options: GenerationOptions | None = None,
    ):
        self._provider = provider
        self._options = options
        self._history = history if history is not None else ChatHistory()
        self._max_chunks = max_chunks
        self._busy = False

    @property
    def history(self) -> ChatHistory:
        return self._history

    @property
    def provider(self) -> LLMProvider:
        return self._provider

    @property
    def busy(self) -> bool:
        return self._busy

    async def send(
        self,
        text: str,
        on_chunk: Callable[[str], None] | None = None,
    ) -> Reply:
        """Send one message and wait for the full reply.

        The user message and the reply are committed to the history together,
        and only when the reply is non-empty and error-free.

        Args:
            text: The user's message
            on_chunk: Called with every partial chunk as it arrives

        Returns:
            Reply with the concatenated text or an error string

        Raises:
            RuntimeError: If another send is still in flight
        """
        if self._busy:
            raise RuntimeError("ChatSession already has a request in flight")

        self._busy = True
        try:
            user_message = ChatMessage(role=Role.USER, content=text)
            context = [*self._history.messages, user_message]

            try:
                stream = await self._provider.stream_reply(context, self._options)
            except Exception as e:
                logger.warning("Failed to start response stream: %s", e)
                return Reply(error=f"Error occurred while sending message: {e}")

            result = await collect_stream(stream, max_chunks=self._max_chunks, on_chunk=on_chunk)
            reply = Reply(
                content=result.text,
                error=result.error,
                truncated=result.end == StreamEnd.LIMIT,
                usage=stream.usage,
            )

            if reply.ok:
                self._history.extend([
                    user_message,
                    ChatMessage(role=Role.ASSISTANT, content=reply.content),
                ])
            elif not reply.error:
                logger.info("Model returned an empty response")
            return reply
        finally:
            self._busy = False

    async def close(self) -> None:
        """Release the provider's connection."""
        await self._provider.close()
