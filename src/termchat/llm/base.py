from abc import ABC, abstractmethod
from typing import Any

from ..history.models import ChatMessage
from .models import GenerationOptions, ReplyStream


class LLMProvider(ABC):
    """A chat model that answers with streamed text.

    Hides which vendor answers and how its wire format looks. Callers pass
    the whole conversation each time; providers keep no conversation state.

    Use as an async context manager to release the client:
        async with provider:
            stream = await provider.stream_reply(messages)
    """

    @property
    @abstractmethod
    def model(self) -> str:
        """Model used when a request does not name one."""

    @abstractmethod
    async def stream_reply(
        self,
        messages: list[ChatMessage],
        options: GenerationOptions | None = None,
    ) -> ReplyStream:
        """Start streaming the reply to a conversation.

        Args:
            messages: Earlier messages followed by the new user message
            options: Overrides for model and sampling

        Returns:
            ReplyStream of text chunks. Failures to start the request are
            raised here; transport failures surface while iterating.
        """

    @abstractmethod
    async def close(self) -> None:
        """Release network resources."""

    async def __aenter__(self) -> "LLMProvider":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        try:
            await self.close()
        except RuntimeError as e:
            # httpx can race the loop shutdown when closing its pool
            if "Event loop is closed" not in str(e):
                raise
