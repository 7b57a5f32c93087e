"""Gemini provider built on the Google GenAI SDK.

Reference: https://github.com/googleapis/python-genai

Gemini sends chunks that carry no text (safety filtering, the final
usage-only chunk). Those are skipped, not treated as errors.
"""

import logging
from collections.abc import AsyncIterator
from typing import Any

from google import genai
from google.genai import types

from ...errors import ProviderError
from ...history.models import ChatMessage, Role
from ..base import LLMProvider
from ..models import GenerationOptions, ReplyStream, TokenUsage

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"


class GeminiProvider(LLMProvider):
    """Streams replies from a Gemini model.

    Assistant turns are sent with Gemini's ``"model"`` role.
    """

    def __init__(self, api_key: str, model: str = DEFAULT_MODEL, **client_kwargs: Any):
        """Create the GenAI client.

        Args:
            api_key: Google AI API key
            model: Model used when a request does not name one
            **client_kwargs: Extra ``genai.Client`` arguments

        Raises:
            ProviderError: If the key is empty or the client cannot be built
        """
        if not api_key:
            raise ProviderError("Gemini provider requires a non-empty API key")
        self._model = model
        try:
            self._client = genai.Client(api_key=api_key, **client_kwargs)
        except Exception as e:
            raise ProviderError(f"Failed to create Gemini client: {e}") from e

    @property
    def model(self) -> str:
        return self._model

    @staticmethod
    def _to_contents(messages: list[ChatMessage]) -> list[types.Content]:
        return [
            types.Content(
                role="user" if message.role == Role.USER else "model",
                parts=[types.Part(text=message.content)],
            )
            for message in messages
        ]

    @staticmethod
    def _to_config(options: GenerationOptions) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            temperature=options.temperature,
            max_output_tokens=options.max_output_tokens,
        )

    @staticmethod
    def _chunk_text(chunk) -> str:
        """Concatenated text parts of the first candidate, or ''."""
        if not chunk.candidates:
            return ""
        content = chunk.candidates[0].content
        if not content or not content.parts:
            return ""
        return "".join(part.text for part in content.parts if getattr(part, "text", None))

    @staticmethod
    def _chunk_usage(chunk) -> TokenUsage | None:
        meta = chunk.usage_metadata
        if not meta:
            return None
        return TokenUsage(
            prompt_tokens=meta.prompt_token_count or 0,
            completion_tokens=meta.candidates_token_count or 0,
            total_tokens=meta.total_token_count or 0,
        )

    async def stream_reply(
        self,
        messages: list[ChatMessage],
        options: GenerationOptions | None = None,
    ) -> ReplyStream:
        options = options or GenerationOptions()
        chunks = await self._client.aio.models.generate_content_stream(
            model=options.model or self._model,
            contents=self._to_contents(messages),
            config=self._to_config(options),
        )
        return ReplyStream(self._read(chunks))

    async def _read(self, chunks) -> AsyncIterator[str | TokenUsage]:
        usage = None
        async for chunk in chunks:
            usage = self._chunk_usage(chunk) or usage
            text = self._chunk_text(chunk)
            if text:
                yield text
        if usage is not None:
            logger.debug("Gemini reply finished: %s", usage)
            yield usage

    async def close(self) -> None:
        await self._client.aio.aclose()
