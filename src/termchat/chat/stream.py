"""Bounded consumption of streamed model replies.

A stream is read chunk by chunk until one of three things happens: the
provider signals the end of the stream, the chunk limit is reached, or the
transport raises. The outcome is reported as data, never as an exception.
"""

import logging
from collections.abc import AsyncIterator, Callable
from dataclasses import dataclass, field
from enum import Enum

logger = logging.getLogger(__name__)

DEFAULT_MAX_CHUNKS = 10_000


class StreamEnd(str, Enum):
    """Why reading a stream stopped."""

    DONE = "done"
    LIMIT = "limit"
    ERROR = "error"


@dataclass
class StreamResult:
    """Everything read from one stream."""

    chunks: list[str] = field(default_factory=list)
    end: StreamEnd = StreamEnd.DONE
    error: str | None = None

    @property
    def text(self) -> str:
        return "".join(self.chunks)


async def collect_stream(
    stream: AsyncIterator[str],
    max_chunks: int = DEFAULT_MAX_CHUNKS,
    on_chunk: Callable[[str], None] | None = None,
) -> StreamResult:
    """Drain a stream of text chunks.

    Args:
        stream: Async iterator yielding text chunks
        max_chunks: Upper bound on the number of chunks read
        on_chunk: Called with every chunk as it arrives

    Returns:
        StreamResult with the chunks read and how reading ended
    """
    if max_chunks < 1:
        raise ValueError("max_chunks must be at least 1")

    result = StreamResult()
    iterator = stream.__aiter__()

    while len(result.chunks) < max_chunks:
        try:
            chunk = await iterator.__anext__()
        except StopAsyncIteration:
            return result
        except Exception as e:
            logger.warning("Error occurred while receiving response: %s", e)
            result.end = StreamEnd.ERROR
            result.error = f"Error occurred while receiving response: {e}"
            return result

        result.chunks.append(chunk)
        if on_chunk is not None:
            on_chunk(chunk)

    logger.warning("Stopped reading response after %d chunks", max_chunks)
    result.end = StreamEnd.LIMIT
    close = getattr(iterator, "aclose", None)
    if close is not None:
        await close()
    return result
