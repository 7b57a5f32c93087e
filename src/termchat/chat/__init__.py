from .session import ChatSession, Reply
from .stream import StreamEnd, StreamResult, collect_stream

__all__ = [
    "ChatSession",
    "Reply",
    "StreamEnd",
    "StreamResult",
    "collect_stream",
]
