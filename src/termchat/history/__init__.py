"""Conversation history module for termchat.

Provides the global JSON-file history and SQLite-backed chat rooms.
"""

from .base import HistoryStore
from .factory import create_history_store
from .models import ChatHistory, ChatMessage, ChatRoom, Role, RoomMessage
from .rooms import RoomStore

__all__ = [
    "ChatHistory",
    "ChatMessage",
    "ChatRoom",
    "HistoryStore",
    "Role",
    "RoomMessage",
    "RoomStore",
    "create_history_store",
]
