"""
Termchat: a terminal chat client for hosted language models.

Each subpackage hides one design decision: where history lives, which
model provider answers, how markdown becomes terminal text, and how the
user drives the conversation (plain REPL or full-screen UI).
"""

__version__ = "0.1.0"

from .chat import ChatSession, Reply
from .history import ChatHistory, ChatMessage, ChatRoom, Role
from .render import MarkdownRenderer, Palette

__all__ = [
    "ChatHistory",
    "ChatMessage",
    "ChatRoom",
    "ChatSession",
    "MarkdownRenderer",
    "Palette",
    "Reply",
    "Role",
]
