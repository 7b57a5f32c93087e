"""Data models for conversation history.

These models define the structure of messages, histories and chat rooms,
independent of the storage backend used.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


def _now() -> datetime:
    return datetime.now().astimezone()


class Role(str, Enum):
    """Who sent a message."""

    USER = "user"
    ASSISTANT = "assistant"


class ChatMessage(BaseModel):
    """A single message in a conversation."""

    model_config = ConfigDict(frozen=True)

    role: Role = Field(description="Sender of the message: 'user' or 'assistant'")
    content: str = Field(description="Text of the message")
    time: datetime = Field(default_factory=_now, description="When the message was sent")


class ChatHistory(BaseModel):
    """Ordered record of past messages.

    Serializes to ``{"messages": [{"role", "content", "time"}, ...]}``.
    """

    messages: list[ChatMessage] = Field(default_factory=list)

    def add(self, role: Role | str, content: str) -> ChatMessage:
        """Append one message stamped with the current time.

        Args:
            role: Sender of the message
            content: Message text

        Returns:
            The appended message
        """
        message = ChatMessage(role=Role(role), content=content)
        self.messages.append(message)
        return message

    def extend(self, messages: list[ChatMessage]) -> None:
        """Append already-built messages in order."""
        self.messages.extend(messages)

    def __len__(self) -> int:
        return len(self.messages)


class ChatRoom(BaseModel):
    """A named container for one conversation (database backend)."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    created_at: datetime

    @property
    def title(self) -> str:
        return self.name

    @property
    def description(self) -> str:
        return f"Created at: {self.created_at.strftime('%Y-%m-%d %H:%M:%S')}"


class RoomMessage(BaseModel):
    """A message row persisted inside a chat room."""

    model_config = ConfigDict(frozen=True)

    id: int
    chat_room_id: int
    role: Role = Role.USER
    content: str
    created_at: datetime

    def to_chat_message(self) -> ChatMessage:
        """Convert to a plain ChatMessage for model context."""
        return ChatMessage(role=self.role, content=self.content, time=self.created_at)
