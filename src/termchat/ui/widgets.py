"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- Input history management
- Room list entries
- Transcript rendering and scrolling
- Header and scroll-position footer
"""

from datetime import datetime

from rich.text import Text
from textual.binding import Binding
from textual.containers import Vertical, VerticalScroll
from textual.message import Message
from textual.widgets import Input, Label, ListItem, ListView, Markdown, Static

from ..history.models import ChatMessage, ChatRoom, Role, RoomMessage


class HistoryInput(Input):
    """Message line that recalls earlier messages of the open room.

    Up steps back through the room's user messages, Down steps forward and
    finally restores the draft that was being typed.
    """

    BINDINGS = [
        Binding("up", "history_previous", "Previous message", show=False),
        Binding("down", "history_next", "Next message", show=False),
    ]

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._entries: list[str] = []
        self._cursor: int | None = None
        self._draft = ""

    @property
    def entries(self) -> list[str]:
        return list(self._entries)

    def load_history(self, entries: list[str]) -> None:
        """Replace the recallable entries, e.g. with a room's user messages."""
        self._entries = [entry for entry in entries if entry]
        self._cursor = None
        self._draft = ""

    def clear_history(self) -> None:
        self.load_history([])

    def add_to_history(self, entry: str) -> None:
        """Remember a sent message, skipping immediate repeats."""
        if entry and (not self._entries or self._entries[-1] != entry):
            self._entries.append(entry)
        self._cursor = None
        self._draft = ""

    def _show(self, text: str) -> None:
        self.value = text
        self.cursor_position = len(text)

    def action_history_previous(self) -> None:
        if not self._entries:
            return
        if self._cursor is None:
            self._draft = self.value
            self._cursor = len(self._entries) - 1
        else:
            self._cursor = max(0, self._cursor - 1)
        self._show(self._entries[self._cursor])

    def action_history_next(self) -> None:
        if self._cursor is None:
            return
        if self._cursor < len(self._entries) - 1:
            self._cursor += 1
            self._show(self._entries[self._cursor])
        else:
            self._cursor = None
            self._show(self._draft)


class RoomItem(ListItem):
    """One chat room in the room list."""

    def __init__(self, room: ChatRoom) -> None:
        super().__init__(
            Label(room.title, classes="room-title", markup=False),
            Label(room.description, classes="room-description", markup=False),
        )
        self.room = room


class RoomList(ListView):
    """Selectable list of chat rooms."""

    BORDER_TITLE = "Chat rooms"

    async def set_rooms(self, rooms: list[ChatRoom]) -> None:
        """Replace the listed rooms."""
        await self.clear()
        await self.extend([RoomItem(room) for room in rooms])
        if rooms:
            self.index = 0
        self.border_subtitle = f"{len(rooms)} rooms"

    @property
    def rooms(self) -> list[ChatRoom]:
        return [item.room for item in self.query(RoomItem)]


class ChatHeader(Static):
    """Title bar for the chat view."""

    def set_title(self, title: str) -> None:
        self.update(Text(title, style="bold"))


class ScrollFooter(Static):
    """Shows how far the transcript is scrolled."""

    def set_percent(self, percent: float) -> None:
        self.update(f"{percent * 100:3.0f}%")


class TranscriptView(VerticalScroll):
    """Scrollable transcript of one room's messages."""

    BORDER_TITLE = "Transcript"
    ALLOW_SELECT = True

    class Scrolled(Message):
        """Posted when the scroll position changes."""

        def __init__(self, percent: float) -> None:
            super().__init__()
            self.percent = percent

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._messages: list[ChatMessage] = []

    @property
    def messages(self) -> list[ChatMessage]:
        return list(self._messages)

    @property
    def scroll_percent(self) -> float:
        if self.max_scroll_y <= 0:
            return 1.0
        return min(1.0, self.scroll_y / self.max_scroll_y)

    def watch_scroll_y(self, old_value: float, new_value: float) -> None:
        super().watch_scroll_y(old_value, new_value)
        self.post_message(self.Scrolled(self.scroll_percent))

    def show_messages(self, messages: list[RoomMessage]) -> None:
        """Replace the transcript with a room's messages."""
        self.clear_messages()
        for message in messages:
            self.add_message(message.role, message.content, message.created_at)
        self.scroll_end(animate=False)

    def add_message(self, role: Role, content: str, time: datetime | None = None) -> None:
        """Append one message to the transcript."""
        message = ChatMessage(role=role, content=content, time=time or datetime.now().astimezone())
        self._messages.append(message)
        self.mount(self._render_message(message))
        self.border_subtitle = f"{len(self._messages)} messages"
        self.scroll_end(animate=False)

    def add_notice(self, text: str) -> None:
        """Show a line that is not part of the conversation (errors)."""
        self.mount(Static(text, classes="notice", markup=False))
        self.scroll_end(animate=False)

    def clear_messages(self) -> None:
        self._messages.clear()
        self.remove_children()
        self.border_subtitle = ""

    def _render_message(self, message: ChatMessage) -> Vertical:
        if message.role == Role.USER:
            header = f"> You [{message.time.strftime('%H:%M:%S')}]"
            body = Static(message.content, classes="message-content", markup=False)
            css_class = "user-message"
        else:
            header = f"< Gemini [{message.time.strftime('%H:%M:%S')}]"
            body = Markdown(message.content, classes="message-content")
            css_class = "assistant-message"
        return Vertical(
            Static(header, classes="message-header", markup=False),
            body,
            classes=f"chat-message {css_class}",
        )
