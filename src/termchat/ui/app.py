"""Main Textual TUI application.

Two screens share one window: the room list and the chat view of the
selected room. Screen changes go through the transition table in
``state.py``.
"""

import logging

from textual import events, work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import ContentSwitcher, Footer, Header, Input, ListView, Static

from ..chat import ChatSession
from ..chat.stream import DEFAULT_MAX_CHUNKS
from ..history import ChatHistory, ChatRoom, Role, RoomStore
from ..llm import LLMProvider
from .state import AppState, UIEvent, next_state
from .styles import APP_CSS
from .themes import TERMCHAT_DARK
from .widgets import ChatHeader, HistoryInput, RoomItem, RoomList, ScrollFooter, TranscriptView

logger = logging.getLogger(__name__)

_VIEW_IDS = {
    AppState.ROOM_LIST: "room-list-view",
    AppState.CHAT_VIEW: "chat-view",
}


class TermchatApp(App):
    """Textual TUI listing chat rooms and showing their transcripts."""

    CSS = APP_CSS
    TITLE = "termchat"

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit", priority=True),
        Binding("q", "quit", "Quit"),
        Binding("escape", "leave_room", "Back", priority=True),
    ]

    def __init__(
        self,
        room_store: RoomStore,
        provider: LLMProvider | None = None,
        max_chunks: int = DEFAULT_MAX_CHUNKS,
    ) -> None:
        super().__init__()
        self._room_store = room_store
        self._provider = provider
        self._max_chunks = max_chunks
        self._state = AppState.ROOM_LIST
        self._current_room: ChatRoom | None = None
        self._session: ChatSession | None = None
        self._rooms_loaded = False
        self._reply_pending = False

    @property
    def state(self) -> AppState:
        return self._state

    @property
    def current_room(self) -> ChatRoom | None:
        return self._current_room

    def compose(self) -> ComposeResult:
        yield Header()
        with ContentSwitcher(initial=_VIEW_IDS[AppState.ROOM_LIST], id="views"):
            with Vertical(id="room-list-view"):
                yield RoomList(id="room-list")
                yield Static("enter: open room   q: quit", id="room-list-hint")
            with Vertical(id="chat-view"):
                yield ChatHeader(id="chat-header")
                yield TranscriptView(id="transcript")
                yield ScrollFooter(id="scroll-footer")
                yield HistoryInput(
                    placeholder="Message (enter to send, esc to go back)",
                    id="message-input",
                    disabled=self._provider is None,
                )
        yield Footer()

    async def on_mount(self) -> None:
        self.register_theme(TERMCHAT_DARK)
        self.theme = "termchat-dark"
        self.sub_title = self._provider.model if self._provider else "read-only"

        rooms = await self._room_store.list_rooms()
        room_list = self.query_one("#room-list", RoomList)
        await room_list.set_rooms(rooms)
        room_list.focus()
        self._rooms_loaded = True
        logger.info("Loaded %d chat rooms", len(rooms))

    def apply_event(self, event: UIEvent) -> AppState | None:
        """Apply one event to the screen state machine."""
        new_state = next_state(self._state, event)
        if new_state is None:
            self.exit(return_code=0)
            return None

        if event == UIEvent.ESCAPE and self._state == AppState.CHAT_VIEW:
            self._close_room()

        self._state = new_state
        self.query_one("#views", ContentSwitcher).current = _VIEW_IDS[new_state]
        self._refresh_layout()
        return new_state

    async def open_room(self, room: ChatRoom) -> None:
        """Load a room's messages and switch to the chat view."""
        messages = await self._room_store.get_messages(room.id)
        self._current_room = room

        if self._provider is not None:
            history = ChatHistory(messages=[m.to_chat_message() for m in messages])
            self._session = ChatSession(self._provider, history=history, max_chunks=self._max_chunks)

        self.query_one("#chat-header", ChatHeader).set_title(room.name)
        self.query_one("#transcript", TranscriptView).show_messages(messages)
        self.apply_event(UIEvent.SELECT_ROOM)

        message_input = self.query_one("#message-input", HistoryInput)
        message_input.load_history([m.content for m in messages if m.role == Role.USER])
        if self._provider is not None:
            message_input.focus()
        else:
            self.query_one("#transcript", TranscriptView).focus()
        logger.debug("Opened room %d with %d messages", room.id, len(messages))

    def _close_room(self) -> None:
        self._current_room = None
        self._session = None
        self.query_one("#transcript", TranscriptView).clear_messages()
        self.query_one("#chat-header", ChatHeader).set_title("")
        message_input = self.query_one("#message-input", HistoryInput)
        message_input.value = ""
        message_input.clear_history()
        self.query_one("#room-list", RoomList).focus()

    def _refresh_layout(self) -> None:
        """Recompute size-dependent parts of the active screen."""
        if self._state == AppState.CHAT_VIEW:
            transcript = self.query_one("#transcript", TranscriptView)
            self.query_one("#scroll-footer", ScrollFooter).set_percent(transcript.scroll_percent)
        else:
            room_list = self.query_one("#room-list", RoomList)
            room_list.border_subtitle = f"{len(room_list.rooms)} rooms"

    async def on_list_view_selected(self, event: ListView.Selected) -> None:
        if isinstance(event.item, RoomItem):
            await self.open_room(event.item.room)

    def on_resize(self, event: events.Resize) -> None:
        if not self._rooms_loaded:
            return
        self.apply_event(UIEvent.RESIZE)

    def on_transcript_view_scrolled(self, event: TranscriptView.Scrolled) -> None:
        self.query_one("#scroll-footer", ScrollFooter).set_percent(event.percent)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        text = event.value.strip()
        if not text or self._current_room is None or self._session is None:
            return
        if self._reply_pending:
            self.notify("Still waiting for the previous reply", severity="warning", timeout=2)
            return

        message_input = self.query_one("#message-input", HistoryInput)
        message_input.add_to_history(text)
        message_input.value = ""
        self.query_one("#transcript", TranscriptView).add_message(Role.USER, text)
        self._reply_pending = True
        self._send(self._current_room, self._session, text)

    @work(group="send", exclusive=True)
    async def _send(self, room: ChatRoom, session: ChatSession, text: str) -> None:
        """Send one message in the background and persist the exchange.

        Only one reply is awaited at a time across all rooms.
        """
        try:
            reply = await session.send(text)
        finally:
            self._reply_pending = False
        still_open = self._current_room is not None and self._current_room.id == room.id
        transcript = self.query_one("#transcript", TranscriptView)

        if not reply.ok:
            notice = reply.error or "No response received. The AI model might be experiencing issues."
            if still_open:
                transcript.add_notice(notice)
            self.notify(notice[:80], severity="error", timeout=5)
            return

        if still_open:
            transcript.add_message(Role.ASSISTANT, reply.content)

        try:
            await self._room_store.add_message(room.id, Role.USER, text)
            await self._room_store.add_message(room.id, Role.ASSISTANT, reply.content)
        except Exception as e:
            logger.error("Failed to save messages to room %d: %s", room.id, e)
            self.notify("Could not save this exchange", severity="error", timeout=5)

    def action_leave_room(self) -> None:
        """Return from the chat view to the room list."""
        self.apply_event(UIEvent.ESCAPE)

    async def action_quit(self) -> None:
        self.apply_event(UIEvent.QUIT)


async def run_tui(
    room_store: RoomStore,
    provider: LLMProvider | None = None,
) -> int:
    """Run the Textual TUI until the user quits.

    Returns:
        The app's return code (0 on normal quit)
    """
    app = TermchatApp(room_store=room_store, provider=provider)
    await app.run_async()
    return app.return_code or 0
