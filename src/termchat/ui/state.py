"""Screen state machine for the full-screen UI.

The app is always on exactly one screen. Every (state, event) pair has an
entry in the transition table; QUIT maps to None, meaning "terminate".
"""

from enum import Enum


class AppState(str, Enum):
    """Which screen is active."""

    ROOM_LIST = "room_list"
    CHAT_VIEW = "chat_view"


class UIEvent(str, Enum):
    """Inputs that can change the active screen."""

    SELECT_ROOM = "select_room"
    ESCAPE = "escape"
    QUIT = "quit"
    RESIZE = "resize"


TRANSITIONS: dict[tuple[AppState, UIEvent], AppState | None] = {
    (AppState.ROOM_LIST, UIEvent.SELECT_ROOM): AppState.CHAT_VIEW,
    (AppState.ROOM_LIST, UIEvent.ESCAPE): AppState.ROOM_LIST,
    (AppState.ROOM_LIST, UIEvent.QUIT): None,
    (AppState.ROOM_LIST, UIEvent.RESIZE): AppState.ROOM_LIST,
    (AppState.CHAT_VIEW, UIEvent.SELECT_ROOM): AppState.CHAT_VIEW,
    (AppState.CHAT_VIEW, UIEvent.ESCAPE): AppState.ROOM_LIST,
    (AppState.CHAT_VIEW, UIEvent.QUIT): None,
    (AppState.CHAT_VIEW, UIEvent.RESIZE): AppState.CHAT_VIEW,
}


def next_state(state: AppState, event: UIEvent) -> AppState | None:
    """Return the state after ``event``, or None if the app should exit."""
    return TRANSITIONS[(state, event)]
