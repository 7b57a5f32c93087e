"""Terminal UI module for termchat.

Provides a Textual-based full-screen interface over SQLite chat rooms.

Module structure (each module hides a design decision):
- state.py: Screen state machine (which screen is active, how it changes)
- widgets.py: Custom widgets (room list, transcript, input history)
- styles.py: CSS styling (layout decisions)
- themes.py: Color palettes and theme configuration
- app.py: Application orchestration (user interaction flow)
"""

from .app import TermchatApp, run_tui
from .state import AppState, UIEvent, next_state
from .widgets import HistoryInput, RoomList, TranscriptView

__all__ = [
    "AppState",
    "HistoryInput",
    "RoomList",
    "TermchatApp",
    "TranscriptView",
    "UIEvent",
    "next_state",
    "run_tui",
]
