"""CSS styles for the TUI.

Hides layout and styling decisions from the application logic.
"""

APP_CSS = """
Screen {
    background: $background;
}

#views {
    height: 1fr;
}

/* ============================================
   Room list screen
   ============================================ */
#room-list-view {
    padding: 1 2;
}

#room-list {
    height: 1fr;
    background: $panel;
    border: round $primary 60%;
    border-title-color: $primary;
    border-title-style: bold;
    border-subtitle-color: $text-muted;

    &:focus {
        border: round $primary;
    }

    & > RoomItem {
        padding: 0 1;
        height: auto;
    }
}

.room-title {
    text-style: bold;
}

.room-description {
    color: $text-muted;
}

#room-list-hint {
    color: $text-muted;
    padding: 1 0 0 0;
}

/* ============================================
   Chat view screen
   ============================================ */
#chat-header {
    height: 3;
    border: round $border;
    padding: 0 1;
    color: $primary;
}

#transcript {
    height: 1fr;
    background: $panel;
    border: round $secondary 60%;
    border-title-color: $secondary;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
    scrollbar-gutter: stable;

    &:focus {
        border: round $secondary;
    }
}

#scroll-footer {
    height: 1;
    text-align: right;
    color: $text-muted;
    padding: 0 1;
}

#message-input {
    border: round $primary 60%;

    &:focus {
        border: round $primary;
    }
}

/* ============================================
   Messages
   ============================================ */
.chat-message {
    height: auto;
    margin: 1 0 0 0;
    padding: 0 1;
}

.user-message {
    border-left: thick $primary;
}

.assistant-message {
    border-left: thick $secondary;
}

.message-header {
    color: $text-muted;
    text-style: bold;
}

.message-content {
    height: auto;
    margin: 0;
}

.notice {
    color: $error;
    margin: 1 0 0 0;
}
"""
