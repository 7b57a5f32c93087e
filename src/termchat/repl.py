"""Plain read-eval-print chat loop.

Reads a line, forwards it to the chat session, renders the reply as
markdown and persists the history, until the user types an exit keyword
or input ends.
"""

import logging
from collections.abc import Callable

from rich.console import Console
from rich.text import Text

from .chat import ChatSession
from .history import HistoryStore
from .render import MarkdownRenderer, Palette

logger = logging.getLogger(__name__)

EXIT_KEYWORDS = frozenset({"exit", "quit"})
NO_RESPONSE_MESSAGE = "No response received. The AI model might be experiencing issues."


def is_exit_command(text: str) -> bool:
    """Check whether the input asks to leave the chat (case-insensitive)."""
    return text.strip().lower() in EXIT_KEYWORDS


class ChatRepl:
    """Interactive chat loop on a plain terminal."""

    def __init__(
        self,
        session: ChatSession,
        store: HistoryStore,
        renderer: MarkdownRenderer,
        palette: Palette,
        console: Console | None = None,
        read_input: Callable[[Text], str] | None = None,
        assistant_name: str = "Gemini",
    ):
        self._session = session
        self._store = store
        self._renderer = renderer
        self._palette = palette
        self._console = console or Console()
        self._read_input = read_input or self._console.input
        self._assistant_name = assistant_name

    async def run(self) -> None:
        """Run until an exit keyword, EOF or Ctrl+C."""
        while True:
            try:
                user_input = self._read_input(self._palette.user("You: "))
            except (EOFError, KeyboardInterrupt):
                self._console.print()
                self._console.print(self._palette.success("Exiting chat..."))
                break

            if not user_input.strip():
                continue

            if is_exit_command(user_input):
                self._console.print(self._palette.success("Exiting chat..."))
                break

            await self.handle_turn(user_input)

    async def handle_turn(self, user_input: str) -> bool:
        """Send one message, show the reply and persist the history.

        Returns:
            True if the exchange completed and was committed to history
        """
        prefix = f"{self._assistant_name}: "
        with self._console.status(self._palette.assistant(f"{self._assistant_name} is thinking...")):
            reply = await self._session.send(user_input)

        if reply.error:
            self._console.print(self._palette.error(f"{prefix}{reply.error}"))
            return False

        if not reply.content:
            self._console.print(self._palette.error(f"{prefix}{NO_RESPONSE_MESSAGE}"))
            return False

        self._console.print(self._palette.assistant(prefix))
        self._console.print(Text.from_ansi(self._renderer.render(reply.content)))
        if reply.truncated:
            self._console.print(self._palette.error("(response truncated)"))

        if not self._store.save(self._session.history):
            logger.warning("History not saved this turn; it will be written with the next exchange")
        return True
