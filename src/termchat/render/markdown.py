"""Markdown to terminal text.

Hides the details of markdown rendering: which library formats the text,
how wide it wraps, and what happens when formatting fails.
"""

import logging

from rich.console import Console
from rich.markdown import Markdown

logger = logging.getLogger(__name__)

DEFAULT_WORD_WRAP = 100


class MarkdownRenderer:
    """Render markdown to ANSI-styled text.

    The rendering console is built on first use and reused afterwards.
    Rendering is cosmetic: any failure returns the input unchanged.
    """

    def __init__(
        self,
        word_wrap: int = DEFAULT_WORD_WRAP,
        color_system: str | None = "auto",
        code_theme: str = "monokai",
    ):
        self._word_wrap = word_wrap
        self._color_system = color_system
        self._code_theme = code_theme
        self._console: Console | None = None

    @property
    def word_wrap(self) -> int:
        return self._word_wrap

    def _get_console(self) -> Console:
        if self._console is None:
            self._console = Console(
                width=self._word_wrap,
                force_terminal=True,
                color_system=self._color_system,
                soft_wrap=False,
            )
        return self._console

    def render(self, text: str) -> str:
        """Render markdown text for the terminal.

        Returns:
            ANSI-styled text, or ``text`` itself if rendering failed
        """
        try:
            console = self._get_console()
            with console.capture() as capture:
                console.print(Markdown(text, code_theme=self._code_theme))
            return capture.get()
        except Exception as e:
            logger.debug("Markdown rendering failed, showing raw text: %s", e)
            return text
