"""Display styles for terminal output.

A Palette is built once and handed to whatever prints to the terminal,
so colors can be changed (or turned off) without touching the callers.
"""

from dataclasses import dataclass

from rich.text import Text


@dataclass(frozen=True)
class Palette:
    """Rich style strings for each kind of output."""

    error_style: str = "red"
    success_style: str = "green"
    user_style: str = "cyan"
    assistant_style: str = "yellow"

    def error(self, text: str) -> Text:
        return Text(text, style=self.error_style)

    def success(self, text: str) -> Text:
        return Text(text, style=self.success_style)

    def user(self, text: str) -> Text:
        return Text(text, style=self.user_style)

    def assistant(self, text: str) -> Text:
        return Text(text, style=self.assistant_style)

    @classmethod
    def plain(cls) -> "Palette":
        """A palette that applies no styling."""
        return cls(error_style="", success_style="", user_style="", assistant_style="")
