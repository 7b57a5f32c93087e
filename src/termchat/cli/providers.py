"""Provider factory functions for CLI.

Centralizes creation of settings, stores and the LLM provider.
Startup failures print a diagnostic and exit with code 1.
"""

import logging

import typer
from rich.console import Console
from rich.markup import escape

from ..config import Settings, load_settings
from ..errors import ConfigError, ProviderError
from ..history import HistoryStore, RoomStore, create_history_store
from ..llm import LLMProvider, create_llm_provider
from ..logging_config import setup_logging

logger = logging.getLogger(__name__)

# Default console for output
_console = Console()


def fail(message: str, console: Console | None = None) -> typer.Exit:
    """Report a fatal startup error and build the exit to raise."""
    con = console or _console
    logger.error(message)
    con.print(f"[red]Error: {escape(message)}[/red]", highlight=False)
    return typer.Exit(code=1)


def get_settings(
    console: Console | None = None,
    require_api_key: bool = True,
    log_to_stderr: bool = False,
) -> Settings:
    """Load settings and configure logging.

    Raises:
        typer.Exit: If configuration is missing or invalid
    """
    try:
        settings = load_settings(require_api_key=require_api_key)
    except ConfigError as e:
        raise fail(str(e), console) from e

    setup_logging(settings.log_level, settings.log_file, stderr=log_to_stderr)
    return settings


def get_llm(settings: Settings, console: Console | None = None) -> LLMProvider:
    """Create the LLM provider from settings.

    Raises:
        typer.Exit: If the provider cannot be constructed
    """
    if not settings.api_key:
        raise fail("GEMINI_API_KEY is not set in the environment", console)
    try:
        return create_llm_provider("gemini", api_key=settings.api_key, model=settings.model)
    except ProviderError as e:
        raise fail(str(e), console) from e


def get_history_store(settings: Settings) -> HistoryStore:
    """Create the JSON history store from settings."""
    return create_history_store("json", path=settings.history_file)


def get_room_store(settings: Settings) -> RoomStore:
    """Create the SQLite room store from settings (not yet connected)."""
    return RoomStore(settings.db_path)
