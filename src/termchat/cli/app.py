"""Main CLI application using Typer."""
import asyncio

import typer
from rich.console import Console
from rich.table import Table
from rich.text import Text

from ..chat import ChatSession
from ..history import Role
from ..render import MarkdownRenderer, Palette
from .providers import fail, get_history_store, get_llm, get_room_store, get_settings

app = typer.Typer(
    name="termchat",
    help="Chat with Gemini from the terminal",
    no_args_is_help=True,
    add_completion=True,
)

console = Console()


@app.command()
def chat(
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Print replies without colors"
    )
):
    """Interactive chat in a plain REPL with a persistent history file."""
    from ..repl import ChatRepl

    settings = get_settings(console, log_to_stderr=True)
    palette = Palette.plain() if no_color else Palette()
    renderer = MarkdownRenderer(
        word_wrap=settings.word_wrap,
        color_system=None if no_color else "auto",
    )

    async def _chat():
        llm = get_llm(settings, console)
        store = get_history_store(settings)
        history = store.load()
        if history.messages:
            console.print(palette.success(f"Loaded chat history with {len(history)} messages."))
        else:
            console.print(palette.success("Starting a new conversation."))
        console.print(Text("Type 'exit' to leave", style="dim"))

        session = ChatSession(llm, history=history)
        repl = ChatRepl(session, store, renderer, palette, console=console)
        try:
            await repl.run()
        finally:
            await session.close()

    asyncio.run(_chat())


@app.command(name="tui")
def tui_command(
    read_only: bool = typer.Option(
        False,
        "--read-only",
        "-r",
        help="Browse rooms without connecting to the model"
    ),
):
    """Launch the full-screen chat room browser."""
    from ..ui import run_tui

    settings = get_settings(console, require_api_key=not read_only)

    async def _tui() -> int:
        llm = None if read_only else get_llm(settings, console)
        store = get_room_store(settings)
        try:
            await store.connect()
        except Exception as e:
            raise fail(f"Error opening database {settings.db_path}: {e}", console) from e

        try:
            return await run_tui(store, provider=llm)
        finally:
            await store.disconnect()
            if llm is not None:
                await llm.close()

    try:
        code = asyncio.run(_tui())
    except typer.Exit:
        raise
    except KeyboardInterrupt:
        code = 0
    except Exception as e:
        raise fail(f"Could not run the terminal UI: {e}", console) from e

    if code:
        raise typer.Exit(code=code)


@app.command()
def rooms():
    """List chat rooms in the database."""
    settings = get_settings(console, require_api_key=False)

    async def _rooms():
        async with get_room_store(settings) as store:
            all_rooms = await store.list_rooms()

        if not all_rooms:
            console.print("[yellow]No chat rooms yet[/yellow]")
            console.print("[dim]Create one with: termchat new-room <name>[/dim]")
            return

        table = Table(show_header=True, header_style="bold cyan")
        table.add_column("ID", style="dim", width=6)
        table.add_column("Name", style="cyan")
        table.add_column("Created at", style="green")
        for room in all_rooms:
            table.add_row(str(room.id), room.name, room.created_at.strftime("%Y-%m-%d %H:%M:%S"))
        console.print(table)

    try:
        asyncio.run(_rooms())
    except Exception as e:
        raise fail(str(e), console) from e


@app.command(name="new-room")
def new_room(
    name: str = typer.Argument(..., help="Name of the chat room")
):
    """Create a chat room."""
    settings = get_settings(console, require_api_key=False)

    async def _new_room():
        async with get_room_store(settings) as store:
            return await store.create_room(name)

    try:
        room = asyncio.run(_new_room())
    except Exception as e:
        raise fail(str(e), console) from e

    console.print(Text.assemble((f"Created room {room.id}: ", "green"), room.name))


@app.command()
def history(
    limit: int = typer.Option(
        10,
        "--limit",
        "-l",
        help="Number of most recent messages to show"
    )
):
    """Show the most recent messages of the saved conversation."""
    settings = get_settings(console, require_api_key=False)
    palette = Palette()
    renderer = MarkdownRenderer(word_wrap=settings.word_wrap)

    saved = get_history_store(settings).load()
    if not saved.messages:
        console.print("[yellow]No saved conversation[/yellow]")
        return

    for message in saved.messages[-limit:]:
        stamp = message.time.strftime("%Y-%m-%d %H:%M:%S")
        if message.role == Role.USER:
            console.print(palette.user(f"You [{stamp}]: ") + Text(message.content))
        else:
            console.print(palette.assistant(f"Gemini [{stamp}]:"))
            console.print(Text.from_ansi(renderer.render(message.content)))


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
