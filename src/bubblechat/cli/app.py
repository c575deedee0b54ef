"""Main CLI application using Typer."""
import asyncio
from collections.abc import Awaitable, Callable

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..ui.config import LogLevel
from .providers import get_classifier, get_store, require_llm, resolve_log_level

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="bubblechat",
    help="Terminal chat client with message bubbles",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()
err_console = Console(stderr=True)

LEVEL_COLORS = {
    LogLevel.DEBUG: "dim",
    LogLevel.INFO: "cyan",
    LogLevel.WARNING: "yellow",
    LogLevel.ERROR: "red",
}


def console_logger(log_level: str | None) -> Callable[[str, str, str], None] | None:
    """Debug callback printing to stderr at or above the given level."""
    if log_level is None:
        return None
    threshold = LogLevel.from_string(log_level)

    def _log(level: str, component: str, message: str) -> None:
        value = LogLevel.from_string(level)
        if value < threshold:
            return
        color = LEVEL_COLORS.get(value, "white")
        err_console.print(f"[{color}]{LogLevel.name(value):<5}[/] [{component}] {message}", markup=True, highlight=False)

    return _log


async def _close_quietly(name: str, close: Callable[[], Awaitable[None]]) -> None:
    """Run one teardown step; a failure is reported and the next step still runs."""
    try:
        await close()
    except Exception as e:
        err_console.print(f"[yellow]Warning: closing {name} failed: {e}[/yellow]")


@app.command()
def chat(
    store_backend: str | None = typer.Option(
        None,
        "--store",
        help="Chat store: 'sqlite' (persistent) or 'memory' (session-only)"
    ),
    db_path: str | None = typer.Option(
        None,
        "--db-path",
        help="Path for SQLite database (only with --store sqlite)"
    ),
    classify: bool = typer.Option(
        False,
        "--classify",
        "-c",
        help="Only reply to lines the dialog-act classifier says need an answer"
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Show log panel with level: debug (all), info, warning, or error"
    ),
):
    """Launch the message-bubble chat interface."""
    async def _chat():
        from ..ui import run_chat_tui

        llm = require_llm(console)
        store = get_store(store_backend, db_path)
        classifier = get_classifier(console) if classify else None

        try:
            await store.connect()
            await run_chat_tui(
                llm=llm,
                store=store,
                classifier=classifier,
                log_level=resolve_log_level(log_level),
            )
        finally:
            await _close_quietly("store", store.disconnect)
            await _close_quietly("LLM client", llm.close)
            console.print("\n[dim]Goodbye![/dim]")

    try:
        asyncio.run(_chat())
    except KeyboardInterrupt:
        pass


@app.command(name="console")
def console_command(
    store_backend: str | None = typer.Option(
        None,
        "--store",
        help="Chat store: 'sqlite' (persistent) or 'memory' (session-only)"
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Print logs to stderr at this level: debug, info, warning, or error"
    ),
):
    """Line-mode chat without the bubble interface."""
    async def _console():
        from ..conversation import ConversationAgent

        llm = require_llm(console)
        store = get_store(store_backend)
        agent = ConversationAgent(llm, store=store)
        agent.set_debug_callback(console_logger(resolve_log_level(log_level)))

        try:
            await store.connect()
            console.print(f"[cyan]Model: {llm.model}[/cyan]")
            console.print("[dim]Type /exit to quit.[/dim]")

            while True:
                try:
                    user_input = console.input(f"[green][{agent.total_tokens}tok] > [/green]").strip()
                except (KeyboardInterrupt, EOFError):
                    console.print("\n[dim]Goodbye![/dim]")
                    break

                if not user_input:
                    continue
                if user_input in ("/exit", "/quit"):
                    break

                if user_input.startswith("/"):
                    console.print(await agent.run_command(user_input), markup=False)
                    continue

                try:
                    answer = await agent.reply(user_input)
                except Exception as e:
                    err_console.print(f"[red]{e}[/red]")
                    continue
                if answer is not None:
                    console.print(answer, markup=False)
        finally:
            await agent.close()

    asyncio.run(_console())


@app.command()
def ask(
    text: str = typer.Argument(..., help="Message to send"),
):
    """Send one message and print the reply."""
    async def _ask():
        from ..conversation import ConversationAgent

        agent = ConversationAgent(require_llm(console))
        try:
            answer = await agent.reply(text)
            console.print(answer or "", markup=False)
            console.print(f"[dim]{agent.total_tokens} tokens[/dim]")
        except Exception as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(code=1)
        finally:
            await agent.close()

    asyncio.run(_ask())


@app.command()
def memories(
    db_path: str | None = typer.Option(None, "--db-path", help="SQLite database path"),
):
    """List stored notes."""
    async def _memories():
        store = get_store("sqlite", db_path)
        try:
            await store.connect()
            entries = await store.list_memories()
        except Exception as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(code=1)
        finally:
            await store.disconnect()

        if not entries:
            console.print("[dim]No memories stored.[/dim]")
            return

        table = Table(title="Memories")
        table.add_column("Name", style="cyan")
        table.add_column("Value")
        table.add_column("Created", style="dim")
        for entry in entries:
            table.add_row(entry.name, entry.value, entry.created_at.strftime("%Y-%m-%d %H:%M"))
        console.print(table)

    asyncio.run(_memories())


@app.command()
def search(
    query: str = typer.Argument(..., help="Search query"),
    limit: int = typer.Option(10, "--limit", "-n", help="Maximum number of results"),
    db_path: str | None = typer.Option(None, "--db-path", help="SQLite database path"),
):
    """Full-text search over past messages."""
    async def _search():
        store = get_store("sqlite", db_path)
        try:
            await store.connect()
            records = await store.search_history(query, limit=limit)
        except Exception as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(code=1)
        finally:
            await store.disconnect()

        if not records:
            console.print("[dim]No results.[/dim]")
            return

        table = Table(title=f"Results for '{query}'")
        table.add_column("ID", justify="right", style="dim")
        table.add_column("Role", style="cyan")
        table.add_column("Message")
        table.add_column("When", style="dim")
        for record in records:
            table.add_row(
                str(record.id),
                record.role,
                record.content,
                record.created_at.strftime("%Y-%m-%d %H:%M"),
            )
        console.print(table)

    asyncio.run(_search())


@app.command()
def feed(
    handle: str = typer.Argument(..., help="Mastodon handle, user@instance"),
    limit: int = typer.Option(10, "--limit", "-n", help="Number of posts"),
):
    """Print recent posts from a Mastodon account."""
    from ..feed import get_mastodon_feed

    try:
        text = asyncio.run(get_mastodon_feed(handle, limit=limit))
    except Exception as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)
    console.print(text, markup=False)


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
