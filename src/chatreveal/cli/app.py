"""Main CLI application using Typer."""
import asyncio

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.live import Live
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from ..config import (
    AI_PREFIX,
    DEFAULT_QUESTIONS,
    REVEAL_INTERVAL_SECONDS,
    USER_PREFIX,
)
from ..errors import SessionError
from ..session import ChatSnapshot
from .providers import console_debug_callback, get_dispatcher, get_session

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="chatreveal",
    help="Chat client that reveals chat-completion replies with a typewriter effect",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()


def _resolve_prompt(prompt: str | None, question: int | None) -> str:
    if question is not None:
        if not 1 <= question <= len(DEFAULT_QUESTIONS):
            console.print(
                f"[red]Error: --question must be between 1 and {len(DEFAULT_QUESTIONS)}[/red]"
            )
            raise typer.Exit(code=1)
        return DEFAULT_QUESTIONS[question - 1]
    if not prompt or not prompt.strip():
        console.print("[red]Error: give a prompt or pick one with --question[/red]")
        raise typer.Exit(code=1)
    return prompt


@app.command()
def ask(
    prompt: str = typer.Argument(None, help="Question to send"),
    question: int = typer.Option(
        None,
        "--question",
        "-q",
        help="Send canned question N instead of a prompt (see 'questions')"
    ),
    backend: str = typer.Option(
        None,
        "--backend",
        "-b",
        help="Chat backend: openai or proxy (default: $CHAT_BACKEND or openai)"
    ),
    model: str = typer.Option(
        None,
        "--model",
        "-m",
        help="Model for the openai backend"
    ),
    proxy_url: str = typer.Option(
        None,
        "--proxy-url",
        help="Base URL of the proxy backend"
    ),
    interval: float = typer.Option(
        REVEAL_INTERVAL_SECONDS,
        "--interval",
        "-i",
        min=0.0,
        help="Seconds between revealed characters"
    ),
    hide_error_detail: bool = typer.Option(
        False,
        "--hide-error-detail",
        help="Do not show raw error details in failure messages"
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Print traces with level: debug (all), info, warning, or error"
    ),
):
    """Ask one question and reveal the answer on the console."""
    text = _resolve_prompt(prompt, question)

    async def _ask():
        dispatcher = get_dispatcher(backend, model=model, proxy_url=proxy_url, console=console)
        session = get_session(dispatcher, interval=interval, show_error_detail=not hide_error_detail)
        if log_level is not None:
            session.set_debug_callback(console_debug_callback(console, log_level))

        console.print(f"[bold]{USER_PREFIX}:[/bold] {escape(text)}")
        try:
            with Live(Text(""), console=console, refresh_per_second=30) as live:
                def _render(snapshot: ChatSnapshot) -> None:
                    message = snapshot.last_message
                    if message is not None and message.is_ai:
                        live.update(Text.assemble((f"{AI_PREFIX}: ", "bold blue"), message.text))

                session.subscribe(_render)
                await session.ask(text)
        except SessionError as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(code=1)
        finally:
            await session.close()

    try:
        asyncio.run(_ask())
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted.[/yellow]")


@app.command()
def chat(
    backend: str = typer.Option(
        None,
        "--backend",
        "-b",
        help="Chat backend: openai or proxy (default: $CHAT_BACKEND or openai)"
    ),
    model: str = typer.Option(
        None,
        "--model",
        "-m",
        help="Model for the openai backend"
    ),
    proxy_url: str = typer.Option(
        None,
        "--proxy-url",
        help="Base URL of the proxy backend"
    ),
    interval: float = typer.Option(
        REVEAL_INTERVAL_SECONDS,
        "--interval",
        "-i",
        min=0.0,
        help="Seconds between revealed characters"
    ),
    hide_error_detail: bool = typer.Option(
        False,
        "--hide-error-detail",
        help="Do not show raw error details in failure messages"
    ),
    dark: bool = typer.Option(
        False,
        "--dark",
        help="Use the dark theme"
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Show log panel with level: debug (all), info, warning, or error"
    ),
):
    """Launch the interactive TUI chat interface."""
    async def _chat():
        from ..ui import run_chat_tui
        from ..ui.themes import CHATREVEAL_DARK, CHATREVEAL_LIGHT

        dispatcher = get_dispatcher(backend, model=model, proxy_url=proxy_url, console=console)
        session = get_session(dispatcher, interval=interval, show_error_detail=not hide_error_detail)

        try:
            await run_chat_tui(
                session,
                questions=DEFAULT_QUESTIONS,
                log_level=log_level,
                theme_name=(CHATREVEAL_DARK if dark else CHATREVEAL_LIGHT).name,
            )
        finally:
            console.print("\n[dim]Até logo![/dim]")

    try:
        asyncio.run(_chat())
    except KeyboardInterrupt:
        pass


@app.command()
def questions():
    """List the canned questions."""
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("#", style="dim", width=3)
    table.add_column("Question")
    for index, text in enumerate(DEFAULT_QUESTIONS, 1):
        table.add_row(str(index), text)
    console.print(table)


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
