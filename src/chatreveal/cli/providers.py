"""Provider factory functions for CLI.

Centralizes creation of the dispatcher and chat session from environment
variables and command-line overrides. Hides configuration details from
command implementations.
"""

import os
from typing import Any

from rich.console import Console
from rich.markup import escape

from ..config import (
    BACKEND_OPENAI,
    BACKEND_PROXY,
    DEFAULT_MAX_TOKENS,
    DEFAULT_OPENAI_MODEL,
    DEFAULT_PROXY_URL,
    LogLevel,
    REVEAL_INTERVAL_SECONDS,
)
from ..llm import RequestDispatcher, create_llm_provider
from ..session import ChatSession

# Default console for output
_console = Console()

_LEVEL_STYLES = {
    "debug": "dim",
    "info": "blue",
    "warning": "yellow",
    "error": "red",
}


def get_backend(backend: str | None = None) -> str:
    """Resolve the backend name.

    Environment variables:
        CHAT_BACKEND: Backend type (openai, proxy; default: openai)
    """
    return (backend or os.getenv("CHAT_BACKEND", BACKEND_OPENAI)).lower()


def get_dispatcher(
    backend: str | None = None,
    model: str | None = None,
    proxy_url: str | None = None,
    console: Console | None = None,
) -> RequestDispatcher:
    """Create the request dispatcher from environment variables.

    Args:
        backend: Backend override ('openai' or 'proxy')
        model: Model override for the OpenAI backend
        proxy_url: Base URL override for the proxy backend
        console: Optional Rich console for output

    Returns:
        Dispatcher bound to the selected provider

    Raises:
        SystemExit: If the backend is unknown

    Environment variables:
        OPENAI_API_KEY: Default OpenAI API key (may also be entered in the TUI)
        OPENAI_CHAT_MODEL: OpenAI model (default: gpt-4o)
        OPENAI_BASE_URL: Custom OpenAI-compatible base URL
        CHAT_PROXY_URL: Proxy backend base URL (default: http://localhost:3001)
    """
    import typer

    con = console or _console
    backend_name = get_backend(backend)

    config: dict[str, Any]
    if backend_name == BACKEND_OPENAI:
        config = {
            "api_key": os.getenv("OPENAI_API_KEY"),
            "model": model or os.getenv("OPENAI_CHAT_MODEL", DEFAULT_OPENAI_MODEL),
            "base_url": os.getenv("OPENAI_BASE_URL") or None,
        }
    elif backend_name == BACKEND_PROXY:
        config = {"base_url": proxy_url or os.getenv("CHAT_PROXY_URL", DEFAULT_PROXY_URL)}
    else:
        con.print(f"[red]Error: Unknown chat backend: {backend_name}[/red]")
        raise typer.Exit(code=1)

    provider = create_llm_provider(backend_name, **config)
    return RequestDispatcher(provider, max_tokens=DEFAULT_MAX_TOKENS)


def get_session(
    dispatcher: RequestDispatcher,
    interval: float = REVEAL_INTERVAL_SECONDS,
    show_error_detail: bool = True,
) -> ChatSession:
    """Create a chat session, pre-filled with OPENAI_API_KEY when set."""
    return ChatSession(
        dispatcher,
        reveal_interval=interval,
        include_error_detail=show_error_detail,
        api_key=os.getenv("OPENAI_API_KEY") if dispatcher.requires_api_key else None,
    )


def console_debug_callback(console: Console, log_level: str):
    """Build a session debug callback that prints traces at or above ``log_level``."""
    threshold = LogLevel.from_string(log_level)

    def _callback(level: str, component: str, message: str) -> None:
        if LogLevel.from_string(level) < threshold:
            return
        style = _LEVEL_STYLES.get(level, "white")
        console.print(
            f"[{style}]{level.upper():<7}[/{style}] [dim]\\[{component}][/dim] {escape(message)}",
            highlight=False,
        )

    return _callback
