"""Main Textual TUI application.

Orchestrates the UI components and routes user interaction to a ChatSession.
All state lives in the session; widgets are refreshed from its snapshots.
"""

import asyncio
import contextlib

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header

from ..config import API_KEY_FLASH_SECONDS, DEFAULT_QUESTIONS
from ..errors import EmptyPromptError, MissingApiKeyError, SessionBusyError
from ..session import ChatSession, ChatSnapshot
from .styles import APP_CSS
from .themes import CHATREVEAL_LIGHT, THEMES
from .widgets import (
    ApiKeyBar,
    ChatHistoryWidget,
    ChatInputBar,
    DebugPanel,
    LogLevel,
    QuestionGrid,
)


class ChatRevealApp(App):
    """Textual TUI for a single typewriter-revealed conversation."""

    CSS = APP_CSS
    TITLE = "Chatreveal"

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit"),
        Binding("escape", "cancel_reply", "Stop"),
        Binding("ctrl+r", "copy_last_response", "Copy Response"),
        Binding("ctrl+d", "toggle_debug", "Debug"),
    ]

    def __init__(
        self,
        session: ChatSession,
        questions: tuple[str, ...] = DEFAULT_QUESTIONS,
        log_level: str | None = None,
        theme_name: str = CHATREVEAL_LIGHT.name,
    ) -> None:
        super().__init__()
        self._session = session
        self._questions = questions
        self._log_level = log_level
        self._theme_name = theme_name
        self._unsubscribe = None

    @property
    def session(self) -> ChatSession:
        return self._session

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        if self._session.requires_api_key:
            yield ApiKeyBar(id="api-key-bar")
        yield ChatHistoryWidget(id="chat-history")
        yield QuestionGrid(self._questions, id="questions")
        yield ChatInputBar(id="chat-input-bar")
        yield DebugPanel(id="debug-panel")
        yield Footer()

    def on_mount(self) -> None:
        """Called when app is mounted."""
        for theme in THEMES:
            self.register_theme(theme)
        self.theme = self._theme_name

        log_panel = self.query_one("#debug-panel", DebugPanel)
        if self._log_level is not None:
            log_panel.log_level = LogLevel.from_string(self._log_level)
            log_panel.show()
            log_panel.log_entry("info", "TUI", f"Log panel enabled with level: {self._log_level.upper()}")
        self._session.set_debug_callback(log_panel.log_entry)

        self._unsubscribe = self._session.subscribe(self._on_snapshot)
        self._on_snapshot(self._session.snapshot())
        self.query_one("#chat-input-bar", ChatInputBar).focus_input()

    def on_unmount(self) -> None:
        """Stop any running reveal so nothing writes into a discarded view."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self._session.set_debug_callback(None)
        self._session.cancel()

    def _on_snapshot(self, snapshot: ChatSnapshot) -> None:
        self.query_one("#chat-history", ChatHistoryWidget).sync(snapshot)
        self.query_one("#questions", QuestionGrid).set_disabled(snapshot.is_loading)
        self.query_one("#chat-input-bar", ChatInputBar).set_loading(snapshot.is_loading)
        if self._session.requires_api_key:
            self.query_one("#api-key-bar", ApiKeyBar).set_status(snapshot.api_key_status)

    def _submit_prompt(self, prompt: str) -> bool:
        """Hand a prompt to the session. Returns True if it was accepted."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        try:
            self._session.submit(prompt)
        except MissingApiKeyError:
            self.query_one("#api-key-bar", ApiKeyBar).flash(API_KEY_FLASH_SECONDS)
            log_panel.log_entry("warning", "TUI", "Prompt rejected: no API key")
            return False
        except SessionBusyError:
            self.notify("Aguarde a resposta atual", severity="warning", timeout=2)
            return False
        except EmptyPromptError:
            return False
        return True

    def on_chat_input_bar_submitted(self, event: ChatInputBar.Submitted) -> None:
        """Handle a typed prompt."""
        if self._submit_prompt(event.value):
            self.query_one("#chat-input-bar", ChatInputBar).accept(event.value)

    def on_question_grid_picked(self, event: QuestionGrid.Picked) -> None:
        """Handle a canned question."""
        self._submit_prompt(event.question)

    def on_chat_input_bar_stop_requested(self, event: ChatInputBar.StopRequested) -> None:
        self.action_cancel_reply()

    def on_api_key_bar_changed(self, event: ApiKeyBar.Changed) -> None:
        self._session.set_api_key(event.value)

    def action_cancel_reply(self) -> None:
        """Stop the pending request or the running reveal."""
        if self._session.cancel():
            self.notify("Resposta interrompida", severity="warning", timeout=2)

    def action_toggle_debug(self) -> None:
        """Toggle the log panel visibility."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        is_visible = log_panel.toggle()
        self.notify(f"Log panel {'shown' if is_visible else 'hidden'}", timeout=2)

    def action_copy_last_response(self) -> None:
        """Copy last AI response to clipboard."""
        chat = self.query_one("#chat-history", ChatHistoryWidget)
        response = chat.get_last_response()
        if response:
            self.copy_to_clipboard(response)
            self.notify("Response copied")
        else:
            self.notify("No response to copy", severity="warning")


async def run_chat_tui(
    session: ChatSession,
    questions: tuple[str, ...] = DEFAULT_QUESTIONS,
    log_level: str | None = None,
    theme_name: str = CHATREVEAL_LIGHT.name,
) -> None:
    """Run the Textual TUI.

    Args:
        session: Chat session driving the conversation
        questions: Canned questions shown as buttons
        log_level: Log level for panel (debug/info/warning/error), None to hide
        theme_name: Name of a registered theme
    """
    app = ChatRevealApp(
        session=session,
        questions=questions,
        log_level=log_level,
        theme_name=theme_name,
    )
    try:
        await app.run_async()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
    finally:
        with contextlib.suppress(RuntimeError):
            await session.close()
