"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- API key entry, status indicator and flash
- Chat message rendering and in-place reveal updates
- Canned question buttons
- Input history and the send/stop swap
- Log rendering and level filtering
"""

from datetime import datetime

from rich.markup import escape
from rich.text import Text
from textual.containers import Horizontal, VerticalScroll
from textual.message import Message
from textual.widget import Widget
from textual.widgets import Button, Input, RichLog, Static, TextArea

from ..config import (
    AI_PREFIX,
    API_KEY_FLASH_SECONDS,
    DEFAULT_QUESTIONS,
    EMPTY_CONVERSATION_HINT,
    LOADING_TEXT,
    LOG_TIMESTAMP_FORMAT,
    USER_PREFIX,
    LogLevel,
)
from ..conversation import Message as ConversationMessage
from ..session import ApiKeyStatus, ChatSnapshot


class ApiKeyBar(Horizontal):
    """Password field for the API key with a validity indicator."""

    class Changed(Message):
        """Message sent when the key is edited."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    _STATUS_GLYPHS = {
        ApiKeyStatus.UNKNOWN: "",
        ApiKeyStatus.VALID: "✔",
        ApiKeyStatus.INVALID: "✘",
    }

    def compose(self):
        yield Static("Chave API", id="api-key-label")
        yield Input(
            placeholder="Insira sua chave da API OpenAI",
            password=True,
            id="api-key-input",
        )
        yield Static("", id="api-key-status")

    def on_input_changed(self, event: Input.Changed) -> None:
        event.stop()
        self.post_message(self.Changed(event.value))

    def set_status(self, status: ApiKeyStatus) -> None:
        indicator = self.query_one("#api-key-status", Static)
        indicator.update(self._STATUS_GLYPHS[status])
        indicator.set_class(status is ApiKeyStatus.VALID, "-valid")
        indicator.set_class(status is ApiKeyStatus.INVALID, "-invalid")

    def flash(self, duration: float = API_KEY_FLASH_SECONDS) -> None:
        """Highlight the key field for ``duration`` seconds and focus it."""
        key_input = self.query_one("#api-key-input", Input)
        key_input.add_class("-flash")
        key_input.focus()
        self.set_timer(duration, lambda: key_input.remove_class("-flash"))

    @property
    def is_flashing(self) -> bool:
        return self.query_one("#api-key-input", Input).has_class("-flash")


class MessageView(Static):
    """One rendered message; its text is replaced while a reveal runs."""

    def __init__(self, message: ConversationMessage, *args, **kwargs) -> None:
        role_class = "assistant-message" if message.is_ai else "user-message"
        super().__init__(
            self._render_text(message),
            *args,
            classes=f"chat-message {role_class}",
            **kwargs,
        )
        self.message_id = message.id
        self.message_text = message.text

    @staticmethod
    def _render_text(message: ConversationMessage) -> Text:
        prefix = AI_PREFIX if message.is_ai else USER_PREFIX
        return Text.assemble((f"{prefix}: ", "bold"), message.text)

    def show(self, message: ConversationMessage) -> None:
        if message.text != self.message_text:
            self.message_text = message.text
            self.update(self._render_text(message))


class ChatHistoryWidget(VerticalScroll):
    """Scrollable conversation that mirrors the session's messages."""

    BORDER_TITLE = "Chat"
    BORDER_SUBTITLE = "Conversation history"
    ALLOW_SELECT = True

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._views: dict[int, MessageView] = {}

    def compose(self):
        yield Static(EMPTY_CONVERSATION_HINT, id="chat-empty-hint")
        yield Static(LOADING_TEXT, id="chat-loading")

    def on_mount(self) -> None:
        self.query_one("#chat-loading", Static).display = False

    def sync(self, snapshot: ChatSnapshot) -> None:
        """Render new messages and refresh the text of existing ones."""
        loading = self.query_one("#chat-loading", Static)
        self.query_one("#chat-empty-hint", Static).display = not snapshot.messages

        for message in snapshot.messages:
            view = self._views.get(message.id)
            if view is None:
                view = MessageView(message)
                self._views[message.id] = view
                self.mount(view, before=loading)
            else:
                view.show(message)

        loading.display = snapshot.is_loading
        self.border_subtitle = f"{len(snapshot.messages)} messages"
        self.scroll_end(animate=False)

    def get_last_response(self) -> str | None:
        """Get the text of the last AI message."""
        for view in reversed(list(self._views.values())):
            if view.has_class("assistant-message"):
                return view.message_text
        return None


class QuestionGrid(Widget):
    """Buttons for the canned questions."""

    class Picked(Message):
        """Message sent when a canned question is chosen."""

        def __init__(self, question: str) -> None:
            super().__init__()
            self.question = question

    def __init__(self, questions: tuple[str, ...] = DEFAULT_QUESTIONS, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._questions = questions

    def compose(self):
        for index, question in enumerate(self._questions):
            yield Button(question, id=f"question-{index}", classes="question-btn")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        index = int(event.button.id.removeprefix("question-"))
        self.post_message(self.Picked(self._questions[index]))

    def set_disabled(self, disabled: bool) -> None:
        for button in self.query(Button):
            button.disabled = disabled


class ChatInputBar(Horizontal):
    """Chat input bar with TextArea and a Send button that turns into Stop."""

    class Submitted(Message):
        """Message sent when user submits input."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    class StopRequested(Message):
        """Message sent when the Stop button is pressed."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._history: list[str] = []
        self._history_index: int = -1

    def compose(self):
        text_area = TextArea(id="chat-input", show_line_numbers=False)
        text_area.cursor_blink = False
        yield text_area
        yield Button("Enviar", id="send-btn", variant="primary").with_tooltip(
            "Enviar pergunta (Ctrl+J)"
        )
        yield Button("Parar", id="stop-btn", variant="error").with_tooltip(
            "Parar resposta (Esc)"
        )

    def on_mount(self) -> None:
        text_area = self.query_one("#chat-input", TextArea)
        text_area.highlight_cursor_line = False

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        if event.button.id == "send-btn":
            self._submit()
        elif event.button.id == "stop-btn":
            self.post_message(self.StopRequested())

    def on_key(self, event) -> None:
        """Handle keyboard shortcuts.

        Note: ctrl+enter cannot work in terminals (terminal doesn't pass
        ctrl/shift modifiers with Enter). Use ctrl+j as the submit shortcut.
        """
        if event.key == "ctrl+j":
            self._submit()
            event.prevent_default()
            event.stop()
        elif event.key == "up" and self._is_cursor_at_start():
            self._navigate_history(-1)
            event.prevent_default()
            event.stop()
        elif event.key == "down" and self._is_cursor_at_end():
            self._navigate_history(1)
            event.prevent_default()
            event.stop()

    def _is_cursor_at_start(self) -> bool:
        text_area = self.query_one("#chat-input", TextArea)
        return text_area.cursor_location == (0, 0)

    def _is_cursor_at_end(self) -> bool:
        text_area = self.query_one("#chat-input", TextArea)
        lines = text_area.text.split("\n")
        return text_area.cursor_location == (len(lines) - 1, len(lines[-1]))

    def _navigate_history(self, direction: int) -> None:
        if not self._history:
            return
        text_area = self.query_one("#chat-input", TextArea)
        if direction < 0:  # Up
            if self._history_index == -1:
                self._history_index = len(self._history) - 1
            elif self._history_index > 0:
                self._history_index -= 1
        else:  # Down
            if self._history_index < len(self._history) - 1:
                self._history_index += 1
            else:
                self._history_index = -1
                text_area.text = ""
                return
        text_area.text = self._history[self._history_index]

    def _submit(self) -> None:
        if self.has_class("-loading"):
            return
        value = self.query_one("#chat-input", TextArea).text
        if value.strip():
            self.post_message(self.Submitted(value))

    def accept(self, value: str) -> None:
        """Record an accepted prompt in the history and clear the input."""
        stripped = value.strip()
        if not self._history or self._history[-1] != stripped:
            self._history.append(stripped)
        self._history_index = -1
        self.query_one("#chat-input", TextArea).text = ""

    def set_loading(self, loading: bool) -> None:
        """Swap Send for Stop and lock the input while a reply is pending."""
        self.set_class(loading, "-loading")
        self.query_one("#chat-input", TextArea).disabled = loading

    def focus_input(self) -> None:
        """Focus the text input."""
        self.query_one("#chat-input", TextArea).focus()


class DebugPanel(RichLog):
    """Log panel for real-time tracing with level filtering.

    Shows timestamped log messages from all components.
    Supports standard log levels: DEBUG < INFO < WARNING < ERROR.
    Hidden by default, shown with --log-level flag or toggled with Ctrl+D.
    """

    BORDER_TITLE = "Log"
    BORDER_SUBTITLE = "Trace log"

    _LEVEL_COLORS = {
        LogLevel.DEBUG: "dim",
        LogLevel.INFO: "blue",
        LogLevel.WARNING: "yellow",
        LogLevel.ERROR: "red",
    }

    _COMPONENT_COLORS = {
        "TUI": "cyan",
        "Chat": "green",
        "LLM": "magenta",
    }

    def __init__(self, *args, log_level: int = LogLevel.DEBUG, **kwargs) -> None:
        super().__init__(
            *args,
            markup=True,
            highlight=False,
            auto_scroll=True,
            wrap=False,
            **kwargs
        )
        self._log_level = log_level

    @property
    def log_level(self) -> int:
        """Current log level threshold."""
        return self._log_level

    @log_level.setter
    def log_level(self, level: int) -> None:
        """Set log level threshold."""
        self._log_level = level
        self._update_subtitle()

    def _update_subtitle(self) -> None:
        if self.display:
            self.border_subtitle = f"Level: {LogLevel.name(self._log_level)}"
        else:
            self.border_subtitle = "Hidden"

    def on_mount(self) -> None:
        """Hide by default."""
        self.display = False

    def log_entry(self, level: str, component: str, message: str) -> None:
        """Add a log entry if it meets the current level threshold.

        Args:
            level: Level name (debug, info, warning, error)
            component: Component name (TUI, Chat, LLM)
            message: Log message
        """
        numeric = LogLevel.from_string(level)
        if numeric < self._log_level:
            return

        timestamp = datetime.now().strftime(LOG_TIMESTAMP_FORMAT)
        level_color = self._LEVEL_COLORS.get(numeric, "white")
        comp_color = self._COMPONENT_COLORS.get(component, "white")
        self.write(
            f"[dim]{timestamp}[/] "
            f"[{level_color}]{LogLevel.name(numeric):<5}[/] "
            f"[{comp_color}]\\[{component}][/] {escape(message)}"
        )

    def show(self) -> None:
        """Show the log panel."""
        self.display = True
        self._update_subtitle()

    def hide(self) -> None:
        """Hide the log panel."""
        self.display = False
        self.border_subtitle = "Hidden"

    def toggle(self) -> bool:
        """Toggle visibility. Returns new state."""
        if self.display:
            self.hide()
            return False
        self.show()
        return True
