"""Terminal UI module for chatreveal.

Provides a Textual-based TUI over a ChatSession.

Module structure (Parnas principle - each module hides a design decision):
- widgets.py: Custom widgets (key bar, message rendering, questions, input bar, log)
- styles.py: CSS styling (layout decisions)
- themes.py: Color palettes and theme configuration
- app.py: Application orchestration (user interaction flow)
"""

from .app import ChatRevealApp, run_chat_tui
from .widgets import ApiKeyBar, ChatHistoryWidget, ChatInputBar, DebugPanel, QuestionGrid

__all__ = [
    "ApiKeyBar",
    "ChatHistoryWidget",
    "ChatInputBar",
    "ChatRevealApp",
    "DebugPanel",
    "QuestionGrid",
    "run_chat_tui",
]
