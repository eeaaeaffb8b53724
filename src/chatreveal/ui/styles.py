"""CSS styles for the TUI.

Hides layout and styling decisions from the application logic.
Uses Textual CSS features: nesting, pseudo-classes, variables.
"""

APP_CSS = """
/* ============================================
   Main Screen Layout - single column
   ============================================ */
Screen {
    layout: vertical;
    background: $background;
    padding: 0 1;
}

/* ============================================
   API Key Bar
   ============================================ */
ApiKeyBar {
    height: 3;
    margin: 1 0 0 0;
}

#api-key-label {
    width: auto;
    padding: 1 1 0 0;
    color: $text-muted;
}

#api-key-input {
    width: 1fr;
    border: tall $border;

    &:focus {
        border: tall $accent;
    }

    /* Flash when a prompt is submitted without a key */
    &.-flash {
        border: tall $error;
        background: $error 15%;
    }
}

#api-key-status {
    width: 3;
    padding: 1 0 0 1;

    &.-valid {
        color: $success;
    }

    &.-invalid {
        color: $error;
    }
}

/* ============================================
   Chat History Panel - Primary Focus Area
   ============================================ */
#chat-history {
    height: 1fr;
    margin: 1 0;
    background: $surface;
    border: round $border;
    border-title-color: $primary;
    border-title-style: bold;
    border-subtitle-color: $text-muted;
    padding: 0 1;
    scrollbar-gutter: stable;

    &:focus-within {
        border: round $primary;
    }
}

#chat-empty-hint,
#chat-loading {
    color: $text-muted;
    margin: 1 0 0 0;
}

.chat-message {
    width: 100%;
    height: auto;
    margin: 0 0 1 0;
}

.user-message {
    color: $secondary;
}

.assistant-message {
    color: $primary;
}

/* ============================================
   Canned Questions
   ============================================ */
QuestionGrid {
    layout: grid;
    grid-size: 2;
    grid-gutter: 0 1;
    height: auto;
    margin: 0 0 1 0;
}

.question-btn {
    width: 100%;
    height: 3;
    content-align: left middle;
    background: $surface;
    border: tall $border;
    color: $foreground;

    &:hover {
        background: $panel;
    }
}

/* ============================================
   Bottom Input Bar
   ============================================ */
ChatInputBar {
    height: auto;
    max-height: 8;
    margin: 0 0 1 0;
}

#chat-input {
    width: 1fr;
    height: auto;
    min-height: 3;
    max-height: 8;
    border: tall $border;

    &:focus {
        border: tall $accent;
    }
}

#send-btn,
#stop-btn {
    width: 10;
    min-width: 10;
    height: 3;
    margin: 0 0 0 1;
}

#stop-btn {
    display: none;
}

ChatInputBar.-loading {
    #send-btn {
        display: none;
    }

    #stop-btn {
        display: block;
    }
}

/* ============================================
   Debug Log Panel
   ============================================ */
#debug-panel {
    height: 8;
    border: round $warning 60%;
    border-title-color: $warning;
    border-subtitle-color: $text-muted;
    background: $surface;
}
"""
