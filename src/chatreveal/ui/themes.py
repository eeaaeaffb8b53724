"""Theme definitions for the TUI.

This module hides the design decisions about:
- Color palettes and visual appearance
- Theme variables (borders, scrollbars, etc.)
- Dark/light mode configuration

To add a new theme, define it here and register in the app.
"""

from textual.theme import Theme

# Light gray page with blue AI text, as the chat is meant to read like a page
CHATREVEAL_LIGHT = Theme(
    name="chatreveal-light",
    primary="#2563eb",      # Blue 600 - AI messages, focus
    secondary="#1f2937",    # Gray 800 - user messages
    accent="#3b82f6",       # Blue 500 - focus rings
    foreground="#1f2937",
    background="#f3f4f6",   # Gray 100 - page
    success="#22c55e",      # Green 500 - valid key
    warning="#f59e0b",
    error="#ef4444",        # Red 500 - invalid key, flash
    surface="#ffffff",      # White - conversation card
    panel="#e5e7eb",        # Gray 200 - bars
    dark=False,
    variables={
        "border": "#d1d5db",
        "border-blurred": "#e5e7eb",
        "scrollbar": "#d1d5db",
        "scrollbar-hover": "#9ca3af",
        "scrollbar-active": "#2563eb",
        "scrollbar-background": "#f3f4f6",
        "text-muted": "#6b7280",
        "input-cursor-background": "#1f2937",
        "input-cursor-foreground": "#ffffff",
        "input-selection-background": "#3b82f6 30%",
        "footer-background": "#e5e7eb",
        "footer-key-foreground": "#2563eb",
    },
)

# Dark counterpart, kept close to the light palette's hues
CHATREVEAL_DARK = Theme(
    name="chatreveal-dark",
    primary="#60a5fa",
    secondary="#e5e7eb",
    accent="#93c5fd",
    foreground="#e5e7eb",
    background="#111827",
    success="#4ade80",
    warning="#fbbf24",
    error="#f87171",
    surface="#1f2937",
    panel="#374151",
    dark=True,
    variables={
        "border": "#4b5563",
        "border-blurred": "#374151",
        "text-muted": "#9ca3af",
        "footer-key-foreground": "#60a5fa",
    },
)

THEMES = (CHATREVEAL_LIGHT, CHATREVEAL_DARK)
