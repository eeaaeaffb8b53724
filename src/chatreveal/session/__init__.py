"""Chat session module.

Owns the request/reveal lifecycle: phase, loading flag, API key and its
advisory status. The rendering layer reads snapshots and calls operations.
"""

from .formatting import format_error_message
from .models import ApiKeyStatus, ChatPhase, ChatSnapshot
from .session import ChatSession

__all__ = [
    "ApiKeyStatus",
    "ChatPhase",
    "ChatSession",
    "ChatSnapshot",
    "format_error_message",
]
