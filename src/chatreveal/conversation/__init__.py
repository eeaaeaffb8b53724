"""Conversation store module.

Hides how the ordered message history is kept and how the reveal target
is bound to a specific message.
"""

from .models import Message
from .store import ConversationStore

__all__ = ["ConversationStore", "Message"]
