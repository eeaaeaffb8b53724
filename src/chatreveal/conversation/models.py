"""Data models for the conversation.

Hides the internal representation of chat messages.
"""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class Message:
    """A message in the conversation."""

    id: int
    text: str
    is_ai: bool
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def role(self) -> str:
        return "assistant" if self.is_ai else "user"
