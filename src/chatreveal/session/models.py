"""State types exposed by the chat session."""

from dataclasses import dataclass
from enum import Enum

from ..conversation import Message


class ChatPhase(str, Enum):
    """Lifecycle phase of the request/reveal cycle."""

    IDLE = "idle"
    REQUESTING = "requesting"
    REVEALING = "revealing"


class ApiKeyStatus(str, Enum):
    """Outcome of the most recent request made with the current key.

    Advisory only: the gate on submission is whether a key was entered.
    """

    UNKNOWN = "unknown"
    VALID = "valid"
    INVALID = "invalid"


@dataclass(frozen=True)
class ChatSnapshot:
    """Read-only view of the session for the rendering layer."""

    phase: ChatPhase
    api_key_status: ApiKeyStatus
    messages: tuple[Message, ...]
    target_message_id: int | None = None

    @property
    def is_loading(self) -> bool:
        return self.phase is not ChatPhase.IDLE

    @property
    def last_message(self) -> Message | None:
        return self.messages[-1] if self.messages else None
