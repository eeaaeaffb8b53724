"""
chatreveal: a conversational client that reveals chat-completion replies
with a cancellable typewriter effect.

This package follows Parnas's information hiding principles,
where each module hides a specific design decision.
"""

__version__ = "0.1.0"

from .conversation import ConversationStore, Message
from .errors import (
    ChatRevealError,
    DispatchError,
    EmptyPromptError,
    HttpError,
    MalformedResponseError,
    MissingApiKeyError,
    NetworkError,
    RevealInProgressError,
    SessionBusyError,
    SessionError,
)
from .llm import RequestDispatcher, create_llm_provider
from .reveal import RevealController, RevealSession
from .session import ApiKeyStatus, ChatPhase, ChatSession, ChatSnapshot

__all__ = [
    "ApiKeyStatus",
    "ChatPhase",
    "ChatRevealError",
    "ChatSession",
    "ChatSnapshot",
    "ConversationStore",
    "DispatchError",
    "EmptyPromptError",
    "HttpError",
    "MalformedResponseError",
    "Message",
    "MissingApiKeyError",
    "NetworkError",
    "RequestDispatcher",
    "RevealController",
    "RevealInProgressError",
    "RevealSession",
    "SessionBusyError",
    "SessionError",
    "create_llm_provider",
]
