from .base import LLMProvider
from .dispatcher import RequestDispatcher
from .factory import create_llm_provider
from .models import ChatMessage, LLMResponse
from .providers import OpenAIProvider, ProxyProvider

__all__ = [
    "LLMProvider",
    "RequestDispatcher",
    "create_llm_provider",
    "ChatMessage",
    "LLMResponse",
    "OpenAIProvider",
    "ProxyProvider",
]
