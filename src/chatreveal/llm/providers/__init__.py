from .openai import OpenAIProvider
from .proxy import ProxyProvider

__all__ = ["OpenAIProvider", "ProxyProvider"]
