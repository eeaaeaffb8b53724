from typing import Any

from ..config import BACKEND_OPENAI, BACKEND_PROXY
from .base import LLMProvider
from .providers import OpenAIProvider, ProxyProvider


def create_llm_provider(provider: str, **config: Any) -> LLMProvider:
    """Create an LLM provider instance.

    This factory function hides the instantiation logic for different backends.

    Args:
        provider: Backend type ('openai', 'proxy')
        **config: Provider-specific configuration
            For OpenAI:
                - api_key: str | None (may be entered later, per request)
                - model: str (default: 'gpt-4o')
                - base_url: str | None
                - organization: str | None
            For the proxy backend:
                - base_url: str (default: 'http://localhost:3001')
                - timeout: float (default: 60.0)

    Returns:
        Initialized LLM provider instance

    Raises:
        ValueError: If provider type is not supported

    Examples:
        >>> provider = create_llm_provider(
        ...     "openai",
        ...     api_key="sk-...",
        ...     model="gpt-4o"
        ... )

        >>> provider = create_llm_provider(
        ...     "proxy",
        ...     base_url="https://chat.example.com"
        ... )
    """
    provider_lower = provider.lower()

    if provider_lower == BACKEND_OPENAI:
        return OpenAIProvider(**config)

    if provider_lower == BACKEND_PROXY:
        return ProxyProvider(**config)

    raise ValueError(
        f"Unsupported provider: {provider}. "
        f"Supported providers: '{BACKEND_OPENAI}', '{BACKEND_PROXY}'"
    )
