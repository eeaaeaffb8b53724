from abc import ABC, abstractmethod
from typing import Any

from .models import ChatMessage, LLMResponse


class LLMProvider(ABC):
    """Backend that turns a message list into one reply.

    Hides which endpoint answers and how it is reached: the official API with
    a user key, or a proxy that keeps the key server-side. Every failure
    leaves a provider as a DispatchError subclass, so callers never see
    SDK or transport exceptions.

    Providers own an HTTP client; use them as async context managers or call
    ``close()`` when done:
        async with provider:
            response = await provider.chat_completion(messages)
    """

    @property
    @abstractmethod
    def requires_api_key(self) -> bool:
        """Whether requests must carry a user-supplied API key."""

    @abstractmethod
    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        api_key: str | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        """Send ``messages`` and wait for the complete reply.

        Args:
            messages: Conversation to answer, oldest first
            model: Model override; None keeps the provider's default
            temperature: Sampling temperature; None leaves the backend default
            max_tokens: Reply length cap; None leaves the backend default
            api_key: Credential for this request; None uses the configured one
            **kwargs: Extra request fields for the backend

        Returns:
            LLMResponse with the untrimmed reply text

        Raises:
            NetworkError: The request never reached the server
            HttpError: The server answered with a non-2xx status
            MalformedResponseError: The reply field is missing
        """

    @abstractmethod
    async def close(self) -> None:
        """Release the HTTP client."""

    async def __aenter__(self) -> "LLMProvider":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        # httpx may fail to close its pool once the loop is gone; nothing is left to release then
        try:
            await self.close()
        except RuntimeError as e:
            if "Event loop is closed" not in str(e):
                raise
