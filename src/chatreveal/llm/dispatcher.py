"""Request dispatcher.

Hides how a single prompt becomes a single reply string: message wrapping,
token limits and reply normalization. Callers only see the final text or a
DispatchError.
"""

from collections.abc import Callable

from ..config import DEFAULT_MAX_TOKENS
from ..errors import DispatchError
from .base import LLMProvider
from .models import ChatMessage

DebugCallback = Callable[[str, str, str], None]


class RequestDispatcher:
    """Sends one prompt to a provider and returns the trimmed reply."""

    def __init__(
        self,
        provider: LLMProvider,
        max_tokens: int | None = DEFAULT_MAX_TOKENS,
        model: str | None = None,
    ) -> None:
        self._provider = provider
        self._max_tokens = max_tokens
        self._model = model
        self._debug_callback: DebugCallback | None = None

    @property
    def provider(self) -> LLMProvider:
        return self._provider

    @property
    def requires_api_key(self) -> bool:
        return self._provider.requires_api_key

    def set_debug_callback(self, callback: DebugCallback | None) -> None:
        """Set the callback receiving ``(level, component, message)`` traces."""
        self._debug_callback = callback

    async def send_prompt(self, prompt: str, api_key: str | None = None) -> str:
        """Send ``prompt`` as a single user message.

        Returns:
            The reply text with surrounding whitespace removed

        Raises:
            DispatchError: NetworkError, HttpError or MalformedResponseError
        """
        self._debug(
            "debug",
            f"{type(self._provider).__name__} request "
            f"(model={self._model or 'default'}, max_tokens={self._max_tokens})",
        )
        try:
            response = await self._provider.chat_completion(
                [ChatMessage(role="user", content=prompt)],
                model=self._model,
                max_tokens=self._max_tokens,
                api_key=api_key,
            )
        except DispatchError as exc:
            self._debug("warning", f"{type(self._provider).__name__} failed: {type(exc).__name__}")
            raise

        if response.usage:
            self._debug("debug", f"{response.model} usage: {response.usage}")
        return response.content.strip()

    async def close(self) -> None:
        await self._provider.close()

    def _debug(self, level: str, message: str) -> None:
        if self._debug_callback is not None:
            self._debug_callback(level, "LLM", message)
