from typing import Any

import httpx

from ...config import DEFAULT_PROXY_URL, REQUEST_TIMEOUT_SECONDS
from ...errors import HttpError, MalformedResponseError, NetworkError
from ..base import LLMProvider
from ..models import ChatMessage, LLMResponse

CHAT_PATH = "/api/chat"


def extract_reply(payload: Any) -> str:
    """Return ``choices[0].message.content`` from a chat-completion body.

    Raises:
        MalformedResponseError: If the body does not have that shape
    """
    try:
        content = payload["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as exc:
        raise MalformedResponseError("Response has no choices[0].message.content") from exc
    if not isinstance(content, str):
        raise MalformedResponseError("Response has no choices[0].message.content")
    return content


class ProxyProvider(LLMProvider):
    """Provider for a backend that proxies chat completions.

    Hidden design decisions:
    - The backend holds the credential, so requests carry none
    - Only the latest user prompt is forwarded, as ``{"prompt": ...}``
    - Non-2xx answers are reported by status code only
    """

    def __init__(
        self,
        base_url: str = DEFAULT_PROXY_URL,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        **client_kwargs: Any
    ):
        """Initialize proxy provider.

        Args:
            base_url: Base URL of the proxying backend
            timeout: Request timeout in seconds
            **client_kwargs: Additional kwargs for httpx.AsyncClient
        """
        self._base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=timeout,
            headers={"Content-Type": "application/json"},
            **client_kwargs
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def requires_api_key(self) -> bool:
        return False

    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        api_key: str | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        """Forward the latest user prompt to the backend.

        ``model``, ``temperature``, ``max_tokens`` and ``api_key`` are decided
        by the backend and ignored here.
        """
        prompt = next(
            (msg.content for msg in reversed(messages) if msg.role == "user"),
            None,
        )
        if prompt is None:
            raise ValueError("ProxyProvider needs at least one user message")

        try:
            response = await self._client.post(CHAT_PATH, json={"prompt": prompt})
        except httpx.DecodingError as exc:
            raise MalformedResponseError(f"Could not decode the backend response: {exc}") from exc
        except httpx.HTTPError as exc:
            # Transport failures and redirect loops alike: no answer was received
            raise NetworkError(f"Failed to reach {self._base_url}: {exc}") from exc

        if response.is_error:
            raise HttpError(response.status_code)

        try:
            payload = response.json()
        except ValueError as exc:
            raise MalformedResponseError("Backend returned a non-JSON response") from exc

        return LLMResponse(
            content=extract_reply(payload),
            model=str(payload.get("model") or "proxy"),
            usage=payload.get("usage") if isinstance(payload.get("usage"), dict) else None,
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()
