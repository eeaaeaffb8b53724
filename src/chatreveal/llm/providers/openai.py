from typing import Any

from openai import APIConnectionError, APIError, APIStatusError, AsyncOpenAI

from ...config import DEFAULT_OPENAI_MODEL
from ...errors import HttpError, MalformedResponseError, NetworkError
from ..base import LLMProvider
from ..models import ChatMessage, LLMResponse


def _status_error_message(exc: APIStatusError) -> str | None:
    """Pull ``error.message`` out of an error response body, if present.

    The SDK unwraps the ``error`` object before storing it on ``exc.body``,
    but proxies in front of the API do not always follow that shape.
    """
    body = exc.body
    if isinstance(body, dict):
        error = body.get("error", body)
        if isinstance(error, dict):
            message = error.get("message")
            if isinstance(message, str) and message.strip():
                return message.strip()
    return None


class OpenAIProvider(LLMProvider):
    """OpenAI chat-completions provider.

    Hidden design decisions:
    - OpenAI API client initialization
    - Message format conversion
    - Per-request credentials (the key can change between prompts)
    - Mapping SDK exceptions onto DispatchError subclasses
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str = DEFAULT_OPENAI_MODEL,
        base_url: str | None = None,
        organization: str | None = None,
        **client_kwargs: Any
    ):
        """Initialize OpenAI provider.

        Args:
            api_key: Default OpenAI API key; may be left empty and passed per request
            model: Default model to use
            base_url: Optional custom API base URL
            organization: Optional organization ID
            **client_kwargs: Additional kwargs for AsyncOpenAI client
        """
        self._model = model
        self._api_key = api_key or ""
        self._client = AsyncOpenAI(
            api_key=self._api_key,
            base_url=base_url,
            organization=organization,
            **client_kwargs
        )

    @property
    def model(self) -> str:
        """Get the default model name."""
        return self._model

    @property
    def requires_api_key(self) -> bool:
        return True

    def _client_for(self, api_key: str | None) -> AsyncOpenAI:
        if api_key and api_key != self._api_key:
            return self._client.with_options(api_key=api_key)
        return self._client

    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        api_key: str | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        """Generate a chat completion using OpenAI.

        Args:
            messages: Conversation history
            model: Model to use (overrides default)
            temperature: Sampling temperature
            max_tokens: Maximum tokens to generate
            api_key: Credential for this request
            **kwargs: Additional OpenAI-specific parameters

        Returns:
            LLMResponse with generated content
        """
        model_to_use = model or self._model

        openai_messages = [
            {"role": msg.role, "content": msg.content}
            for msg in messages
        ]

        # Build request params, only including optional values if set
        request_params: dict[str, Any] = {
            "model": model_to_use,
            "messages": openai_messages,
            **kwargs
        }
        if temperature is not None:
            request_params["temperature"] = temperature
        if max_tokens is not None:
            request_params["max_tokens"] = max_tokens

        client = self._client_for(api_key)
        try:
            completion = await client.chat.completions.create(**request_params)
        except APIConnectionError as exc:
            raise NetworkError(f"Failed to reach the OpenAI API: {exc}") from exc
        except APIStatusError as exc:
            raise HttpError(exc.status_code, _status_error_message(exc)) from exc
        except APIError as exc:
            raise MalformedResponseError(f"Unreadable OpenAI response: {exc}") from exc

        try:
            content = completion.choices[0].message.content
        except (AttributeError, IndexError, KeyError, TypeError) as exc:
            raise MalformedResponseError("Response has no choices[0].message.content") from exc
        if not isinstance(content, str):
            raise MalformedResponseError("Response has no choices[0].message.content")

        usage = None
        raw_usage = getattr(completion, "usage", None)
        if raw_usage:
            usage = {
                "prompt_tokens": raw_usage.prompt_tokens,
                "completion_tokens": raw_usage.completion_tokens,
                "total_tokens": raw_usage.total_tokens
            }

        return LLMResponse(
            content=content,
            model=getattr(completion, "model", None) or model_to_use,
            usage=usage
        )

    async def close(self) -> None:
        """Close the OpenAI client.

        Note: Uses the OpenAI SDK's async context manager for proper cleanup.
        See: https://github.com/openai/openai-python#async-usage
        """
        await self._client.close()
