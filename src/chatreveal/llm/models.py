from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

Role = Literal["system", "user", "assistant"]


class ChatMessage(BaseModel):
    """One entry of the message list sent with a chat-completion request."""

    model_config = ConfigDict(frozen=True)

    role: Role = Field(description="Author of the message")
    content: str = Field(description="Message text")


class LLMResponse(BaseModel):
    """Reply parsed out of a chat-completion response body."""

    model_config = ConfigDict(frozen=True)

    content: str = Field(description="Text of choices[0].message.content, untrimmed")
    model: str = Field(description="Model reported by the backend, or the requested one")
    usage: dict[str, Any] | None = Field(
        default=None,
        description="Token counts, when the backend reports them"
    )
