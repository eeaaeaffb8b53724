"""Pytest configuration and shared fixtures."""
import asyncio
import os

import pytest

from chatreveal.conversation import ConversationStore
from chatreveal.session import ChatSession


class FakeDispatcher:
    """Stands in for RequestDispatcher without any network access.

    Set ``gate`` to an asyncio.Event to hold requests in flight until it is set.
    """

    def __init__(
        self,
        reply: str = "Oi!",
        error: Exception | None = None,
        requires_api_key: bool = False,
    ) -> None:
        self.reply = reply
        self.error = error
        self._requires_api_key = requires_api_key
        self.gate: asyncio.Event | None = None
        self.prompts: list[str] = []
        self.api_keys: list[str | None] = []
        self.closed = False
        self.debug_callback = None
        self.cancelled_while_open: bool | None = None

    @property
    def requires_api_key(self) -> bool:
        return self._requires_api_key

    async def send_prompt(self, prompt: str, api_key: str | None = None) -> str:
        self.prompts.append(prompt)
        self.api_keys.append(api_key)
        if self.gate is not None:
            try:
                await self.gate.wait()
            except asyncio.CancelledError:
                self.cancelled_while_open = not self.closed
                raise
        if self.error is not None:
            raise self.error
        return self.reply.strip()

    def set_debug_callback(self, callback) -> None:
        self.debug_callback = callback

    async def close(self) -> None:
        self.closed = True


async def settle(rounds: int = 10) -> None:
    """Let pending tasks run for a few event loop iterations."""
    for _ in range(rounds):
        await asyncio.sleep(0)


@pytest.fixture(scope="session")
def api_keys():
    """Return API keys from environment."""
    return {
        "openai": os.getenv("OPENAI_API_KEY"),
    }


@pytest.fixture
def store():
    """Return an empty conversation store."""
    return ConversationStore()


@pytest.fixture
def dispatcher():
    """Return a fake dispatcher answering 'Oi!'."""
    return FakeDispatcher()


@pytest.fixture
def session(dispatcher):
    """Return a chat session that reveals without delay."""
    return ChatSession(dispatcher, reveal_interval=0)
