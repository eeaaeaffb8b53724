"""Request/reveal lifecycle controller.

Phases run strictly in order: idle -> requesting -> revealing -> idle. A
prompt is only accepted while idle, so at most one request task and one
reveal session exist at any time. Failures are revealed as conversation text
like any other reply.
"""

import asyncio
import contextlib
from collections.abc import Callable
from typing import Any

from ..config import REVEAL_INTERVAL_SECONDS
from ..conversation import ConversationStore, Message
from ..errors import (
    DispatchError,
    EmptyPromptError,
    MissingApiKeyError,
    SessionBusyError,
    SessionError,
)
from ..llm import RequestDispatcher
from ..reveal import RevealController, RevealSession
from .formatting import format_error_message
from .models import ApiKeyStatus, ChatPhase, ChatSnapshot

SnapshotListener = Callable[[ChatSnapshot], None]
DebugCallback = Callable[[str, str, str], None]


class ChatSession:
    """Explicit state object for one conversation.

    Usage:
        async with ChatSession(dispatcher) as session:
            session.set_api_key("sk-...")
            answer = await session.ask("Olá")
    """

    def __init__(
        self,
        dispatcher: RequestDispatcher,
        store: ConversationStore | None = None,
        reveal_interval: float = REVEAL_INTERVAL_SECONDS,
        include_error_detail: bool = True,
        api_key: str | None = None,
    ) -> None:
        """Initialize the session.

        Args:
            dispatcher: Sends prompts and returns reply text
            store: Conversation store (a new one by default)
            reveal_interval: Seconds between two revealed characters
            include_error_detail: Show the raw error detail in failure messages
            api_key: Initial API key for backends that need one
        """
        self._dispatcher = dispatcher
        self._store = store if store is not None else ConversationStore()
        self._reveal = RevealController(
            self._store,
            interval=reveal_interval,
            on_finished=self._on_reveal_finished,
        )
        self._include_error_detail = include_error_detail
        self._api_key = api_key or ""
        self._api_key_status = ApiKeyStatus.UNKNOWN
        self._phase = ChatPhase.IDLE
        self._target_id: int | None = None
        self._request_task: asyncio.Task | None = None
        self._idle = asyncio.Event()
        self._idle.set()
        self._closed = False
        self._listeners: list[SnapshotListener] = []
        self._debug_callback: DebugCallback | None = None
        self._store.subscribe(lambda _message: self._emit())

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def store(self) -> ConversationStore:
        return self._store

    @property
    def phase(self) -> ChatPhase:
        return self._phase

    @property
    def is_loading(self) -> bool:
        return self._phase is not ChatPhase.IDLE

    @property
    def can_submit(self) -> bool:
        return not self._closed and self._phase is ChatPhase.IDLE

    @property
    def requires_api_key(self) -> bool:
        return self._dispatcher.requires_api_key

    @property
    def has_api_key(self) -> bool:
        return bool(self._api_key.strip())

    @property
    def api_key_status(self) -> ApiKeyStatus:
        return self._api_key_status

    def snapshot(self) -> ChatSnapshot:
        """Return a read-only view of the current state."""
        return ChatSnapshot(
            phase=self._phase,
            api_key_status=self._api_key_status,
            messages=self._store.snapshot(),
            target_message_id=self._target_id,
        )

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Call ``listener`` with a fresh snapshot after every change.

        Returns:
            A callable that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def set_debug_callback(self, callback: DebugCallback | None) -> None:
        """Set the callback receiving ``(level, component, message)`` traces.

        The dispatcher gets the same callback for its own traces.
        """
        self._debug_callback = callback
        self._dispatcher.set_debug_callback(callback)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def set_api_key(self, api_key: str) -> None:
        """Replace the API key; its status goes back to unknown."""
        self._api_key = api_key
        self._api_key_status = ApiKeyStatus.UNKNOWN
        self._emit()

    def submit(self, prompt: str) -> Message:
        """Start the lifecycle for ``prompt``.

        Appends the user message and an empty AI message bound as the reveal
        target, then sends the request in the background. Must be called from
        a running event loop.

        Returns:
            The placeholder AI message that will receive the reply

        Raises:
            SessionBusyError: A request or reveal is still active
            EmptyPromptError: The prompt is blank
            MissingApiKeyError: The backend needs a key and none is set
        """
        if self._closed:
            raise SessionError("Session is closed")
        if self._phase is not ChatPhase.IDLE:
            raise SessionBusyError(f"Cannot submit while {self._phase.value}")
        if not prompt.strip():
            raise EmptyPromptError("Prompt is empty")
        if self.requires_api_key and not self.has_api_key:
            raise MissingApiKeyError("An API key is required for this backend")

        loop = asyncio.get_running_loop()
        self._store.append_user_message(prompt)
        placeholder = self._store.append_placeholder_ai_message()
        self._target_id = placeholder.id
        self._set_phase(ChatPhase.REQUESTING)
        self._request_task = loop.create_task(self._request(prompt, placeholder.id))
        self._debug("info", f"Prompt submitted ({len(prompt)} chars)")
        return placeholder

    async def ask(self, prompt: str) -> str:
        """Submit ``prompt``, wait for the lifecycle to end, return the AI text."""
        placeholder = self.submit(prompt)
        await self.wait_idle()
        return self._store.get(placeholder.id).text

    def cancel(self) -> bool:
        """Stop the pending request or the running reveal.

        Text revealed so far stays in the conversation.

        Returns:
            True if something was cancelled
        """
        if self._phase is ChatPhase.REQUESTING:
            task = self._request_task
            self._request_task = None
            if task is not None:
                task.cancel()
            self._debug("warning", "Request cancelled")
            self._target_id = None
            self._set_phase(ChatPhase.IDLE)
            return True
        if self._phase is ChatPhase.REVEALING:
            return self._reveal.stop()
        return False

    async def wait_idle(self) -> None:
        """Wait until the lifecycle is back to idle."""
        await self._idle.wait()

    async def close(self) -> None:
        """Tear down: cancel any request or reveal and close the dispatcher."""
        if self._closed:
            return
        self._closed = True
        request_task = self._request_task
        self.cancel()
        self._reveal.close()
        if request_task is not None:
            # The request must unwind before its HTTP client goes away
            with contextlib.suppress(asyncio.CancelledError):
                await request_task
        await self._dispatcher.close()
        self._debug("info", "Session closed")

    async def __aenter__(self) -> "ChatSession":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    # ------------------------------------------------------------------
    # Lifecycle internals
    # ------------------------------------------------------------------

    async def _request(self, prompt: str, message_id: int) -> None:
        uses_key = self.requires_api_key
        try:
            reply = await self._dispatcher.send_prompt(
                prompt, api_key=self._api_key or None
            )
        except DispatchError as exc:
            self._debug("error", f"{type(exc).__name__}: {exc}")
            if uses_key:
                self._api_key_status = ApiKeyStatus.INVALID
            reply = format_error_message(
                exc,
                include_detail=self._include_error_detail,
                uses_api_key=uses_key,
            )
        except Exception as exc:
            # Unexpected failures still end as a revealed message
            self._debug("error", f"Unexpected {type(exc).__name__}: {exc}")
            reply = format_error_message(
                exc,
                include_detail=self._include_error_detail,
                uses_api_key=uses_key,
            )
        else:
            self._debug("info", f"Reply received ({len(reply)} chars)")
            if uses_key:
                self._api_key_status = ApiKeyStatus.VALID

        self._request_task = None
        self._set_phase(ChatPhase.REVEALING)
        self._reveal.start(message_id, reply)

    def _on_reveal_finished(self, session: RevealSession) -> None:
        if session.cancelled:
            self._debug(
                "warning",
                f"Reveal stopped at {session.revealed_count}/{len(session.target_text)} chars",
            )
        else:
            self._debug("debug", f"Reveal complete ({len(session.target_text)} chars)")
        self._target_id = None
        self._set_phase(ChatPhase.IDLE)

    def _set_phase(self, phase: ChatPhase) -> None:
        self._phase = phase
        if phase is ChatPhase.IDLE:
            self._idle.set()
        else:
            self._idle.clear()
        self._emit()

    def _emit(self) -> None:
        if not self._listeners:
            return
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception as exc:
                # Listener failures are traced, not propagated
                self._debug("error", f"Snapshot listener failed: {type(exc).__name__}: {exc}")

    def _debug(self, level: str, message: str) -> None:
        if self._debug_callback is not None:
            self._debug_callback(level, "Chat", message)
