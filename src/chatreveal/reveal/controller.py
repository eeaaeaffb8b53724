"""Cancellable typewriter reveal.

A reveal session takes a complete string and writes ``text[:1]``,
``text[:2]``, ... ``text[:n]`` into one bound message, one write per tick.
At most one session is active at a time; the tick loop runs as an asyncio
task whose handle is released on completion, on ``stop()`` and on
``close()``.
"""

import asyncio
from collections.abc import Callable

from ..config import REVEAL_INTERVAL_SECONDS
from ..conversation import ConversationStore
from ..errors import RevealInProgressError
from .models import RevealSession

FinishedCallback = Callable[[RevealSession], None]


class RevealController:
    """Drives reveal sessions against a conversation store.

    Usage:
        controller = RevealController(store, on_finished=handle_end)
        controller.start(message.id, "Oi!")
        await controller.wait()
    """

    def __init__(
        self,
        store: ConversationStore,
        interval: float = REVEAL_INTERVAL_SECONDS,
        on_finished: FinishedCallback | None = None,
    ) -> None:
        """Initialize the controller.

        Args:
            store: Store whose messages receive the revealed prefixes
            interval: Seconds between two revealed characters
            on_finished: Called once per session, after completion or stop
        """
        if interval < 0:
            raise ValueError(f"interval must be >= 0, got {interval}")
        self._store = store
        self._interval = interval
        self._on_finished = on_finished
        self._session: RevealSession | None = None
        self._idle = asyncio.Event()
        self._idle.set()

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def session(self) -> RevealSession | None:
        """The active session, or None when idle."""
        return self._session

    @property
    def active(self) -> bool:
        return self._session is not None

    def start(self, message_id: int, full_text: str) -> RevealSession:
        """Start revealing ``full_text`` into the message with ``message_id``.

        Must be called from a running event loop. An empty string ends the
        session immediately without scheduling a tick.

        Raises:
            RevealInProgressError: If another session is still active
        """
        if self._session is not None:
            raise RevealInProgressError(
                f"Reveal into message {self._session.message_id} is still active"
            )

        session = RevealSession(message_id=message_id, target_text=full_text)
        self._session = session
        self._idle.clear()

        if session.done:
            self._finish(session)
            return session

        session.task = asyncio.get_running_loop().create_task(self._run(session))
        return session

    def stop(self) -> bool:
        """Cancel the active session, keeping the text revealed so far.

        Returns:
            True if a session was cancelled, False if none was active
        """
        session = self._session
        if session is None:
            return False

        session.cancelled = True
        if session.task is not None:
            session.task.cancel()
        self._finish(session)
        return True

    def close(self) -> None:
        """Release the controller; no write happens after this returns."""
        self.stop()

    async def wait(self) -> None:
        """Wait until no session is active."""
        await self._idle.wait()

    async def _run(self, session: RevealSession) -> None:
        try:
            while not session.done:
                await asyncio.sleep(self._interval)
                if session.cancelled:
                    return
                session.revealed_count += 1
                self._store.update_message_text(session.message_id, session.revealed_text)
        finally:
            self._finish(session)

    def _finish(self, session: RevealSession) -> None:
        # Runs once per session: either from the tick loop or from stop()
        if self._session is not session:
            return
        self._session = None
        session.task = None
        self._idle.set()
        if self._on_finished is not None:
            self._on_finished(session)
