"""Append-only conversation store.

Messages are never removed or reordered. Only AI messages may have their text
replaced, which is how the reveal controller publishes growing prefixes.
"""

import dataclasses
import itertools
from collections.abc import Callable

from .models import Message

MessageListener = Callable[[Message], None]


class ConversationStore:
    """Ordered sequence of messages, oldest first."""

    def __init__(self) -> None:
        self._messages: list[Message] = []
        self._by_id: dict[int, Message] = {}
        self._ids = itertools.count(1)
        self._listeners: list[MessageListener] = []

    def __len__(self) -> int:
        return len(self._messages)

    def subscribe(self, listener: MessageListener) -> Callable[[], None]:
        """Register a listener called with every appended or updated message.

        Returns:
            A callable that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def append_user_message(self, text: str) -> Message:
        """Append a message typed or picked by the user."""
        return self._append(text, is_ai=False)

    def append_placeholder_ai_message(self) -> Message:
        """Append an empty AI message that a reveal session will fill in.

        The returned message's ``id`` is the handle the reveal is bound to.
        """
        return self._append("", is_ai=True)

    def update_message_text(self, message_id: int, text: str) -> Message:
        """Replace the text of an AI message in place.

        Raises:
            KeyError: If no message has this id
            ValueError: If the message was written by the user
        """
        message = self._by_id[message_id]
        if not message.is_ai:
            raise ValueError(f"Message {message_id} is a user message and cannot be rewritten")
        message.text = text
        self._notify(message)
        return dataclasses.replace(message)

    def update_last_message_text(self, text: str) -> Message:
        """Replace the text of the most recently appended message.

        Raises:
            IndexError: If the conversation is empty
        """
        if not self._messages:
            raise IndexError("Conversation is empty")
        return self.update_message_text(self._messages[-1].id, text)

    def get(self, message_id: int) -> Message:
        """Return a copy of the message with this id."""
        return dataclasses.replace(self._by_id[message_id])

    @property
    def last(self) -> Message | None:
        """Copy of the most recently appended message, if any."""
        if not self._messages:
            return None
        return dataclasses.replace(self._messages[-1])

    def snapshot(self) -> tuple[Message, ...]:
        """Return copies of all messages in conversation order."""
        return tuple(dataclasses.replace(msg) for msg in self._messages)

    def _append(self, text: str, is_ai: bool) -> Message:
        message = Message(id=next(self._ids), text=text, is_ai=is_ai)
        self._messages.append(message)
        self._by_id[message.id] = message
        self._notify(message)
        return dataclasses.replace(message)

    def _notify(self, message: Message) -> None:
        view = dataclasses.replace(message)
        for listener in list(self._listeners):
            listener(view)
