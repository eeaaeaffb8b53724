"""Data structures for reveal sessions."""

import asyncio
from dataclasses import dataclass, field


@dataclass
class RevealSession:
    """Mutable state of one in-progress reveal."""

    message_id: int
    target_text: str
    revealed_count: int = 0
    task: asyncio.Task | None = field(default=None, repr=False)
    cancelled: bool = False

    @property
    def done(self) -> bool:
        return self.revealed_count >= len(self.target_text)

    @property
    def revealed_text(self) -> str:
        return self.target_text[: self.revealed_count]
