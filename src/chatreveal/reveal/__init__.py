"""Incremental reveal module.

Hides how a complete reply is turned into a typewriter effect: the timer,
its cancellation and the binding to a single message.
"""

from .controller import RevealController
from .models import RevealSession

__all__ = ["RevealController", "RevealSession"]
