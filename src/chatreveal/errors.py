"""Exception hierarchy for chatreveal.

Dispatch errors describe why a prompt produced no reply. They are caught by
the chat session and turned into conversation text, so they never reach the
rendering layer. Session errors are raised back to the caller that tried to
drive the lifecycle out of order.
"""


class ChatRevealError(Exception):
    """Base class for all chatreveal errors."""


class DispatchError(ChatRevealError):
    """The remote endpoint did not produce a usable reply."""

    @property
    def detail(self) -> str:
        """Human-readable detail for the error message."""
        return str(self)


class NetworkError(DispatchError):
    """The request never reached the server (connectivity, DNS, timeout)."""


class HttpError(DispatchError):
    """The server answered with a non-2xx status."""

    def __init__(self, status_code: int, message: str | None = None):
        self.status_code = status_code
        super().__init__(message or f"HTTP error! status: {status_code}")


class MalformedResponseError(DispatchError):
    """The response lacks the expected reply field."""


class SessionError(ChatRevealError):
    """A session operation was called in the wrong lifecycle phase."""


class SessionBusyError(SessionError):
    """A prompt was submitted while another request or reveal is active."""


class EmptyPromptError(SessionError):
    """The submitted prompt is blank after trimming."""


class MissingApiKeyError(SessionError):
    """The backend needs an API key and none has been entered."""


class RevealInProgressError(ChatRevealError):
    """A reveal was started while another reveal session is still active."""
