"""Exception hierarchy for the chat client.

Only TransportError and SendFailure ever reach the conversation: the first
through the client's error state, the second as a system message. The
others are developer facing.
"""


class ChatClientError(Exception):
    """Base class for all chat client errors."""


class BackendError(ChatClientError):
    """Request/response endpoint failed or answered with a non-success status.

    Attributes:
        status: Backend status code, or None when the request never completed.
        message: Human readable failure description.
    """

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status


class SendFailure(BackendError):
    """Sending a user message failed."""


class TransportError(ChatClientError):
    """The push stream could not be opened or broke while reading."""


class MalformedChunk(ChatClientError):
    """A push stream payload could not be decoded."""


class NoActiveSession(ChatClientError):
    """An operation needed an active session but none is connected."""
