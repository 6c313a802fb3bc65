"""Streaming chat session client.

Manages one live conversation with the chat backend over a Server-Sent
Events push stream.

Responsibilities:
    - Push stream lifecycle per session (connect, switch, teardown)
    - Assembly of streamed assistant chunks into discrete messages
    - Optimistic sending of user messages with local failure reporting
    - One-shot loading of persisted session history

Session creation, listing and deletion live in SessionService, reachable
as ``ChatSessionClient.sessions``.
"""

from src.client.config import ClientConfig, get_client_config
from src.client.errors import (
    BackendError,
    ChatClientError,
    MalformedChunk,
    NoActiveSession,
    SendFailure,
    TransportError,
)
from src.client.session_client import ChatSessionClient
from src.client.sessions import SessionService

__all__ = [
    "BackendError",
    "ChatClientError",
    "ChatSessionClient",
    "ClientConfig",
    "MalformedChunk",
    "NoActiveSession",
    "SendFailure",
    "SessionService",
    "TransportError",
    "get_client_config",
]
