"""Mutable per-client session state shared by the client's components."""

import uuid
from dataclasses import dataclass


def new_message_id() -> str:
    return uuid.uuid4().hex


@dataclass
class SessionState:
    """Active session, waiting flag and error state of one chat client.

    Attributes:
        session_id: Backend session currently activated by connect(), if any.
        activation: Bumped on every connect/close; lets async flows detect
            that the session they started under is gone.
        stream_open: Whether the push stream of the active session is still
            being read. Cleared when the stream ends by itself.
        waiting: True between a send and the first new assistant message.
        error: Last stream level error text.
        revision: Bumped on every change to the fields above.
    """

    session_id: str | None = None
    activation: int = 0
    stream_open: bool = False
    waiting: bool = False
    error: str | None = None
    revision: int = 0

    def activate(self, session_id: str) -> None:
        self.session_id = session_id
        self.activation += 1
        self.stream_open = True
        self.waiting = False
        self.error = None
        self.revision += 1

    def deactivate(self) -> None:
        self.session_id = None
        self.activation += 1
        self.stream_open = False
        self.waiting = False
        self.revision += 1

    def end_stream(self) -> None:
        """Record that the stream stopped; no reply can arrive until reconnect."""
        self.stream_open = False
        self.set_waiting(False)

    def set_waiting(self, waiting: bool) -> None:
        if self.waiting != waiting:
            self.waiting = waiting
            self.revision += 1

    def set_error(self, error: str | None) -> None:
        self.error = error
        self.revision += 1
