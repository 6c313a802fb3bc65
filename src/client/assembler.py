"""Assembles streamed assistant chunks into the ordered message log.

The protocol has no "message complete" event. A chunk whose id differs from
the message currently streaming starts a new assistant message, and that
arrival is the only signal that the previous turn ended. The last message of
a session is therefore never explicitly finalized.
"""

import logging
from collections.abc import Callable
from datetime import datetime

from src.models.schemas import Message, Role, StreamChunk

logger = logging.getLogger(__name__)


class MessageAssembler:
    """Owns the conversation log and the current streaming message pointer."""

    def __init__(self, on_new_message: Callable[[Message], None] | None = None) -> None:
        """Initialize an empty log.

        Args:
            on_new_message: Called whenever a chunk starts a new assistant
                message, after it has been appended.
        """
        self._messages: list[Message] = []
        self._streaming: Message | None = None
        self._revision = 0
        self._on_new_message = on_new_message

    @property
    def messages(self) -> list[Message]:
        """Snapshot of the log. Entries are copies, so streaming does not alter it."""
        return [message.model_copy() for message in self._messages]

    @property
    def revision(self) -> int:
        """Counter bumped on every change to the log."""
        return self._revision

    @property
    def streaming_id(self) -> str | None:
        return self._streaming.id if self._streaming else None

    def reset(self) -> None:
        self._messages.clear()
        self._streaming = None
        self._revision += 1

    def append(self, message: Message) -> None:
        """Append a locally originated entry.

        The streaming pointer is untouched, so chunks for the message that
        is still streaming keep landing on it.
        """
        self._messages.append(message)
        self._revision += 1

    def apply(self, chunk: StreamChunk) -> Message:
        """Route one chunk into the log and return the message it touched."""
        if self._streaming is not None and chunk.id == self._streaming.id:
            self._streaming.content += chunk.content
            self._revision += 1
            return self._streaming

        message = Message(
            id=chunk.id,
            role=Role.ASSISTANT,
            content=chunk.content,
            timestamp=datetime.now(),
        )
        self._messages.append(message)
        self._streaming = message
        self._revision += 1
        logger.debug(f"Started assistant message {chunk.id}")
        if self._on_new_message is not None:
            self._on_new_message(message)
        return message
