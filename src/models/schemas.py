from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Role(str, Enum):
    """Author of a message in the conversation log."""

    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


class Message(BaseModel):
    """A single entry in the conversation log.

    Assistant messages grow in place while their chunks stream in, so the
    model is deliberately mutable.

    Attributes:
        id: Identifier, unique within one session's log.
        role: Who authored the message.
        content: Message text.
        timestamp: When the entry was created locally.
    """

    id: str
    role: Role
    content: str = ""
    timestamp: datetime = Field(default_factory=datetime.now)


class StreamChunk(BaseModel):
    """One incremental piece of assistant output from the push stream.

    Attributes:
        id: Message id the delta belongs to.
        content: Text to append.
    """

    id: str = Field(..., min_length=1)
    content: str


class StreamErrorPayload(BaseModel):
    """Body of an ``error`` event on the push stream."""

    model_config = ConfigDict(extra="ignore")

    message: str | None = None


class ChatRequest(BaseModel):
    """Request payload for the send endpoint.

    Attributes:
        message: The user's message.
    """

    message: str = Field(..., min_length=1)

    @field_validator("message", mode="before")
    @classmethod
    def strip_message(cls, v: str) -> str:
        """Strip whitespace from message before validation."""
        if isinstance(v, str):
            return v.strip()
        return v


class ApiResponse(BaseModel):
    """Envelope returned by every request/response endpoint.

    Attributes:
        status: Backend status code; compared against the configured success code.
        message: Optional human readable detail, usually set on failure.
        data: Endpoint specific payload.
    """

    status: int
    message: str | None = None
    data: Any = None


class NewSessionResponse(BaseModel):
    session_id: str


class SessionSummary(BaseModel):
    """Entry of the session list.

    Attributes:
        session_id: Backend session identifier.
        title: Display title, derived by the backend from the conversation.
    """

    session_id: str
    title: str = ""


class ContentBlock(BaseModel):
    model_config = ConfigDict(extra="ignore")

    type: str | None = None
    text: str = ""


class HistoryRecord(BaseModel):
    """A persisted message as returned by the history endpoint.

    Attributes:
        role: Author role as stored by the backend.
        content: Content blocks; only text blocks are used by the client.
    """

    model_config = ConfigDict(extra="ignore")

    role: str
    content: list[ContentBlock] | None = None

    def first_text(self) -> str:
        """Return the text of the first text-typed block, or an empty string."""
        for block in self.content or []:
            if block.type is None or block.type == "text":
                return block.text
        return ""
