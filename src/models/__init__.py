"""Pydantic models for the chat client.

Provides type safety and validation for everything crossing the wire as
well as the local conversation log.

Models:
    - Role, Message: Conversation log entries
    - StreamChunk, StreamErrorPayload: Push stream event payloads
    - ChatRequest: Send endpoint payload
    - ApiResponse: Status envelope of request/response endpoints
    - NewSessionResponse, SessionSummary: Session lifecycle payloads
    - ContentBlock, HistoryRecord: Persisted history records
"""

from src.models.schemas import (
    ApiResponse,
    ChatRequest,
    ContentBlock,
    HistoryRecord,
    Message,
    NewSessionResponse,
    Role,
    SessionSummary,
    StreamChunk,
    StreamErrorPayload,
)

__all__ = [
    "ApiResponse",
    "ChatRequest",
    "ContentBlock",
    "HistoryRecord",
    "Message",
    "NewSessionResponse",
    "Role",
    "SessionSummary",
    "StreamChunk",
    "StreamErrorPayload",
]
