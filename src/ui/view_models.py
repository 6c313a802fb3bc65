"""Presentation helpers for the chat page, free of any UI framework."""

from dataclasses import dataclass
from datetime import datetime

from src.models.schemas import Message, Role, SessionSummary

TITLE_LIMIT = 30
UNTITLED_SESSION = "New chat"

_BUBBLES = {
    Role.USER: "message-user",
    Role.ASSISTANT: "message-assistant",
    Role.SYSTEM: "message-system",
}


@dataclass(frozen=True)
class MessageView:
    """How one log entry is drawn.

    Attributes:
        text: Text to show.
        time: Display time, e.g. ``09:41 AM``.
        bubble: CSS class of the message bubble.
        align: Row alignment class.
        markdown: Whether the text is rendered as markdown.
        show_avatar: Whether an avatar is drawn next to the bubble.
    """

    text: str
    time: str
    bubble: str
    align: str
    markdown: bool
    show_avatar: bool


def format_time(timestamp: datetime) -> str:
    return timestamp.strftime("%I:%M %p")


def message_view(message: Message) -> MessageView:
    if message.role is Role.USER:
        align = "justify-end"
    elif message.role is Role.SYSTEM:
        align = "justify-center"
    else:
        align = "justify-start"
    return MessageView(
        text=message.content,
        time=format_time(message.timestamp),
        bubble=_BUBBLES[message.role],
        align=align,
        markdown=message.role is Role.ASSISTANT,
        show_avatar=message.role is not Role.SYSTEM,
    )


def session_title(session: SessionSummary) -> str:
    """Sidebar label for a session, truncated to TITLE_LIMIT characters."""
    title = session.title.strip() or UNTITLED_SESSION
    if len(title) > TITLE_LIMIT:
        return title[:TITLE_LIMIT] + "..."
    return title
