"""One-shot loading of a session's persisted messages into the log."""

import logging
from datetime import datetime

from pydantic import ValidationError

from src.client.assembler import MessageAssembler
from src.client.backend import BackendAPI
from src.client.state import SessionState, new_message_id
from src.models.schemas import HistoryRecord, Message, Role

logger = logging.getLogger(__name__)


class HistoryLoader:
    """Seeds the message log with a session's history.

    Loading is not idempotent: every call appends all records again. Call it
    at most once per session activation. Records that arrive after the
    session was switched or closed are dropped.
    """

    def __init__(
        self, backend: BackendAPI, assembler: MessageAssembler, state: SessionState
    ) -> None:
        self._backend = backend
        self._assembler = assembler
        self._state = state

    async def load(self, session_id: str) -> list[Message]:
        """Fetch history records and append them in backend order.

        Each record becomes one message whose content is the first text
        block's text. Records with an unknown role are skipped.

        Args:
            session_id: Session whose history to load.

        Returns:
            The appended messages; empty when the records were dropped
            because ``session_id`` is not, or is no longer, the active session.

        Raises:
            BackendError: If the fetch fails; the log is left unchanged.
        """
        activation = self._state.activation
        records = await self._backend.get_message_history(session_id)
        if self._state.activation != activation or self._state.session_id != session_id:
            logger.warning(f"Dropping history of session {session_id}: it is no longer active")
            return []
        loaded_at = datetime.now()

        messages: list[Message] = []
        for raw in records:
            try:
                record = HistoryRecord.model_validate(raw)
                role = Role(record.role)
            except (ValidationError, ValueError):
                logger.warning(f"Skipping unreadable history record in session {session_id}: {raw!r}")
                continue
            messages.append(
                Message(
                    id=new_message_id(),
                    role=role,
                    content=record.first_text(),
                    timestamp=loaded_at,
                )
            )

        for message in messages:
            self._assembler.append(message)
        logger.info(f"Loaded {len(messages)} history messages for session {session_id}")
        return messages
