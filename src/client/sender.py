"""Sends user messages with optimistic logging.

The send acknowledgement only means "accepted". Replies arrive through the
push stream, so a successful send leaves the waiting flag set while the stream
is open; the assembler clears it when the first new assistant message appears.
"""

import logging
from datetime import datetime

from src.client.assembler import MessageAssembler
from src.client.backend import BackendAPI
from src.client.config import ClientConfig
from src.client.errors import NoActiveSession, SendFailure
from src.client.state import SessionState, new_message_id
from src.models.schemas import Message, Role

logger = logging.getLogger(__name__)


class SendCoordinator:
    def __init__(
        self,
        backend: BackendAPI,
        assembler: MessageAssembler,
        state: SessionState,
        config: ClientConfig,
    ) -> None:
        self._backend = backend
        self._assembler = assembler
        self._state = state
        self._config = config

    def _system_message(self, text: str) -> Message:
        return Message(
            id=new_message_id(),
            role=Role.SYSTEM,
            content=text,
            timestamp=datetime.now(),
        )

    async def send(self, text: str) -> None:
        """Send a user message on the active session.

        Blank text is ignored. A failed send is reported as a system message
        and never removes the optimistic user entry.

        Args:
            text: Message text; surrounding whitespace is stripped.

        Raises:
            NoActiveSession: If no session is connected. A system message
                explaining this is appended first; nothing is sent.
        """
        text = text.strip()
        if not text:
            return

        session_id = self._state.session_id
        if session_id is None:
            logger.warning("Send attempted without an active session")
            self._assembler.append(self._system_message(self._config.no_session_message))
            raise NoActiveSession("No active session; create or select one first")

        self._assembler.append(
            Message(
                id=new_message_id(),
                role=Role.USER,
                content=text,
                timestamp=datetime.now(),
            )
        )
        if self._state.stream_open:
            self._state.set_waiting(True)
        else:
            logger.info(f"Stream of session {session_id} has ended; the reply arrives after reconnecting")
        activation = self._state.activation

        try:
            await self._backend.send_message(session_id, text)
        except SendFailure as e:
            if self._state.activation != activation:
                logger.warning(
                    f"Send to session {session_id} failed after the session was switched: {e}"
                )
                return
            logger.warning(f"Send to session {session_id} failed: {e}")
            self._assembler.append(
                self._system_message(f"{self._config.send_failure_message} ({e.message})")
            )
            self._state.set_waiting(False)
            return

        logger.debug(f"Message accepted by session {session_id}")
