"""Session lifecycle calls: create, list and delete backend sessions."""

import logging

from pydantic import TypeAdapter, ValidationError

from src.client.backend import BackendAPI
from src.client.errors import BackendError
from src.models.schemas import NewSessionResponse, SessionSummary

logger = logging.getLogger(__name__)

_SESSION_LIST = TypeAdapter(list[SessionSummary])
_CATEGORIES = TypeAdapter(list[str])


class SessionService:
    """Manages backend sessions.

    Creating a session is the caller's job; the chat session client only
    connects to ids obtained here.
    """

    def __init__(self, backend: BackendAPI) -> None:
        self._backend = backend

    async def create_session(self, category: str | None = None) -> str:
        """Create a backend session.

        Args:
            category: Optional document category the session is grounded on.

        Returns:
            The new session id.

        Raises:
            BackendError: If the backend rejects the request.
        """
        data = await self._backend.call("GET", "/chat/create", params={"category": category})
        try:
            session_id = NewSessionResponse.model_validate(data).session_id
        except ValidationError as e:
            raise BackendError("Malformed create session response") from e
        logger.info(f"Created session {session_id}")
        return session_id

    async def list_sessions(self) -> list[SessionSummary]:
        """List the current user's sessions in backend order."""
        data = await self._backend.call("GET", "/session/history")
        try:
            return _SESSION_LIST.validate_python(data or [])
        except ValidationError as e:
            raise BackendError("Malformed session list response") from e

    async def delete_session(self, session_id: str) -> None:
        await self._backend.call("DELETE", f"/session/{session_id}")
        logger.info(f"Deleted session {session_id}")

    async def list_categories(self) -> list[str]:
        """List the document categories a session can be created with."""
        data = await self._backend.call("GET", "/all/document/category")
        try:
            return _CATEGORIES.validate_python(data or [])
        except ValidationError as e:
            raise BackendError("Malformed category list response") from e
