"""Chat session client: one live conversation over a push stream.

Ties the pieces together for a single session at a time:

    client = ChatSessionClient()
    client.connect(session_id)          # opens the push stream
    await client.send_message("Hello")  # optimistic user entry + POST
    client.messages                     # assistant replies stream in here
    client.close()

All mutation happens on the event loop that called connect(); stream events,
send completions and caller operations never overlap, so nothing is locked.
"""

import logging

import httpx

from src.client.assembler import MessageAssembler
from src.client.backend import BackendAPI
from src.client.config import ClientConfig, get_client_config
from src.client.connection import SessionConnection
from src.client.history import HistoryLoader
from src.client.sender import SendCoordinator
from src.client.sessions import SessionService
from src.client.state import SessionState
from src.models.schemas import Message, StreamChunk

logger = logging.getLogger(__name__)


class ChatSessionClient:
    """Manages the message log and push stream of the active session.

    At most one connection is live at any time. connect() replaces the
    previous connection (closing it first) and discards everything that
    belonged to the previous session.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        http: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Optional client configuration.
                    Loads from environment if not provided.
            http: Optional HTTP client to use for all requests. A client
                  created here is closed by aclose().
        """
        self._config = config or get_client_config()
        self._owns_http = http is None
        self._http = http or httpx.AsyncClient(timeout=self._config.request_timeout)
        self._backend = BackendAPI(self._config, self._http)
        self._state = SessionState()
        self._assembler = MessageAssembler(on_new_message=self._on_new_message)
        self._sender = SendCoordinator(self._backend, self._assembler, self._state, self._config)
        self._history = HistoryLoader(self._backend, self._assembler, self._state)
        self._sessions = SessionService(self._backend)
        self._connection: SessionConnection | None = None

    async def __aenter__(self) -> "ChatSessionClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    @property
    def messages(self) -> list[Message]:
        """Snapshot of the ordered message log."""
        return self._assembler.messages

    @property
    def session_id(self) -> str | None:
        return self._state.session_id

    @property
    def error(self) -> str | None:
        """Last stream error text, cleared by connect()."""
        return self._state.error

    @property
    def waiting(self) -> bool:
        """Whether a sent message is still waiting for its reply to start."""
        return self._state.waiting

    @property
    def is_connected(self) -> bool:
        return self._connection is not None and self._connection.is_open

    @property
    def revision(self) -> int:
        """Changes whenever the log, error or waiting flag changes."""
        return self._assembler.revision + self._state.revision

    @property
    def sessions(self) -> SessionService:
        """Session lifecycle calls sharing this client's HTTP connection."""
        return self._sessions

    def connect(self, session_id: str) -> None:
        """Make ``session_id`` the active session and open its push stream.

        Any previous connection is closed before the new one is opened.
        The log, error state and waiting flag are reset. Must be called
        from a running event loop.

        Args:
            session_id: Backend session to attach to.
        """
        self.close()
        self._assembler.reset()
        self._state.activate(session_id)

        connection = SessionConnection(
            session_id,
            self._backend,
            on_chunk=self._on_chunk,
            on_closed=self._on_stream_closed,
            error_message=self._config.stream_error_message,
            connect_timeout=self._config.request_timeout,
        )
        self._connection = connection
        connection.open()
        logger.info(f"Connected to session {session_id}")

    def close(self) -> None:
        """Close the push stream and drop the active session. Idempotent."""
        connection, self._connection = self._connection, None
        if connection is not None:
            connection.close()
        if self._state.session_id is not None:
            logger.info(f"Disconnected from session {self._state.session_id}")
            self._state.deactivate()

    cleanup = close

    async def aclose(self) -> None:
        """Close the stream, wait for it to stop, and release the HTTP client."""
        connection = self._connection
        self.close()
        if connection is not None:
            await connection.wait_closed()
        if self._owns_http:
            await self._http.aclose()

    async def send_message(self, text: str) -> None:
        """Send a user message on the active session.

        See SendCoordinator.send for the exact semantics.

        Raises:
            NoActiveSession: If connect() has not been called.
        """
        await self._sender.send(text)

    async def load_message_history(self, session_id: str) -> list[Message]:
        """Append the persisted history of ``session_id`` to the log.

        Not idempotent; call once per session activation, after connect().
        Nothing is appended if the session is switched or closed before
        the records arrive.

        Raises:
            BackendError: If the history cannot be fetched.
        """
        return await self._history.load(session_id)

    def _on_chunk(self, connection: SessionConnection, chunk: StreamChunk) -> None:
        if connection is not self._connection:
            logger.debug(f"Ignoring chunk from stale stream of session {connection.session_id}")
            return
        self._assembler.apply(chunk)

    def _on_new_message(self, message: Message) -> None:
        self._state.set_waiting(False)

    def _on_stream_closed(self, connection: SessionConnection, error: str | None) -> None:
        if connection is not self._connection:
            return
        self._connection = None
        self._state.end_stream()
        if error is not None:
            self._state.set_error(error)
