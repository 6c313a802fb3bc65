"""Push stream subscription for one backend session.

The backend streams Server-Sent Events on ``/chat/sse/{session_id}``:

    event: new-message
    data: {"id": "<message id>", "content": "<delta>"}

    event: error
    data: {"message": "<reason>"}

Comment lines (keep-alives) are ignored. Each connection runs one reader task
and never reconnects; reopening is always an explicit caller action.
"""

import asyncio
import logging
from collections.abc import Callable

import httpx
from pydantic import ValidationError

from src.client.backend import BackendAPI
from src.client.errors import MalformedChunk, TransportError
from src.models.schemas import StreamChunk, StreamErrorPayload

logger = logging.getLogger(__name__)

NEW_MESSAGE_EVENT = "new-message"
ERROR_EVENT = "error"


def decode_chunk(data: str) -> StreamChunk:
    """Decode a ``new-message`` payload.

    Raises:
        MalformedChunk: If the payload is not a JSON object with a
            non-empty string id and string content.
    """
    try:
        return StreamChunk.model_validate_json(data)
    except ValidationError as e:
        raise MalformedChunk(f"Unreadable chunk: {data!r}") from e


def decode_error(data: str, default: str) -> str:
    """Extract the message text of an ``error`` payload, or fall back to ``default``."""
    if not data.strip():
        return default
    try:
        payload = StreamErrorPayload.model_validate_json(data)
    except ValidationError:
        logger.debug(f"Unreadable error payload: {data!r}")
        return default
    return payload.message or default


ChunkHandler = Callable[["SessionConnection", StreamChunk], None]
ClosedHandler = Callable[["SessionConnection", str | None], None]


class SessionConnection:
    """Owns the push stream of a single session.

    Handlers receive the connection itself so the owner can discard events
    from a connection it no longer considers current.
    """

    def __init__(
        self,
        session_id: str,
        backend: BackendAPI,
        *,
        on_chunk: ChunkHandler,
        on_closed: ClosedHandler,
        error_message: str = "Chat stream error",
        connect_timeout: float = 30.0,
    ) -> None:
        """Create an unopened connection.

        Args:
            session_id: Backend session to subscribe to.
            backend: API wrapper providing the shared HTTP client.
            on_chunk: Called for every decoded chunk while the connection is open.
                Exceptions it raises are logged and reading continues.
            on_closed: Called once when the stream ends by itself, with the
                error text, or None when the server simply ended the stream.
                Not called for explicit close().
            error_message: Error text for error events without a message.
            connect_timeout: Timeout for establishing the stream. Reads never
                time out.
        """
        self._session_id = session_id
        self._backend = backend
        self._on_chunk = on_chunk
        self._on_closed = on_closed
        self._error_message = error_message
        self._timeout = httpx.Timeout(connect_timeout, read=None)
        self._task: asyncio.Task[None] | None = None
        self._closed = False

    @property
    def session_id(self) -> str:
        return self._session_id

    @property
    def is_open(self) -> bool:
        return self._task is not None and not self._closed

    def open(self) -> None:
        """Start the reader task. Must run inside an event loop."""
        if self._task is not None:
            raise RuntimeError("Connection already opened")
        self._task = asyncio.get_running_loop().create_task(
            self._run(), name=f"chat-stream-{self._session_id}"
        )

    def close(self) -> None:
        """Stop reading. Idempotent; no handler fires afterwards."""
        if self._closed:
            return
        self._closed = True
        logger.info(f"Closing stream for session {self._session_id}")
        self._cancel()

    async def wait_closed(self) -> None:
        """Wait until the reader task has finished."""
        if self._task is None:
            return
        await asyncio.gather(self._task, return_exceptions=True)

    def _cancel(self) -> None:
        if self._task is None or self._task.done():
            return
        try:
            current = asyncio.current_task()
        except RuntimeError:
            current = None
        if self._task is not current:
            self._task.cancel()

    async def _run(self) -> None:
        url = self._backend.url(f"/chat/sse/{self._session_id}")
        try:
            async with self._backend.http.stream(
                "GET",
                url,
                headers={"Accept": "text/event-stream"},
                timeout=self._timeout,
            ) as response:
                if response.is_error:
                    raise TransportError(
                        f"Stream connection failed: HTTP {response.status_code}"
                    )
                logger.info(f"Stream open for session {self._session_id}")
                await self._read_events(response)
        except TransportError as e:
            self._end(str(e))
        except httpx.HTTPError as e:
            self._end(f"Stream connection failed: {e}")
        else:
            if not self._closed:
                logger.info(f"Stream for session {self._session_id} ended by server")
                self._end(None)

    async def _read_events(self, response: httpx.Response) -> None:
        event: str | None = None
        data: list[str] = []
        async for line in response.aiter_lines():
            if self._closed:
                return
            if not line:
                if event is not None or data:
                    self._dispatch(event or "message", "\n".join(data))
                    if self._closed:
                        return
                event, data = None, []
                continue
            if line.startswith(":"):
                continue
            field, _, value = line.partition(":")
            if value.startswith(" "):
                value = value[1:]
            if field == "event":
                event = value
            elif field == "data":
                data.append(value)

    def _dispatch(self, event: str, data: str) -> None:
        if self._closed:
            return
        if event == NEW_MESSAGE_EVENT:
            try:
                chunk = decode_chunk(data)
            except MalformedChunk as e:
                logger.debug(f"Dropping chunk on session {self._session_id}: {e}")
                return
            try:
                self._on_chunk(self, chunk)
            except Exception:
                logger.exception(f"Chunk handler failed on session {self._session_id}")
        elif event == ERROR_EVENT:
            self._end(decode_error(data, self._error_message))
        else:
            logger.debug(f"Ignoring '{event}' event on session {self._session_id}")

    def _end(self, error: str | None) -> None:
        if self._closed:
            return
        self._closed = True
        if error is not None:
            logger.warning(f"Stream for session {self._session_id} failed: {error}")
        self._on_closed(self, error)
