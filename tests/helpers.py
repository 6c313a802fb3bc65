"""Test doubles for the chat backend.

ScriptedBackend answers an ``httpx.MockTransport``. Push streams are backed by
per-session queues so tests decide exactly when each frame is delivered.
"""

import asyncio
import json
from collections.abc import AsyncIterator, Callable
from typing import Any

import httpx

BASE_URL = "http://test/api"


def sse_frame(event: str, data: Any) -> str:
    """Encode one Server-Sent Events frame."""
    if not isinstance(data, str):
        data = json.dumps(data)
    return f"event: {event}\ndata: {data}\n\n"


def envelope(data: Any = None, status: int = 200, message: str | None = None) -> dict:
    return {"status": status, "message": message, "data": data}


async def wait_until(predicate: Callable[[], bool], timeout: float = 2.0) -> None:
    """Yield to the event loop until ``predicate`` holds."""
    async with asyncio.timeout(timeout):
        while not predicate():
            await asyncio.sleep(0.01)


async def settle() -> None:
    """Give background tasks a chance to run."""
    await asyncio.sleep(0.05)


class ScriptedBackend:
    """In-memory chat backend for MockTransport.

    Attributes:
        requests: Every request received, in order.
        stream_status: HTTP status answered on push stream requests.
        send_status: Envelope status answered on send requests.
        send_error: Exception raised instead of answering a send.
        send_gate: When set, sends wait for it before answering.
        history: Records returned by the history endpoint.
        history_status: Envelope status of the history endpoint.
        history_gate: When set, history requests wait for it before answering.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.streams: dict[str, asyncio.Queue[str | None]] = {}
        self.stream_status = 200
        self.send_status = 200
        self.send_message: str | None = None
        self.send_error: Exception | None = None
        self.send_gate: asyncio.Event | None = None
        self.history: list[dict] = []
        self.history_status = 200
        self.history_gate: asyncio.Event | None = None
        self.sessions: list[dict] = []
        self.categories: list[str] = []
        self.created = 0

    def stream(self, session_id: str) -> asyncio.Queue[str | None]:
        return self.streams.setdefault(session_id, asyncio.Queue())

    def push(self, session_id: str, event: str, data: Any) -> None:
        self.stream(session_id).put_nowait(sse_frame(event, data))

    def push_raw(self, session_id: str, text: str) -> None:
        self.stream(session_id).put_nowait(text)

    def chunk(self, session_id: str, message_id: str, content: str) -> None:
        self.push(session_id, "new-message", {"id": message_id, "content": content})

    def end(self, session_id: str) -> None:
        self.stream(session_id).put_nowait(None)

    def requests_to(self, fragment: str) -> list[httpx.Request]:
        return [r for r in self.requests if fragment in r.url.path]

    async def _stream_body(self, session_id: str) -> AsyncIterator[bytes]:
        queue = self.stream(session_id)
        while True:
            frame = await queue.get()
            if frame is None:
                return
            yield frame.encode()

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/api")

        if path.startswith("/chat/sse/"):
            if self.stream_status != 200:
                return httpx.Response(self.stream_status, text="unavailable")
            session_id = path.rsplit("/", 1)[1]
            return httpx.Response(
                200,
                headers={"content-type": "text/event-stream"},
                content=self._stream_body(session_id),
            )

        if path.startswith("/chat/message/"):
            if self.send_gate is not None:
                await self.send_gate.wait()
            if self.send_error is not None:
                raise self.send_error
            return httpx.Response(
                200, json=envelope(status=self.send_status, message=self.send_message)
            )

        if path.startswith("/message/history/"):
            if self.history_gate is not None:
                await self.history_gate.wait()
            return httpx.Response(200, json=envelope(self.history, status=self.history_status))

        if path == "/chat/create":
            self.created += 1
            return httpx.Response(200, json=envelope({"session_id": f"session-{self.created}"}))

        if path == "/session/history":
            return httpx.Response(200, json=envelope(self.sessions))

        if path.startswith("/session/") and request.method == "DELETE":
            session_id = path.rsplit("/", 1)[1]
            self.sessions = [s for s in self.sessions if s["session_id"] != session_id]
            return httpx.Response(200, json=envelope())

        if path == "/all/document/category":
            return httpx.Response(200, json=envelope(self.categories))

        return httpx.Response(404, json=envelope(status=404, message="Not found"))
