"""HTTP wrapper for the chat backend's request/response endpoints.

Every endpoint answers with the ``{status, message, data}`` envelope. This
module decodes it and turns transport problems and non-success statuses into
BackendError, so callers never see raw httpx exceptions.
"""

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from src.client.config import ClientConfig
from src.client.errors import BackendError, SendFailure
from src.models.schemas import ApiResponse, ChatRequest

logger = logging.getLogger(__name__)


class BackendAPI:
    """Thin async client over the chat backend API.

    The underlying ``httpx.AsyncClient`` is shared with the push stream so a
    single connection pool (and a single injected transport in tests) serves
    both.
    """

    def __init__(self, config: ClientConfig, http: httpx.AsyncClient) -> None:
        self._config = config
        self._http = http

    @property
    def http(self) -> httpx.AsyncClient:
        return self._http

    def url(self, path: str) -> str:
        return f"{self._config.api_base_url}{path}"

    def is_success(self, response: ApiResponse) -> bool:
        return response.status == self._config.success_status

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> ApiResponse:
        """Perform a request and decode the response envelope.

        The envelope is returned as-is, whatever its status; HTTP error
        statuses still carry an envelope when the backend produced one.

        Raises:
            BackendError: On transport failure or an undecodable body.
        """
        if params:
            params = {k: v for k, v in params.items() if v is not None}
        try:
            response = await self._http.request(
                method,
                self.url(path),
                params=params or None,
                json=json,
                timeout=self._config.request_timeout,
            )
        except httpx.HTTPError as e:
            logger.warning(f"{method} {path} failed: {e}")
            raise BackendError(f"Connection failed: {e}") from e

        try:
            return ApiResponse.model_validate_json(response.content)
        except ValidationError as e:
            logger.warning(f"{method} {path} returned an unreadable body (HTTP {response.status_code})")
            raise BackendError(
                f"HTTP {response.status_code}", status=response.status_code
            ) from e

    async def call(self, method: str, path: str, **kwargs: Any) -> Any:
        """Perform a request and return its ``data`` on success.

        Raises:
            BackendError: On transport failure or a non-success status.
        """
        response = await self.request(method, path, **kwargs)
        if not self.is_success(response):
            raise BackendError(
                response.message or f"Request failed with status {response.status}",
                status=response.status,
            )
        return response.data

    async def send_message(self, session_id: str, text: str) -> None:
        """Post a user message to a session.

        Success only means the backend accepted the message; the reply
        arrives through the push stream.

        Raises:
            SendFailure: On transport failure or a non-success status.
        """
        payload = ChatRequest(message=text)
        try:
            response = await self.request(
                "POST", f"/chat/message/{session_id}", json=payload.model_dump()
            )
        except BackendError as e:
            raise SendFailure(e.message, status=e.status) from e

        if not self.is_success(response):
            raise SendFailure(
                response.message or f"Send failed with status {response.status}",
                status=response.status,
            )

    async def get_message_history(self, session_id: str) -> list[Any]:
        data = await self.call("GET", f"/message/history/{session_id}")
        return list(data or [])
