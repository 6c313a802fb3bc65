"""Pytest fixtures and shared test configuration.

Provides reusable fixtures for unit and integration tests.

Fixtures:
    - config: Client configuration pointing at the test backend
    - backend: Scripted in-memory backend answering a MockTransport
    - http_client: HTTPX client routed to the scripted backend
    - chat_client: ChatSessionClient wired to the scripted backend
    - mock_session_id: Consistent session ID for tests
"""

from collections.abc import AsyncGenerator

import httpx
import pytest

from src.client.backend import BackendAPI
from src.client.config import ClientConfig
from src.client.session_client import ChatSessionClient
from tests.helpers import BASE_URL, ScriptedBackend


@pytest.fixture
def mock_session_id() -> str:
    """Generate consistent session ID for testing.

    Returns:
        Predictable session ID for test assertions.
    """
    return "test-session-12345"


@pytest.fixture
def config() -> ClientConfig:
    """Return configuration targeting the scripted backend."""
    return ClientConfig(api_base_url=BASE_URL, request_timeout=5.0, success_status=200)


@pytest.fixture
def backend() -> ScriptedBackend:
    return ScriptedBackend()


@pytest.fixture
async def http_client(backend: ScriptedBackend) -> AsyncGenerator[httpx.AsyncClient]:
    """Create async HTTP client routed to the scripted backend.

    Yields:
        AsyncClient backed by MockTransport.
    """
    async with httpx.AsyncClient(transport=httpx.MockTransport(backend.handler)) as client:
        yield client


@pytest.fixture
def backend_api(config: ClientConfig, http_client: httpx.AsyncClient) -> BackendAPI:
    return BackendAPI(config, http_client)


@pytest.fixture
async def chat_client(
    config: ClientConfig, http_client: httpx.AsyncClient
) -> AsyncGenerator[ChatSessionClient]:
    """Create a chat client wired to the scripted backend.

    Yields:
        ChatSessionClient, closed after the test.
    """
    client = ChatSessionClient(config=config, http=http_client)
    yield client
    await client.aclose()
