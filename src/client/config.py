"""Client configuration with environment variable loading.

Pydantic-based configuration for the chat session client.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Load environment variables from .env file
load_dotenv()


class ClientConfig(BaseModel):
    """Configuration for the chat session client.

    Attributes:
        api_base_url: Base URL of the chat backend API.
        request_timeout: Timeout for request/response calls in seconds.
        success_status: Envelope status code that means success.
        send_failure_message: System message text shown when a send fails.
        stream_error_message: Error text used when an error event has no message.
        no_session_message: System message text shown when sending without a session.
    """

    # Defaults come from the environment and go through the same validation
    model_config = ConfigDict(validate_default=True)

    api_base_url: str = Field(
        default_factory=lambda: os.getenv("API_BASE_URL", "http://localhost:3001/api"),
        description="Base URL of the chat backend API",
    )
    request_timeout: float = Field(
        default_factory=lambda: os.getenv("REQUEST_TIMEOUT", "30"),
        gt=0.0,
        description="Timeout for request/response calls in seconds",
    )
    success_status: int = Field(
        default_factory=lambda: os.getenv("API_SUCCESS_STATUS", "200"),
        description="Envelope status code that signals success",
    )
    send_failure_message: str = (
        "Message failed to send. Check your network connection and try again."
    )
    stream_error_message: str = "Chat stream error"
    no_session_message: str = (
        "No active chat session. Start a new chat before sending messages."
    )

    @field_validator("api_base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Require a non-empty base URL and drop any trailing slash."""
        v = v.strip().rstrip("/")
        if not v:
            raise ValueError("API base URL required. Set API_BASE_URL in .env")
        return v


def get_client_config() -> ClientConfig:
    """Create client configuration from environment.

    Returns:
        Configured ClientConfig instance.

    Raises:
        ValueError: If the base URL is empty.
    """
    return ClientConfig()
