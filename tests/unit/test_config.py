"""Unit tests for ClientConfig validation and environment loading."""

from unittest.mock import patch

import pytest
from pydantic import ValidationError

from src.client.config import ClientConfig, get_client_config


class TestClientConfig:
    """Tests for ClientConfig validation."""

    def test_valid_config_with_all_fields(self) -> None:
        """Config accepts valid values for all fields."""
        config = ClientConfig(
            api_base_url="http://chat.example.com/api",
            request_timeout=10.0,
            success_status=0,
        )

        assert config.api_base_url == "http://chat.example.com/api"
        assert config.request_timeout == 10.0
        assert config.success_status == 0

    def test_config_with_default_values(self) -> None:
        """Config uses the backend defaults when the environment is empty."""
        with patch.dict("os.environ", {}, clear=True):
            config = ClientConfig()

        assert config.api_base_url == "http://localhost:3001/api"
        assert config.request_timeout == 30.0
        assert config.success_status == 200

    def test_config_strips_trailing_slash(self) -> None:
        config = ClientConfig(api_base_url="  http://chat.example.com/api/  ")

        assert config.api_base_url == "http://chat.example.com/api"

    def test_config_fails_with_empty_base_url(self) -> None:
        """Config rejects an empty base URL."""
        with pytest.raises(ValidationError) as exc_info:
            ClientConfig(api_base_url="   ")

        assert "API_BASE_URL" in str(exc_info.value)

    def test_config_fails_with_non_positive_timeout(self) -> None:
        """Config rejects a timeout of zero."""
        with pytest.raises(ValidationError) as exc_info:
            ClientConfig(request_timeout=0)

        assert "request_timeout" in str(exc_info.value).lower()


class TestGetClientConfig:
    """Tests for get_client_config factory function."""

    def test_get_config_from_environment(self) -> None:
        """get_client_config loads values from environment."""
        env = {
            "API_BASE_URL": "http://env.example.com/api",
            "REQUEST_TIMEOUT": "12.5",
            "API_SUCCESS_STATUS": "0",
        }
        with patch.dict("os.environ", env):
            config = get_client_config()

        assert config.api_base_url == "http://env.example.com/api"
        assert config.request_timeout == 12.5
        assert config.success_status == 0

    def test_get_config_fails_with_blank_env_var(self) -> None:
        with (
            patch.dict("os.environ", {"API_BASE_URL": ""}),
            pytest.raises(ValidationError),
        ):
            get_client_config()

    def test_env_base_url_is_normalised(self) -> None:
        """Values read from the environment go through the same validators."""
        with patch.dict("os.environ", {"API_BASE_URL": "http://env.example.com/api/"}):
            config = get_client_config()

        assert config.api_base_url == "http://env.example.com/api"

    @pytest.mark.parametrize("timeout", ["-1", "0", "soon"])
    def test_get_config_rejects_bad_env_timeout(self, timeout: str) -> None:
        with (
            patch.dict("os.environ", {"REQUEST_TIMEOUT": timeout}),
            pytest.raises(ValidationError),
        ):
            get_client_config()
