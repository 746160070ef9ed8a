"""Unit tests for job_queue_client.config module."""

import os
from unittest.mock import patch

import pytest

from job_queue_client import Client
from job_queue_client.config import (
    DEFAULT_BACKOFF_MAX_TRIES,
    DEFAULT_USER_AGENT,
    ClientConfig,
    get_settings,
)
from job_queue_client.exceptions import ClientError


class TestClientConfig:
    def test_defaults(self):
        config = ClientConfig.create(base_url="http://example.com", token="testToken")

        assert config.backoff_max_tries == DEFAULT_BACKOFF_MAX_TRIES == 3
        assert config.user_agent == DEFAULT_USER_AGENT == "Job Queue Python Client"
        assert config.transport is None
        assert config.logger is None

    def test_empty_optional_values_fall_back_to_defaults(self):
        config = ClientConfig.create(
            base_url="https://queue.keboola.com",
            token="testToken",
            backoff_max_tries=None,
            user_agent="",
        )

        assert config.backoff_max_tries == 3
        assert config.user_agent == "Job Queue Python Client"

    def test_backoff_bounds_are_inclusive(self):
        for value in (0, 100):
            config = ClientConfig.create(
                base_url="http://example.com", token="t", backoff_max_tries=value
            )
            assert config.backoff_max_tries == value

    @pytest.mark.parametrize(
        "value, message",
        [
            ("abc", 'Value "abc" is invalid: Input should be a valid integer'),
            (-1, 'Value "-1" is invalid: Input should be greater than or equal to 0'),
            (101, 'Value "101" is invalid: Input should be less than or equal to 100'),
        ],
    )
    def test_invalid_backoff(self, value, message):
        with pytest.raises(ClientError) as exc_info:
            ClientConfig.create(
                base_url="http://example.com", token="t", backoff_max_tries=value
            )

        assert str(exc_info.value).startswith(
            "Invalid parameters when creating client: "
        )
        assert message in str(exc_info.value)

    def test_blank_token(self):
        with pytest.raises(ClientError) as exc_info:
            ClientConfig.create(base_url="http://example.com", token="")

        assert str(exc_info.value) == (
            "Invalid parameters when creating client: "
            'Value "" is invalid: This value should not be blank.\n'
        )

    @pytest.mark.parametrize("url", ["invalid url", "example.com", "ftp://example.com"])
    def test_invalid_url(self, url):
        with pytest.raises(ClientError) as exc_info:
            ClientConfig.create(base_url=url, token="t")

        assert str(exc_info.value) == (
            "Invalid parameters when creating client: "
            f'Value "{url}" is invalid: This value is not a valid URL.\n'
        )

    def test_all_violations_reported(self):
        with pytest.raises(ClientError) as exc_info:
            ClientConfig.create(base_url="invalid url", token="", backoff_max_tries=-1)

        message = str(exc_info.value)
        assert message.count(" is invalid: ") == 3
        assert message.endswith("\n")
        assert "This value is not a valid URL." in message
        assert "This value should not be blank." in message

    def test_config_is_frozen(self):
        config = ClientConfig.create(base_url="http://example.com", token="t")
        with pytest.raises(Exception):
            config.token = "other"

    def test_client_constructor_validates(self):
        with pytest.raises(ClientError, match="This value is not a valid URL."):
            Client("invalid url", "testToken")


class TestSettings:
    def test_settings_from_environment(self):
        with patch.dict(
            os.environ,
            {
                "JOB_QUEUE_URL": "https://queue.keboola.com",
                "JOB_QUEUE_TOKEN": "env-token",
                "JOB_QUEUE_BACKOFF_MAX_TRIES": "5",
            },
        ):
            get_settings.cache_clear()
            settings = get_settings()

            assert settings.url == "https://queue.keboola.com"
            assert settings.token == "env-token"
            assert settings.backoff_max_tries == 5
            assert settings.user_agent == "Job Queue Python Client"

        get_settings.cache_clear()

    def test_settings_are_cached(self):
        with patch.dict(os.environ, {"JOB_QUEUE_URL": "https://queue.keboola.com"}):
            get_settings.cache_clear()
            assert get_settings() is get_settings()

        get_settings.cache_clear()

    def test_client_from_config(self):
        config = ClientConfig.create(
            base_url="http://example.com", token="t", backoff_max_tries=7
        )
        with Client.from_config(config) as client:
            assert client.config == config
