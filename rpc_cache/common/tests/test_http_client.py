from unittest.mock import patch

import httpx

from rpc_cache.common.core.config import BaseAppConfig
from rpc_cache.common.core.http_client import HttpClientFactory


class TestHttpClientFactory:
    @patch("httpx.AsyncClient")
    def test_create_async_client_verify_false(self, mock_client):
        """VERIFY_SSL=False should produce client with verify=False"""
        factory = HttpClientFactory(BaseAppConfig(VERIFY_SSL=False))
        factory.create_async_client()

        mock_client.assert_called_once()
        _, kwargs = mock_client.call_args
        assert kwargs["verify"] is False
        assert kwargs["trust_env"] is False

    @patch("httpx.AsyncClient")
    def test_create_async_client_verify_true(self, mock_client):
        """VERIFY_SSL=True should produce client with verify=True"""
        factory = HttpClientFactory(BaseAppConfig(VERIFY_SSL=True))
        factory.create_async_client()

        _, kwargs = mock_client.call_args
        assert kwargs["verify"] is True

    @patch("httpx.AsyncClient")
    def test_explicit_arguments_win(self, mock_client):
        factory = HttpClientFactory(BaseAppConfig(VERIFY_SSL=True))
        limits = httpx.Limits(max_connections=5)
        factory.create_async_client(verify=False, limits=limits, timeout=3.0)

        _, kwargs = mock_client.call_args
        assert kwargs["verify"] is False
        assert kwargs["limits"] is limits
        assert kwargs["timeout"] == 3.0

    @patch("httpx.AsyncClient")
    def test_default_limits(self, mock_client):
        HttpClientFactory(BaseAppConfig()).create_async_client()

        _, kwargs = mock_client.call_args
        assert isinstance(kwargs["limits"], httpx.Limits)

    @patch("urllib3.disable_warnings")
    def test_configure_global_settings_disable_warnings(self, mock_disable):
        """VERIFY_SSL=False should trigger disable_warnings"""
        HttpClientFactory(BaseAppConfig(VERIFY_SSL=False)).configure_global_settings()

        mock_disable.assert_called_once()

    @patch("urllib3.disable_warnings")
    def test_configure_global_settings_keeps_warnings(self, mock_disable):
        HttpClientFactory(BaseAppConfig(VERIFY_SSL=True)).configure_global_settings()

        mock_disable.assert_not_called()
