"""
Tests for the authentication smoke test
"""

import pytest
from unittest.mock import MagicMock, patch

from aiqlink.integration import (
    AIQAuthClient,
    AuthenticationRejected,
    Credentials,
    MalformedResponse,
    smoketest,
)
from aiqlink.integration.smoketest import run_smoke_test


@pytest.fixture
def configured():
    """Patch a complete configuration"""
    with patch.object(smoketest.Config, 'AIQ_BASE_URL', 'https://aiq.example.com/token'), \
            patch.object(smoketest.Config, 'AIQ_ORG_NAME', 'acme'), \
            patch.object(smoketest.Config, 'AIQ_USERNAME', 'alice'), \
            patch.object(smoketest.Config, 'AIQ_PASSWORD', 's3cret'), \
            patch.object(smoketest.Config, 'AIQ_TIMEOUT', None), \
            patch.object(smoketest.Config, 'AIQ_MAX_RESPONSE_BYTES', None):
        yield


class TestSmokeTest:
    """Test smoke test functionality"""

    def test_smoke_test_success(self, configured, capsys):
        """Test a full successful run"""
        client = MagicMock(spec=AIQAuthClient)
        client.discover_token_url.return_value = "https://svc/token"
        client.exchange_credentials.return_value = "abcdefghijklmnop"

        results = run_smoke_test(client=client)

        assert results["success"] is True
        assert results["steps"]["config"]["success"] is True
        assert results["steps"]["discovery"]["token_endpoint"] == "https://svc/token"
        assert results["steps"]["token_exchange"]["has_token"] is True

        client.discover_token_url.assert_called_once_with('https://aiq.example.com/token', 'acme')
        token_url, credentials = client.exchange_credentials.call_args[0]
        assert token_url == "https://svc/token"
        assert credentials == Credentials('alice', 's3cret')

        # Only a preview of the token is printed
        out = capsys.readouterr().out
        assert "abcdefghijklmnop" not in out
        assert "abcdefghij..." in out

    def test_smoke_test_missing_config(self):
        """Test that missing configuration stops the run"""
        client = MagicMock(spec=AIQAuthClient)

        with patch.object(smoketest.Config, 'AIQ_BASE_URL', ''):
            results = run_smoke_test(client=client)

        assert results["success"] is False
        assert results["steps"]["config"]["success"] is False
        assert "AIQ_BASE_URL" in results["error"]
        client.discover_token_url.assert_not_called()

    def test_smoke_test_discovery_failure(self, configured):
        """Test that a discovery failure is recorded"""
        client = MagicMock(spec=AIQAuthClient)
        client.discover_token_url.side_effect = MalformedResponse("Field not found in the response: links.token")

        results = run_smoke_test(client=client)

        assert results["success"] is False
        assert results["steps"]["discovery"]["success"] is False
        assert "links.token" in results["error"]
        client.exchange_credentials.assert_not_called()

    def test_smoke_test_exchange_failure(self, configured):
        """Test that a rejected exchange is recorded"""
        client = MagicMock(spec=AIQAuthClient)
        client.discover_token_url.return_value = "https://svc/token"
        client.exchange_credentials.side_effect = AuthenticationRejected(400, "invalid_grant")

        results = run_smoke_test(client=client)

        assert results["success"] is False
        assert results["steps"]["discovery"]["success"] is True
        assert results["steps"]["token_exchange"]["success"] is False
        assert "invalid_grant" in results["error"]

    def test_smoke_test_builds_client_from_config(self, configured):
        """Test that the default client uses the configured transport settings"""
        with patch.object(smoketest, 'AIQAuthClient') as mock_client_cls, \
                patch.object(smoketest, 'HttpExecutor') as mock_executor_cls:
            client = mock_client_cls.return_value
            client.discover_token_url.return_value = "https://svc/token"
            client.exchange_credentials.return_value = "short"

            results = run_smoke_test()

        assert results["success"] is True
        mock_executor_cls.assert_called_once_with(timeout=None, max_response_bytes=None)
        executor = mock_executor_cls.return_value
        mock_client_cls.assert_called_once_with(executor.__enter__.return_value)
        executor.__exit__.assert_called_once()

    def test_smoke_test_closes_executor_on_failure(self, configured):
        """Test that the default executor is closed when a step fails"""
        with patch.object(smoketest, 'AIQAuthClient') as mock_client_cls, \
                patch.object(smoketest, 'HttpExecutor') as mock_executor_cls:
            mock_client_cls.return_value.discover_token_url.side_effect = \
                AuthenticationRejected(401, "Unauthorized")

            results = run_smoke_test()

        assert results["success"] is False
        mock_executor_cls.return_value.__exit__.assert_called_once()


class TestSmokeTestMain:
    """Test the smoke test entry point"""

    def test_main_exit_code(self):
        """Test that main exits with the run status"""
        with patch.object(smoketest.sys, 'argv', ['smoketest']), \
                patch.object(smoketest, 'run_smoke_test', return_value={"success": False}):
            with pytest.raises(SystemExit) as exc_info:
                smoketest.main()

        assert exc_info.value.code == 1

    def test_main_help(self, capsys):
        """Test the help output"""
        with patch.object(smoketest.sys, 'argv', ['smoketest', '--help']):
            with pytest.raises(SystemExit) as exc_info:
                smoketest.main()

        assert exc_info.value.code == 0
        assert "AIQ_BASE_URL" in capsys.readouterr().out
