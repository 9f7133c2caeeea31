"""Tests for API key authentication middleware.

HTTP-specific behaviour is covered in test_http_adapter.py.
"""

from unittest.mock import patch

import pytest
from starlette.middleware.base import BaseHTTPMiddleware

from terminal_mcp.middleware.auth import APIKeyMiddleware, key_fingerprint, matches_any
from terminal_mcp.middleware.base import MCPMiddleware


class TestMatchesAny:
    """Tests for key comparison."""

    def test_matches_any_configured_key(self) -> None:
        assert matches_any("key-2", ["key-1", "key-2"]) is True

    def test_rejects_prefix_and_unknown(self) -> None:
        assert matches_any("key", ["key-1"]) is False
        assert matches_any("key-3", ["key-1", "key-2"]) is False

    def test_no_keys_never_matches(self) -> None:
        assert matches_any("anything", []) is False


class TestAPIKeyMiddleware:
    """Test transport-independent authentication."""

    def test_is_transport_independent(self) -> None:
        assert issubclass(APIKeyMiddleware, MCPMiddleware)
        assert not issubclass(APIKeyMiddleware, BaseHTTPMiddleware)

    @pytest.mark.asyncio
    async def test_process_request_validates_key(self) -> None:
        middleware = APIKeyMiddleware(api_keys=["key-1", "key-2"], enabled=True)

        context = {"api_key": "key-2", "client_ip": "127.0.0.1"}
        assert await middleware.process_request("http", {}, context) == context

        with pytest.raises(PermissionError, match="Invalid API key"):
            await middleware.process_request(
                "http", {}, {"api_key": "wrong-key", "client_ip": "127.0.0.1"}
            )

        with pytest.raises(PermissionError, match="Missing API key"):
            await middleware.process_request("http", {}, {"client_ip": "127.0.0.1"})

    @pytest.mark.asyncio
    async def test_empty_header_counts_as_missing(self) -> None:
        middleware = APIKeyMiddleware(api_keys=["key-1"])

        with pytest.raises(PermissionError, match="Missing API key"):
            await middleware.process_request("http", {}, {"api_key": ""})

    @pytest.mark.asyncio
    async def test_disabled_auth_allows_all(self) -> None:
        middleware = APIKeyMiddleware(api_keys=["key-1"], enabled=False)

        assert middleware.active is False
        context = {"client_ip": "127.0.0.1"}
        assert await middleware.process_request("http", {}, context) == context

    @pytest.mark.asyncio
    async def test_no_keys_allows_all(self) -> None:
        middleware = APIKeyMiddleware(api_keys=[], enabled=True)

        assert middleware.active is False
        assert await middleware.process_request("http", {}, {}) == {}


class TestAPIKeyLoggingSecurity:
    """API keys are never logged in plaintext."""

    @pytest.mark.asyncio
    async def test_invalid_key_logged_as_fingerprint(self) -> None:
        secret_key = "super-secret-api-key-12345"
        middleware = APIKeyMiddleware(api_keys=["valid-key"], enabled=True)

        with patch("terminal_mcp.middleware.auth.logger") as mock_logger:
            with pytest.raises(PermissionError):
                await middleware.process_request(
                    "http", {}, {"api_key": secret_key, "client_ip": "192.168.1.100"}
                )

        logged = str(mock_logger.warning.call_args)
        assert secret_key not in logged
        assert key_fingerprint(secret_key) in logged
        assert "192.168.1.100" in logged

    def test_fingerprint_is_short_and_stable(self) -> None:
        digest = key_fingerprint("abc")

        assert len(digest) == 8
        assert digest == key_fingerprint("abc")
        assert digest != key_fingerprint("abd")
