"""API key authentication.

A valid key grants shell access to this host, so keys are compared in
constant time and only ever logged as a short SHA-256 fingerprint.
"""

import hashlib
import logging
import secrets
from collections.abc import Iterable
from typing import Any

from terminal_mcp.middleware.base import MCPMiddleware

logger = logging.getLogger(__name__)


def key_fingerprint(key: str) -> str:
    """First 8 hex digits of the key's SHA-256, safe to log."""
    return hashlib.sha256(key.encode()).hexdigest()[:8]


def matches_any(provided: str, valid_keys: Iterable[str]) -> bool:
    """Compare ``provided`` against every key without short-circuiting."""
    provided_bytes = provided.encode()
    matched = False
    for key in valid_keys:
        matched |= secrets.compare_digest(provided_bytes, key.encode())
    return matched


class APIKeyMiddleware(MCPMiddleware):
    """Requires ``context["api_key"]`` to match one of the configured keys.

    Passes everything through when disabled or when no keys are configured.
    """

    def __init__(self, api_keys: list[str], enabled: bool = True) -> None:
        self.api_keys = list(api_keys)
        self.enabled = enabled

    @property
    def active(self) -> bool:
        return self.enabled and bool(self.api_keys)

    async def process_request(
        self,
        method: str,
        params: dict[str, Any],
        context: dict[str, Any],
    ) -> dict[str, Any]:
        if not self.active:
            return context

        client = context.get("client_ip", "unknown")
        provided = context.get("api_key")

        if not provided:
            logger.info("Rejected request without API key from %s", client)
            raise PermissionError("Missing API key")

        if not matches_any(provided, self.api_keys):
            logger.warning(
                "Rejected invalid API key (fingerprint %s) from %s",
                key_fingerprint(provided),
                client,
            )
            raise PermissionError("Invalid API key")

        return context
