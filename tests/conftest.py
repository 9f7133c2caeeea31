"""Shared fixtures for Terminal MCP tests."""

from collections.abc import Iterator

import pytest

from terminal_mcp.services import reset_state


@pytest.fixture(autouse=True)
def _fresh_state() -> Iterator[None]:
    """Give every test its own config and session registry."""
    reset_state()
    yield
    reset_state()
