"""Tests for the terminal session registry."""

from collections.abc import Iterator
from unittest.mock import AsyncMock, patch

import pytest

from terminal_mcp.services.registry import SessionRegistry
from terminal_mcp.services.session import TerminalSession


@pytest.fixture(autouse=True)
def no_shell() -> Iterator[AsyncMock]:
    """Skip the initial pwd so registry tests never spawn a shell."""
    with patch.object(TerminalSession, "initialize", AsyncMock()) as mock_init:
        yield mock_init


def test_rejects_non_positive_capacity() -> None:
    with pytest.raises(ValueError, match="max_sessions must be > 0"):
        SessionRegistry(max_sessions=0)


@pytest.mark.asyncio
async def test_get_or_create_reuses_session(no_shell: AsyncMock) -> None:
    """The same name returns the same session and initializes it once."""
    registry = SessionRegistry()

    first = await registry.get_or_create("default")
    second = await registry.get_or_create("default")

    assert first is second
    assert registry.size == 1
    no_shell.assert_awaited_once()


@pytest.mark.asyncio
async def test_new_sessions_get_registry_settings() -> None:
    registry = SessionRegistry(max_history=5, aliases={"k": "kubectl"})

    session = await registry.get_or_create("ops")

    assert session.aliases == {"k": "kubectl"}
    assert session.name == "ops"


@pytest.mark.asyncio
async def test_invalid_name_raises() -> None:
    registry = SessionRegistry()

    with pytest.raises(ValueError, match="Invalid session name"):
        await registry.get_or_create("../etc")

    assert registry.size == 0


@pytest.mark.asyncio
async def test_evicts_least_recently_used() -> None:
    registry = SessionRegistry(max_sessions=2)

    await registry.get_or_create("a")
    await registry.get_or_create("b")
    registry.get("a")  # touch a, making b the oldest
    await registry.get_or_create("c")

    assert registry.names == ["a", "c"]
    assert registry.get("b") is None


@pytest.mark.asyncio
async def test_remove_and_clear() -> None:
    registry = SessionRegistry()
    await registry.get_or_create("a")
    await registry.get_or_create("b")

    assert await registry.remove("a") is True
    assert await registry.remove("a") is False
    assert registry.names == ["b"]

    await registry.clear()
    assert registry.size == 0
