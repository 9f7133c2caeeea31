"""Named terminal sessions with LRU eviction.

Locking Strategy:
- `_lock`: Protects the `_sessions` OrderedDict. Held while a new session
  runs its initial ``pwd`` so two callers never create the same name twice.
- Each TerminalSession serialises its own commands.

LRU Eviction:
- OrderedDict with move_to_end() on every lookup
- The oldest session is dropped when a new one would exceed max_sessions
"""

import asyncio
import logging
from collections import OrderedDict
from collections.abc import Mapping

from terminal_mcp.services.session import TerminalSession
from terminal_mcp.utils.shell import Interpreter
from terminal_mcp.utils.validation import validate_session_name

logger = logging.getLogger(__name__)


class SessionRegistry:
    """In-memory registry of terminal sessions."""

    def __init__(
        self,
        max_sessions: int = 16,
        max_history: int = 1000,
        aliases: Mapping[str, str] | None = None,
        interpreter: Interpreter | None = None,
    ) -> None:
        """Initialize the registry.

        Args:
            max_sessions: Maximum number of live sessions (must be > 0)
            max_history: Transcript length kept per session
            aliases: Alias table handed to every new session
            interpreter: Shell override, mainly for tests

        Raises:
            ValueError: If max_sessions is not positive
        """
        if max_sessions <= 0:
            raise ValueError(f"max_sessions must be > 0, got {max_sessions}")

        self.max_sessions = max_sessions
        self.max_history = max_history
        self.aliases: Mapping[str, str] = aliases or {}
        self.interpreter = interpreter
        self._sessions: OrderedDict[str, TerminalSession] = OrderedDict()
        self._lock = asyncio.Lock()

        logger.info(
            "SessionRegistry initialized (max_sessions=%d, max_history=%d)",
            max_sessions,
            max_history,
        )

    @property
    def size(self) -> int:
        return len(self._sessions)

    @property
    def names(self) -> list[str]:
        return list(self._sessions.keys())

    def get(self, name: str) -> TerminalSession | None:
        """Look up a session without creating it."""
        session = self._sessions.get(name)
        if session is not None:
            self._sessions.move_to_end(name)
        return session

    def sessions(self) -> list[TerminalSession]:
        return list(self._sessions.values())

    async def get_or_create(self, name: str) -> TerminalSession:
        """Return the named session, creating and initializing it if needed.

        Raises:
            ValueError: If the session name is invalid
        """
        name = validate_session_name(name)

        async with self._lock:
            existing = self._sessions.get(name)
            if existing is not None:
                self._sessions.move_to_end(name)
                return existing

            while len(self._sessions) >= self.max_sessions:
                oldest, _ = self._sessions.popitem(last=False)
                logger.info(
                    "Registry at capacity (%d/%d), evicting LRU session=%s",
                    self.max_sessions,
                    self.max_sessions,
                    oldest,
                )

            logger.info("Creating terminal session=%s", name)
            session = TerminalSession(
                name,
                aliases=self.aliases,
                max_history=self.max_history,
                interpreter=self.interpreter,
            )
            await session.initialize()
            self._sessions[name] = session
            return session

    async def remove(self, name: str) -> bool:
        """Remove a session. Returns True if it existed."""
        async with self._lock:
            removed = self._sessions.pop(name, None)
        if removed is not None:
            logger.info("Removing terminal session=%s", name)
        return removed is not None

    async def clear(self) -> None:
        """Drop every session."""
        async with self._lock:
            count = len(self._sessions)
            self._sessions.clear()
        if count:
            logger.info("Cleared %d terminal session(s)", count)
