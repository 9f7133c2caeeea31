"""Per-client rate limiting.

Each client gets a token bucket that holds up to ``burst`` requests and
refills at ``per_minute / 60`` tokens per second. HTTP requests are keyed by
client IP; contexts without one share a single local bucket.
"""

import logging
import time
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Any

from terminal_mcp.middleware.base import MCPMiddleware

logger = logging.getLogger(__name__)

LOCAL_CLIENT = "local"


class RateLimitError(PermissionError):
    """Client exceeded its request budget."""

    def __init__(self, retry_after: float) -> None:
        self.retry_after = retry_after
        super().__init__(f"Rate limit exceeded. Retry after {retry_after:.1f} seconds.")


@dataclass
class TokenBucket:
    """Refilling request budget for one client."""

    capacity: int
    refill_rate: float  # tokens per second
    tokens: float = field(init=False)
    updated_at: float = field(init=False)

    def __post_init__(self) -> None:
        self.tokens = float(self.capacity)
        self.updated_at = time.monotonic()

    def _refill(self) -> None:
        now = time.monotonic()
        earned = (now - self.updated_at) * self.refill_rate
        self.tokens = min(float(self.capacity), self.tokens + earned)
        self.updated_at = now

    def try_acquire(self) -> bool:
        """Take one token if available."""
        self._refill()
        if self.tokens < 1.0:
            return False
        self.tokens -= 1.0
        return True

    def retry_after(self) -> float:
        """Seconds until the next token is available."""
        return max(0.0, (1.0 - self.tokens) / self.refill_rate)


class RateLimitMiddleware(MCPMiddleware):
    """Rejects clients that exceed their token bucket with RateLimitError."""

    def __init__(
        self,
        per_minute: int = 60,
        burst: int = 10,
        max_clients: int = 10_000,
    ) -> None:
        """Initialize the limiter.

        Args:
            per_minute: Sustained requests per minute per client
            burst: Bucket capacity
            max_clients: Buckets kept before the least recently seen is dropped

        Raises:
            ValueError: If any limit is not positive
        """
        if per_minute <= 0 or burst <= 0 or max_clients <= 0:
            raise ValueError(
                f"Rate limits must be positive (per_minute={per_minute}, "
                f"burst={burst}, max_clients={max_clients})"
            )
        self.per_minute = per_minute
        self.burst = burst
        self.max_clients = max_clients
        self._buckets: OrderedDict[str, TokenBucket] = OrderedDict()

    @property
    def tracked_clients(self) -> int:
        return len(self._buckets)

    def _bucket_for(self, client: str) -> TokenBucket:
        bucket = self._buckets.get(client)
        if bucket is not None:
            self._buckets.move_to_end(client)
            return bucket

        if len(self._buckets) >= self.max_clients:
            self._buckets.popitem(last=False)
        bucket = TokenBucket(capacity=self.burst, refill_rate=self.per_minute / 60.0)
        self._buckets[client] = bucket
        return bucket

    async def process_request(
        self,
        method: str,
        params: dict[str, Any],
        context: dict[str, Any],
    ) -> dict[str, Any]:
        """Spend one token for the requesting client."""
        client = context.get("client_ip") or context.get("client_id") or LOCAL_CLIENT
        bucket = self._bucket_for(client)

        if not bucket.try_acquire():
            retry_after = bucket.retry_after()
            logger.warning("Rate limit hit by %s, retry in %.1fs", client, retry_after)
            raise RateLimitError(retry_after)
        return context
