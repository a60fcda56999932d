"""
Session token denylists (logout before expiry).
"""

import heapq
import math
import threading
from datetime import datetime, timedelta
from typing import Dict, List, Tuple

import redis.asyncio as aioredis

from sceau.domain.clock import Clock, utc_now
from sceau.domain.services.i_token_denylist import ITokenDenylist


class InMemoryTokenDenylist(ITokenDenylist):
    """
    Process-local denylist.

    Entries expire with the token they revoke; every revoke drops the
    ones already past their deadline, so size tracks live revocations.
    """

    def __init__(self, clock: Clock = utc_now):
        """
        Initialize denylist.

        Args:
            clock: Time source for entry expiry
        """
        self.clock = clock
        self._revoked: Dict[str, datetime] = {}
        self._expiry_heap: List[Tuple[datetime, str]] = []
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._revoked)

    def _purge(self, now: datetime) -> None:
        heap = self._expiry_heap
        while heap and heap[0][0] <= now:
            until, token_id = heapq.heappop(heap)
            if self._revoked.get(token_id) == until:
                del self._revoked[token_id]

    async def revoke(self, token_id: str, ttl_seconds: float) -> None:
        """
        Revoke a token for its remaining lifetime.

        Args:
            token_id: Token identifier (jti)
            ttl_seconds: Seconds until the token expires on its own;
                nothing is stored when already expired
        """
        if ttl_seconds <= 0:
            return
        now = self.clock()
        until = now + timedelta(seconds=ttl_seconds)
        with self._lock:
            self._purge(now)
            self._revoked[token_id] = until
            heapq.heappush(self._expiry_heap, (until, token_id))

    async def is_revoked(self, token_id: str) -> bool:
        """
        Check whether a token has been revoked.

        Args:
            token_id: Token identifier (jti)

        Returns:
            True while the revocation is live
        """
        now = self.clock()
        with self._lock:
            until = self._revoked.get(token_id)
            return until is not None and until > now


class RedisTokenDenylist(ITokenDenylist):
    """Shared denylist; entries expire with the token they revoke."""

    def __init__(
        self,
        redis_client: aioredis.Redis,
        key_prefix: str = "sceau:revoked:",
    ):
        """
        Initialize denylist.

        Args:
            redis_client: Async Redis client
            key_prefix: Prefix for revocation keys
        """
        self.redis = redis_client
        self.key_prefix = key_prefix

    async def revoke(self, token_id: str, ttl_seconds: float) -> None:
        """Store a revocation key that Redis expires with the token."""
        if ttl_seconds <= 0:
            return
        await self.redis.setex(
            f"{self.key_prefix}{token_id}", max(1, math.ceil(ttl_seconds)), "1"
        )

    async def is_revoked(self, token_id: str) -> bool:
        """Check for a live revocation key."""
        exists = await self.redis.exists(f"{self.key_prefix}{token_id}")
        return bool(exists)
