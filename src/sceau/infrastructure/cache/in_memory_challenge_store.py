"""
In-memory challenge store.

Single-process store for development, tests and single-instance
deployments. Use RedisChallengeStore when running several workers.
"""

import heapq
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Dict, List, Tuple

from sceau.domain.clock import Clock, utc_now
from sceau.domain.entities.challenge import Challenge, ChallengeState
from sceau.domain.exceptions import (
    ChallengeAlreadyUsedError,
    ChallengeExpiredError,
    ChallengeNotFoundError,
)
from sceau.domain.services.i_challenge_store import IChallengeStore
from sceau.domain.value_objects.wallet_address import WalletAddress


@dataclass
class _Entry:
    challenge: Challenge
    state: ChallengeState
    retain_until: datetime


class InMemoryChallengeStore(IChallengeStore):
    """
    Dictionary-backed challenge store with lazy deletion.

    The claim is a check-and-set under a lock, so concurrent verify
    attempts on one nonce see exactly one winner.
    """

    def __init__(self, clock: Clock = utc_now):
        """
        Initialize store.

        Args:
            clock: Time source for expiry and retention
        """
        self.clock = clock
        self._entries: Dict[Tuple[str, str], _Entry] = {}
        # (retain_until, key) min-heap; purge pops only stale heads
        self._expiry_heap: List[Tuple[datetime, Tuple[str, str]]] = []
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._entries)

    def _purge(self, now: datetime) -> None:
        """Drop entries past their retention window (lock held)."""
        heap = self._expiry_heap
        while heap and heap[0][0] <= now:
            retain_until, entry_key = heapq.heappop(heap)
            entry = self._entries.get(entry_key)
            if entry is not None and entry.retain_until == retain_until:
                del self._entries[entry_key]

    async def put(self, key: WalletAddress, challenge: Challenge, ttl: float) -> bool:
        """Store a pending challenge; False if nonce already live for key."""
        now = self.clock()
        entry_key = (key.key(), challenge.nonce)

        with self._lock:
            self._purge(now)
            if entry_key in self._entries:
                return False
            retain_until = now + timedelta(seconds=ttl)
            self._entries[entry_key] = _Entry(
                challenge=challenge,
                state=ChallengeState.PENDING,
                retain_until=retain_until,
            )
            heapq.heappush(self._expiry_heap, (retain_until, entry_key))
        return True

    async def claim_and_consume(self, key: WalletAddress, nonce: str) -> Challenge:
        """Atomically claim a pending challenge and mark it used."""
        now = self.clock()
        entry_key = (key.key(), nonce)

        with self._lock:
            entry = self._entries.get(entry_key)
            if entry is None or entry.retain_until <= now:
                raise ChallengeNotFoundError()

            if entry.challenge.is_expired(now):
                raise ChallengeExpiredError()

            if entry.state is ChallengeState.USED:
                raise ChallengeAlreadyUsedError()

            entry.state = ChallengeState.USED
            return entry.challenge
