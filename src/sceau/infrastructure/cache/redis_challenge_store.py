"""
Redis-based challenge store.

Shares pending challenges between API workers. Each entry is a hash
{data, state, exp}; put and claim run as Lua scripts so the
check-and-mark-used step is a single atomic server-side operation.
"""

import json
from datetime import datetime
from typing import Any, List, Optional

import redis.asyncio as aioredis

from sceau.domain.clock import Clock, utc_now
from sceau.domain.entities.challenge import Challenge, ChallengeState
from sceau.domain.exceptions import (
    ChallengeAlreadyUsedError,
    ChallengeExpiredError,
    ChallengeNotFoundError,
)
from sceau.domain.services.i_challenge_store import IChallengeStore
from sceau.domain.value_objects.wallet_address import WalletAddress

PUT_SCRIPT = """
if redis.call('EXISTS', KEYS[1]) == 1 then
    return 0
end
redis.call('HSET', KEYS[1], 'data', ARGV[1], 'state', ARGV[2], 'exp', ARGV[3])
redis.call('PEXPIRE', KEYS[1], ARGV[4])
return 1
"""

CLAIM_SCRIPT = """
local state = redis.call('HGET', KEYS[1], 'state')
if not state then
    return {'missing'}
end
if tonumber(redis.call('HGET', KEYS[1], 'exp')) <= tonumber(ARGV[1]) then
    return {'expired'}
end
if state == ARGV[2] then
    return {'used'}
end
redis.call('HSET', KEYS[1], 'state', ARGV[2])
return {'claimed', redis.call('HGET', KEYS[1], 'data')}
"""


def _as_text(value: Any) -> str:
    """Redis replies are bytes unless the client decodes responses."""
    return value.decode("utf-8") if isinstance(value, bytes) else value


def _epoch_ms(value: datetime) -> int:
    return int(value.timestamp() * 1000)


class RedisChallengeStore(IChallengeStore):
    """
    Redis implementation of the challenge store.

    Keys: {prefix}{network}:{address}:{nonce}. Entries are retained
    past expiration so late attempts report EXPIRED rather than NOT_FOUND.
    """

    def __init__(
        self,
        redis_client: aioredis.Redis,
        key_prefix: str = "sceau:challenge:",
        clock: Clock = utc_now,
    ):
        """
        Initialize Redis challenge store.

        Args:
            redis_client: Connected async Redis client
            key_prefix: Namespace for challenge keys
            clock: Time source for expiry checks
        """
        self.redis = redis_client
        self.key_prefix = key_prefix
        self.clock = clock

    def _key(self, key: WalletAddress, nonce: str) -> str:
        return f"{self.key_prefix}{key.key()}:{nonce}"

    async def put(self, key: WalletAddress, challenge: Challenge, ttl: float) -> bool:
        """Store a pending challenge; False if nonce already live for key."""
        stored = await self.redis.eval(
            PUT_SCRIPT,
            1,
            self._key(key, challenge.nonce),
            json.dumps(challenge.to_dict()),
            ChallengeState.PENDING.value,
            _epoch_ms(challenge.expiration_time),
            max(1, int(ttl * 1000)),
        )
        return int(stored) == 1

    async def claim_and_consume(self, key: WalletAddress, nonce: str) -> Challenge:
        """Atomically claim a pending challenge and mark it used."""
        reply: Optional[List[Any]] = await self.redis.eval(
            CLAIM_SCRIPT,
            1,
            self._key(key, nonce),
            _epoch_ms(self.clock()),
            ChallengeState.USED.value,
        )
        status = _as_text(reply[0]) if reply else "missing"

        if status == "missing":
            raise ChallengeNotFoundError()
        if status == "expired":
            raise ChallengeExpiredError()
        if status == "used":
            raise ChallengeAlreadyUsedError()

        return Challenge.from_dict(json.loads(_as_text(reply[1])))
