"""
Challenge and revocation storage.
"""

from sceau.infrastructure.cache.in_memory_challenge_store import (
    InMemoryChallengeStore,
)
from sceau.infrastructure.cache.redis_challenge_store import RedisChallengeStore
from sceau.infrastructure.cache.token_denylist import (
    InMemoryTokenDenylist,
    RedisTokenDenylist,
)

__all__ = [
    "InMemoryChallengeStore",
    "RedisChallengeStore",
    "InMemoryTokenDenylist",
    "RedisTokenDenylist",
]
