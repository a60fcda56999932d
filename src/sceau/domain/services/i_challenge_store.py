"""
Challenge store service interface.
"""

from abc import ABC, abstractmethod

from sceau.domain.entities.challenge import Challenge
from sceau.domain.value_objects.wallet_address import WalletAddress


class IChallengeStore(ABC):
    """
    Abstract store for pending sign-in challenges.

    Entries are keyed by (address, network) and nonce. Each entry is
    claimable at most once; the claim is the only synchronisation point
    of the protocol and must be atomic.
    """

    @abstractmethod
    async def put(self, key: WalletAddress, challenge: Challenge, ttl: float) -> bool:
        """
        Store a pending challenge.

        Args:
            key: Wallet the challenge was issued for
            challenge: Challenge to store
            ttl: Seconds the entry stays physically retained

        Returns:
            True if stored, False if the nonce is already live for key
        """

    @abstractmethod
    async def claim_and_consume(self, key: WalletAddress, nonce: str) -> Challenge:
        """
        Atomically claim a pending challenge and mark it used.

        Exactly one of any number of concurrent callers presenting the same
        (key, nonce) succeeds. The entry is consumed before returning, even
        if the caller later rejects the signature.

        Args:
            key: Wallet claiming the challenge
            nonce: Nonce extracted from the signed message

        Returns:
            The stored challenge

        Raises:
            ChallengeNotFoundError: No entry for (key, nonce)
            ChallengeExpiredError: Entry past its expiration time
            ChallengeAlreadyUsedError: Entry already consumed
        """
