"""
Token denylist service interface.
"""

from abc import ABC, abstractmethod


class ITokenDenylist(ABC):
    """
    Revoked session token identifiers.

    Entries only need to live as long as the token they revoke.
    """

    @abstractmethod
    async def revoke(self, token_id: str, ttl_seconds: float) -> None:
        """Revoke token id for the given remaining lifetime."""

    @abstractmethod
    async def is_revoked(self, token_id: str) -> bool:
        """Check whether token id has been revoked."""
