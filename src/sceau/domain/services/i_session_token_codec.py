"""
Session token codec service interface.
"""

from abc import ABC, abstractmethod

from sceau.domain.entities.session_claims import SessionClaims
from sceau.domain.entities.verified_identity import VerifiedIdentity


class ISessionTokenCodec(ABC):
    """
    Encrypts verified identities into bearer tokens and back.

    The token is the session: the server keeps no per-session row.
    """

    @abstractmethod
    def encode(self, identity: VerifiedIdentity) -> str:
        """
        Seal identity into a new token.

        Uses fresh encryption randomness on every call.
        """

    @abstractmethod
    def decode_claims(self, token: str) -> SessionClaims:
        """
        Open and validate a token.

        Raises:
            TokenCorruptError: Tampered, foreign-key or malformed token
            TokenExpiredError: Token past its own expiration
        """

    def decode(self, token: str) -> VerifiedIdentity:
        """Open a token and return only the identity claims."""
        return self.decode_claims(token).identity
