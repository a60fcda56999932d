"""
SessionClaims entity - decoded content of a session token.
"""

from dataclasses import dataclass
from datetime import datetime

from sceau.domain.entities.verified_identity import VerifiedIdentity


@dataclass(frozen=True)
class SessionClaims:
    """
    Verified identity plus the token's own metadata.

    token_id is random per token and keys the revocation denylist.
    """

    token_id: str
    identity: VerifiedIdentity
    issued_at: datetime
    expires_at: datetime

    def remaining_seconds(self, now: datetime) -> float:
        """Seconds until the token expires (0 when expired)."""
        return max(0.0, (self.expires_at - now).total_seconds())
