"""
Domain entities.
"""

from sceau.domain.entities.challenge import Challenge, ChallengeState
from sceau.domain.entities.session_claims import SessionClaims
from sceau.domain.entities.verified_identity import (
    VerifiedIdentity,
    derive_profile_id,
)

__all__ = [
    "Challenge",
    "ChallengeState",
    "SessionClaims",
    "VerifiedIdentity",
    "derive_profile_id",
]
