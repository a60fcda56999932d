"""
VerifiedIdentity entity - wallet ownership proven by a signature.
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID, uuid5

from sceau.domain.clock import normalize_timestamp
from sceau.domain.entities.challenge import Challenge

# Fixed namespace so profile ids are stable across deployments
PROFILE_NAMESPACE = UUID("6f1c2a4e-8d3b-5a7f-9c0e-2b4d6f8a1c3e")


def derive_profile_id(address: str, network: str) -> str:
    """Deterministic profile identifier for an (address, network) pair."""
    return str(uuid5(PROFILE_NAMESPACE, f"{network}:{address}"))


@dataclass(frozen=True)
class VerifiedIdentity:
    """
    Identity claims emitted after a successful signature verification.

    Build through from_challenge() (verifier) or from_claims() (token
    decode); profile_id is always derived, never supplied.
    """

    address: str
    network: str
    issued_at: datetime
    expiration_time: datetime
    profile_id: str

    @classmethod
    def from_challenge(cls, challenge: Challenge) -> "VerifiedIdentity":
        """Identity for a consumed, verified challenge."""
        return cls(
            address=challenge.address,
            network=challenge.network,
            issued_at=challenge.issued_at,
            expiration_time=challenge.expiration_time,
            profile_id=derive_profile_id(challenge.address, challenge.network),
        )

    @classmethod
    def from_claims(
        cls,
        address: str,
        network: str,
        issued_at: datetime,
        expiration_time: datetime,
    ) -> "VerifiedIdentity":
        """Identity rebuilt from decoded session token claims."""
        return cls(
            address=address,
            network=network,
            issued_at=normalize_timestamp(issued_at),
            expiration_time=normalize_timestamp(expiration_time),
            profile_id=derive_profile_id(address, network),
        )

