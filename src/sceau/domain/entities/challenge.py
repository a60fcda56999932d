"""
Challenge entity - server-issued sign-in message awaiting a signature.
"""

import re
from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum

from sceau.domain.clock import normalize_timestamp

NONCE_PATTERN = re.compile(r"^[A-Za-z0-9]{8,}$")


class ChallengeState(str, Enum):
    """Challenge lifecycle state inside the store."""

    PENDING = "pending"
    USED = "used"


@dataclass(frozen=True)
class Challenge:
    """
    Challenge entity - one single-use, time-bound sign-in request.

    Business rules:
    - issued_at strictly before expiration_time
    - Timestamps normalised to UTC milliseconds (exact message round-trip)
    - Statement is a single line (may be empty)
    - Single-token fields carry no whitespace
    - Nonce is alphanumeric, at least 8 characters
    """

    address: str
    network: str
    domain: str
    uri: str
    statement: str
    nonce: str
    issued_at: datetime
    expiration_time: datetime
    version: str = "1"

    def __post_init__(self):
        """Validate and normalise challenge fields."""
        for name in ("address", "network", "domain", "uri", "version"):
            value = getattr(self, name)
            if not value:
                raise ValueError(f"Challenge {name} is required")
            if any(ch.isspace() for ch in value):
                raise ValueError(f"Challenge {name} cannot contain whitespace")

        if "\n" in self.statement or "\r" in self.statement:
            raise ValueError("Challenge statement must be a single line")

        if not NONCE_PATTERN.match(self.nonce):
            raise ValueError("Challenge nonce must be alphanumeric (min 8 chars)")

        # Frozen dataclass: normalise through object.__setattr__
        object.__setattr__(self, "issued_at", normalize_timestamp(self.issued_at))
        object.__setattr__(
            self, "expiration_time", normalize_timestamp(self.expiration_time)
        )

        if self.issued_at >= self.expiration_time:
            raise ValueError("Challenge issued_at must precede expiration_time")

    def is_expired(self, now: datetime) -> bool:
        """Check if challenge is expired at given time."""
        return now >= self.expiration_time

    def ttl_seconds(self, now: datetime) -> float:
        """Remaining lifetime in seconds (0 when expired)."""
        return max(0.0, (self.expiration_time - now).total_seconds())

    def with_nonce(self, nonce: str) -> "Challenge":
        """Copy of this challenge with a different nonce."""
        return replace(self, nonce=nonce)

    def to_dict(self) -> dict:
        """Convert entity to dictionary representation."""
        return {
            "address": self.address,
            "network": self.network,
            "domain": self.domain,
            "uri": self.uri,
            "statement": self.statement,
            "nonce": self.nonce,
            "issued_at": self.issued_at.isoformat(),
            "expiration_time": self.expiration_time.isoformat(),
            "version": self.version,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Challenge":
        """Rebuild entity from to_dict() output."""
        return cls(
            address=data["address"],
            network=data["network"],
            domain=data["domain"],
            uri=data["uri"],
            statement=data["statement"],
            nonce=data["nonce"],
            issued_at=datetime.fromisoformat(data["issued_at"]),
            expiration_time=datetime.fromisoformat(data["expiration_time"]),
            version=data["version"],
        )
