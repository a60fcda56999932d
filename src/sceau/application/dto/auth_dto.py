"""
Authentication Data Transfer Objects - Application Layer.

Results handed from use cases to the presentation layer.
"""

from dataclasses import dataclass
from datetime import datetime

from sceau.domain.entities.verified_identity import VerifiedIdentity


@dataclass
class IssuedChallenge:
    """Challenge returned to the client for signing."""

    message: str
    nonce: str
    expiration_time: datetime


@dataclass
class AuthenticatedSession:
    """Result of a successful sign-in: identity plus its session token."""

    identity: VerifiedIdentity
    token: str
    token_expires_at: datetime
