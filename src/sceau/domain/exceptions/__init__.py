"""
Domain exceptions package.
"""

from sceau.domain.exceptions.base import (
    ConfigError,
    DependencyUnavailableError,
    SceauException,
)
from sceau.domain.exceptions.challenge import (
    ChallengeAlreadyUsedError,
    ChallengeError,
    ChallengeExpiredError,
    ChallengeNotFoundError,
    InvalidAddressError,
    UnsupportedNetworkError,
)
from sceau.domain.exceptions.token import (
    TokenCorruptError,
    TokenError,
    TokenExpiredError,
    TokenRevokedError,
)
from sceau.domain.exceptions.verification import (
    InvalidSignatureError,
    MalformedMessageError,
    MalformedSignatureError,
    TamperedMessageError,
    VerificationError,
)

__all__ = [
    # Base
    "SceauException",
    "ConfigError",
    "DependencyUnavailableError",
    # Challenge
    "InvalidAddressError",
    "UnsupportedNetworkError",
    "ChallengeError",
    "ChallengeNotFoundError",
    "ChallengeAlreadyUsedError",
    "ChallengeExpiredError",
    # Verification
    "VerificationError",
    "MalformedMessageError",
    "TamperedMessageError",
    "MalformedSignatureError",
    "InvalidSignatureError",
    # Token
    "TokenError",
    "TokenCorruptError",
    "TokenExpiredError",
    "TokenRevokedError",
]
